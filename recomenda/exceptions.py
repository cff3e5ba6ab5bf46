"""Exception types raised by Recomenda."""


class RecomendaError(Exception):
    """Base class for all Recomenda errors."""


class UnknownCategoryError(RecomendaError, ValueError):
    """Raised for a category identifier outside the supported set."""

    def __init__(self, category: str) -> None:
        super().__init__(f"Unknown category: {category!r}")
        self.category = category


class AuthError(RecomendaError):
    """Sign-up or sign-in was rejected."""


class StoreError(RecomendaError):
    """Invalid data passed to the persistence store."""
