"""Recomenda: media recommendations across six content catalogs."""

__version__ = "0.1.0"
