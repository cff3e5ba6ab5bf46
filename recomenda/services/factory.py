"""Select the catalog adapter for a content category."""

from __future__ import annotations

from typing import Dict, Type

from ..exceptions import UnknownCategoryError
from .anime import AnimeAdapter
from .base import CatalogAdapter
from .books import BookAdapter
from .games import GameAdapter
from .movies import MovieAdapter
from .music import MusicAdapter
from .series import SeriesAdapter

ADAPTERS: Dict[str, Type[CatalogAdapter]] = {
    "movies": MovieAdapter,
    "series": SeriesAdapter,
    "anime": AnimeAdapter,
    "books": BookAdapter,
    "games": GameAdapter,
    "music": MusicAdapter,
}


def create_adapter(category: str) -> CatalogAdapter:
    """Return a new adapter for ``category``, configured from the environment.

    :raises UnknownCategoryError: if ``category`` is not a supported category.
    """
    try:
        adapter_cls = ADAPTERS[category]
    except KeyError:
        raise UnknownCategoryError(category) from None
    return adapter_cls.from_env()
