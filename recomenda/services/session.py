"""Recommendation session bound to the currently selected category."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..models import Recommendation
from .base import DEFAULT_LIMIT, CatalogAdapter
from .factory import create_adapter


class RecommendationSession:
    """Forward recommendation calls to whichever adapter is active.

    Lets the caller switch category with :meth:`set_active` without tracking
    which adapter serves it.
    """

    def __init__(self, adapter: CatalogAdapter) -> None:
        self._adapter = adapter

    @classmethod
    def for_category(cls, category: str) -> "RecommendationSession":
        return cls(create_adapter(category))

    @property
    def active(self) -> CatalogAdapter:
        return self._adapter

    @property
    def category(self) -> str:
        return self._adapter.category

    def set_active(self, adapter: CatalogAdapter) -> None:
        self._adapter = adapter

    def fetch_recommendations(self, genre_preferences: Sequence[str], limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        return self._adapter.fetch_recommendations(genre_preferences, limit)

    def search_by_keyword(self, keyword: str, limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        return self._adapter.search_by_keyword(keyword, limit)

    def get_details(self, item_id: str) -> Optional[Recommendation]:
        return self._adapter.get_details(item_id)
