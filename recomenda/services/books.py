"""Book recommendations from Open Library.

Recommendations come from the ``fiction`` subject listing, search uses the
full-text search endpoint, and details are read from the work record. Each
endpoint names its fields differently (``cover_id`` vs ``cover_i`` vs
``covers``), so the mapping is done per endpoint.
"""

from __future__ import annotations

import urllib.parse
from typing import Any, Dict, List, Optional, Sequence

from ..models import NO_DESCRIPTION, Recommendation, coerce_year
from .base import DEFAULT_LIMIT, RemoteCatalogAdapter, require

COVER_URL = "https://covers.openlibrary.org/b/id/{cover_id}-L.jpg"
PLACEHOLDER_URL = "https://via.placeholder.com/300x450/4a5568/eee?text={text}"
UNKNOWN_AUTHOR = "Autor desconocido"
BOOK_RATING = 4.0
SUBJECT = "fiction"


def cover_image(cover_id: Any, title: str) -> str:
    """Return the large cover URL, or a placeholder showing the title."""
    if cover_id:
        return COVER_URL.format(cover_id=cover_id)
    return PLACEHOLDER_URL.format(text=urllib.parse.quote(title, safe=""))


def _description(value: Any) -> str:
    # Work records store either a plain string or {"type": ..., "value": ...}.
    if isinstance(value, dict):
        value = value.get("value")
    return value or NO_DESCRIPTION


class BookAdapter(RemoteCatalogAdapter):
    category = "books"
    base_url = "https://openlibrary.org"
    env_prefix = "OPENLIBRARY"

    def _map_item(self, raw: Dict[str, Any]) -> Recommendation:
        """Map a work from a subject listing."""
        title = require(raw, "title")
        authors = raw.get("authors") or []
        return Recommendation(
            id=require(raw, "key"),
            title=title,
            category=self.category,
            genre="Ficción",
            description=_description(raw.get("description")),
            rating=BOOK_RATING,
            year=coerce_year(raw.get("first_publish_year")),
            image=cover_image(raw.get("cover_id"), title),
            additional_info={"author": (authors[0].get("name") if authors else None) or UNKNOWN_AUTHOR},
        )

    def _map_search_doc(self, raw: Dict[str, Any]) -> Recommendation:
        title = require(raw, "title")
        authors = raw.get("author_name") or []
        return Recommendation(
            id=require(raw, "key"),
            title=title,
            category=self.category,
            genre="Varios",
            description=NO_DESCRIPTION,
            rating=BOOK_RATING,
            year=coerce_year(raw.get("first_publish_year")),
            image=cover_image(raw.get("cover_i"), title),
            additional_info={"author": (authors[0] if authors else None) or UNKNOWN_AUTHOR},
        )

    def _map_work(self, raw: Dict[str, Any]) -> Recommendation:
        title = require(raw, "title")
        subjects = raw.get("subjects") or []
        covers = raw.get("covers") or []
        authors = raw.get("authors") or []
        return Recommendation(
            id=require(raw, "key"),
            title=title,
            category=self.category,
            genre=(subjects[0] if subjects else None) or "Varios",
            description=_description(raw.get("description")),
            rating=BOOK_RATING,
            year=coerce_year(raw.get("first_publish_year")),
            image=cover_image(covers[0] if covers else None, title),
            additional_info={"author": (authors[0].get("name") if authors else None) or UNKNOWN_AUTHOR},
        )

    def fetch_recommendations(self, genre_preferences: Sequence[str], limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        if limit <= 0:
            return []

        def call() -> List[Recommendation]:
            data = self._get(f"/subjects/{SUBJECT}.json", params={"limit": limit})
            return self._map_items(data["works"], limit)

        return self._safe_list("fetching", call)

    def search_by_keyword(self, keyword: str, limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        if limit <= 0:
            return []

        def call() -> List[Recommendation]:
            data = self._get("/search.json", params={"q": keyword, "limit": limit})
            return self._map_items(data["docs"], limit, mapper=self._map_search_doc)

        return self._safe_list("searching", call)

    def get_details(self, item_id: str) -> Optional[Recommendation]:
        # Ids are work keys such as "/works/OL45804W".
        path = item_id if item_id.startswith("/") else f"/{item_id}"

        def call() -> Optional[Recommendation]:
            work = self._get(f"{path}.json")
            if not work or work.get("type", {}).get("key") == "/type/delete":
                return None
            return self._map_work(work)

        return self._safe_one("fetching details for", call)
