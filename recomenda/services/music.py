"""Music recommendations from the iTunes Search API.

There is no "popular albums" endpoint, so recommendations are a search for
pop albums. Details use the lookup endpoint on the collection id. See
https://performance-partners.apple.com/search-api for the query parameters.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..models import Recommendation, coerce_year
from .base import DEFAULT_LIMIT, RemoteCatalogAdapter, require

RECOMMENDATION_TERM = "pop"
MUSIC_RATING = 4.0


def artwork_url(thumbnail: Optional[str]) -> str:
    """Upsize the 100px thumbnail iTunes returns to 600px artwork."""
    if not thumbnail:
        return ""
    return thumbnail.replace("100x100", "600x600")


class MusicAdapter(RemoteCatalogAdapter):
    category = "music"
    base_url = "https://itunes.apple.com"
    env_prefix = "ITUNES"

    def _map_item(self, raw: Dict[str, Any]) -> Recommendation:
        artist = raw.get("artistName") or ""
        return Recommendation(
            id=str(require(raw, "collectionId")),
            title=require(raw, "collectionName"),
            category=self.category,
            genre=raw.get("primaryGenreName") or "Música",
            description=f"Álbum de {artist}" if artist else "Álbum",
            rating=MUSIC_RATING,
            year=coerce_year(raw.get("releaseDate")),
            image=artwork_url(raw.get("artworkUrl100")),
            additional_info={"artist": artist},
        )

    def _search_albums(self, term: str, limit: int) -> List[Recommendation]:
        data = self._get("/search", params={"term": term, "entity": "album", "limit": limit})
        return self._map_items(data["results"], limit)

    def fetch_recommendations(self, genre_preferences: Sequence[str], limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        if limit <= 0:
            return []
        return self._safe_list("fetching", lambda: self._search_albums(RECOMMENDATION_TERM, limit))

    def search_by_keyword(self, keyword: str, limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        if limit <= 0:
            return []
        return self._safe_list("searching", lambda: self._search_albums(keyword, limit))

    def get_details(self, item_id: str) -> Optional[Recommendation]:
        def call() -> Optional[Recommendation]:
            data = self._get("/lookup", params={"id": item_id, "entity": "album"})
            for raw in data.get("results", []):
                # An artist id also resolves, returning the artist and its albums.
                if raw.get("wrapperType", "collection") == "collection" and str(raw.get("collectionId")) == item_id:
                    return self._map_item(raw)
            return None

        return self._safe_one("fetching details for", call)
