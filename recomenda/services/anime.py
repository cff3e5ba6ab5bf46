"""Anime recommendations from the Jikan API (an unofficial MyAnimeList API).

Jikan allows roughly three requests per second per client, so the adapter
waits ``request_delay`` seconds before every call. See
https://docs.api.jikan.moe for the endpoints used here.
"""

from __future__ import annotations

import os
import time
from typing import Any, Dict, List, Optional, Sequence

from ..models import NO_DESCRIPTION, Recommendation, coerce_year, scale_rating
from .base import DEFAULT_LIMIT, DEFAULT_TIMEOUT, RemoteCatalogAdapter, require

DEFAULT_DELAY = 1.0


class AnimeAdapter(RemoteCatalogAdapter):
    category = "anime"
    base_url = "https://api.jikan.moe/v4"
    env_prefix = "JIKAN"

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = DEFAULT_TIMEOUT,
                 request_delay: float = DEFAULT_DELAY) -> None:
        super().__init__(base_url=base_url, timeout=timeout)
        self.request_delay = request_delay

    @classmethod
    def from_env(cls, **kwargs: Any) -> "AnimeAdapter":
        kwargs.setdefault("request_delay", float(os.environ.get("JIKAN_REQUEST_DELAY", DEFAULT_DELAY)))
        return super().from_env(**kwargs)

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        if self.request_delay > 0:
            time.sleep(self.request_delay)
        return super()._get(path, params=params)

    def _map_item(self, raw: Dict[str, Any]) -> Recommendation:
        genres = raw.get("genres") or []
        jpg = (raw.get("images") or {}).get("jpg") or {}
        return Recommendation(
            id=str(require(raw, "mal_id")),
            title=require(raw, "title"),
            category=self.category,
            genre=(genres[0].get("name") if genres else None) or "Anime",
            description=raw.get("synopsis") or NO_DESCRIPTION,
            # MyAnimeList scores run 0-10.
            rating=scale_rating(raw.get("score"), upstream_max=10, default=4.0),
            year=coerce_year(raw.get("year")),
            image=jpg.get("large_image_url") or jpg.get("image_url") or "",
            additional_info={"episodes": raw.get("episodes")},
        )

    def fetch_recommendations(self, genre_preferences: Sequence[str], limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        # Top-ranked anime; genre preferences are not applied.
        if limit <= 0:
            return []

        def call() -> List[Recommendation]:
            data = self._get("/top/anime", params={"limit": limit})
            return self._map_items(data["data"], limit)

        return self._safe_list("fetching", call)

    def search_by_keyword(self, keyword: str, limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        if limit <= 0:
            return []

        def call() -> List[Recommendation]:
            data = self._get("/anime", params={"q": keyword, "limit": limit})
            return self._map_items(data["data"], limit)

        return self._safe_list("searching", call)

    def get_details(self, item_id: str) -> Optional[Recommendation]:
        def call() -> Optional[Recommendation]:
            data = self._get(f"/anime/{item_id}")
            anime = data.get("data")
            if not anime:
                return None
            return self._map_item(anime)

        return self._safe_one("fetching details for", call)
