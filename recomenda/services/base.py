"""Catalog adapter contract and the two shared adapter flavours.

Every category is served by a :class:`CatalogAdapter` exposing the same
three operations. Sample-backed catalogs derive from
:class:`StaticCatalogAdapter`; catalogs backed by a public JSON API derive
from :class:`RemoteCatalogAdapter`, which owns the HTTP plumbing and turns
any transport or parsing failure into an empty result.
"""

from __future__ import annotations

import logging
import os
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

import requests

from ..models import Recommendation

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_TIMEOUT = 10.0

# Failures that mean the upstream source is degraded. Bad JSON surfaces as
# ValueError, unexpected shapes as KeyError/TypeError/AttributeError.
SOURCE_ERRORS = (requests.RequestException, ValueError, KeyError, TypeError, AttributeError)


class CatalogAdapter:
    """Interface shared by all category adapters."""

    category: str = ""

    @classmethod
    def from_env(cls, **kwargs: Any) -> "CatalogAdapter":
        return cls(**kwargs)

    def fetch_recommendations(self, genre_preferences: Sequence[str], limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        raise NotImplementedError

    def search_by_keyword(self, keyword: str, limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        raise NotImplementedError

    def get_details(self, item_id: str) -> Optional[Recommendation]:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(category={self.category!r})"


class StaticCatalogAdapter(CatalogAdapter):
    """Adapter over a fixed in-process sample table.

    Subclasses set ``items`` (dicts with id, title, genre, year, image and
    description) plus the constant ``rating`` and ``additional_info`` every
    sample record carries.
    """

    items: Sequence[Dict[str, Any]] = ()
    rating: float = 0.0
    additional_info: Mapping[str, Any] = MappingProxyType({})

    def _build(self, item: Dict[str, Any]) -> Recommendation:
        return Recommendation(
            id=item["id"],
            title=item["title"],
            category=self.category,
            genre=item["genre"],
            description=item["description"],
            rating=self.rating,
            year=item["year"],
            image=item["image"],
            additional_info=self.additional_info,
        )

    def fetch_recommendations(self, genre_preferences: Sequence[str], limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        # Sample catalogs are not personalised; preferences are ignored.
        if limit <= 0:
            return []
        return [self._build(item) for item in self.items[:limit]]

    def search_by_keyword(self, keyword: str, limit: int = DEFAULT_LIMIT) -> List[Recommendation]:
        if limit <= 0:
            return []
        needle = keyword.lower()
        matches = [item for item in self.items if needle in item["title"].lower()]
        return [self._build(item) for item in matches[:limit]]

    def get_details(self, item_id: str) -> Optional[Recommendation]:
        for item in self.items:
            if item["id"] == item_id:
                return self._build(item)
        return None


class RemoteCatalogAdapter(CatalogAdapter):
    """Adapter over a public JSON catalog reachable over HTTP.

    Subclasses implement ``_map_item`` to turn one upstream JSON object into
    a :class:`Recommendation` and use ``_get`` / ``_map_items`` to build the
    three operations on top of it.
    """

    base_url: str = ""
    env_prefix: str = ""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = DEFAULT_TIMEOUT) -> None:
        self.base = (base_url or self.base_url).rstrip("/")
        self.timeout = timeout
        self.default_headers = {"accept": "application/json"}

    @classmethod
    def from_env(cls, **kwargs: Any) -> "RemoteCatalogAdapter":
        timeout = float(os.environ.get("CATALOG_TIMEOUT", DEFAULT_TIMEOUT))
        return cls(
            base_url=os.environ.get(f"{cls.env_prefix}_URL", cls.base_url),
            timeout=timeout or None,
            **kwargs,
        )

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base}{path}"
        resp = requests.get(url, headers=self.default_headers, params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def _map_item(self, raw: Dict[str, Any]) -> Recommendation:
        raise NotImplementedError

    def _map_items(self, raws: Iterable[Dict[str, Any]], limit: int,
                   mapper: Optional[Callable[[Dict[str, Any]], Recommendation]] = None) -> List[Recommendation]:
        """Map upstream items, skipping any that lack an id or a title."""
        mapper = mapper or self._map_item
        results: List[Recommendation] = []
        for raw in raws:
            if len(results) >= limit:
                break
            try:
                results.append(mapper(raw))
            except (KeyError, TypeError, AttributeError) as exc:
                logger.debug("Skipping unmappable %s item: %r", self.category, exc)
        return results

    def _safe_list(self, action: str, call: Callable[[], List[Recommendation]]) -> List[Recommendation]:
        try:
            return call()
        except SOURCE_ERRORS as exc:
            logger.warning("Error %s %s: %s", action, self.category, exc)
            return []

    def _safe_one(self, action: str, call: Callable[[], Optional[Recommendation]]) -> Optional[Recommendation]:
        try:
            return call()
        except SOURCE_ERRORS as exc:
            logger.warning("Error %s %s: %s", action, self.category, exc)
            return None


def require(raw: Dict[str, Any], key: str) -> Any:
    """Return a mandatory upstream field, raising KeyError when blank."""
    value = raw.get(key)
    if value is None or value == "":
        raise KeyError(key)
    return value
