"""Normalized recommendation record shared by every catalog adapter.

A :class:`Recommendation` is what every adapter operation returns, whatever
the upstream source looks like. Records are immutable; adapters build fresh
ones on every call and nothing in the application mutates them afterwards.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .exceptions import UnknownCategoryError

CATEGORIES: Tuple[str, ...] = ("movies", "series", "anime", "books", "games", "music")

RATING_SCALE = 5.0
FALLBACK_YEAR = 2024
NO_DESCRIPTION = "Sin descripción disponible"


def scale_rating(score: Any, upstream_max: float, default: float) -> float:
    """Convert an upstream score to the 0-5 scale used by every record.

    Missing, non-numeric and zero scores return ``default``, since upstream
    catalogs report unrated items as 0 or null.
    """
    try:
        value = float(score)
    except (TypeError, ValueError):
        return default
    if value <= 0:
        return default
    scaled = value * RATING_SCALE / upstream_max
    return round(min(scaled, RATING_SCALE), 2)


def coerce_year(value: Any, default: int = FALLBACK_YEAR) -> int:
    """Return ``value`` as a year, or ``default`` when it can't be read.

    Accepts ints, numeric strings and ISO date strings like ``2019-03-01``.
    """
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value or default
    try:
        return int(str(value)[:4])
    except ValueError:
        return default


@dataclass(frozen=True)
class Recommendation:
    id: str
    title: str
    category: str
    genre: str
    description: str
    rating: float
    year: int
    image: str = ""
    additional_info: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.category not in CATEGORIES:
            raise UnknownCategoryError(self.category)
        # Absent keys are dropped so callers never render empty values.
        info = {k: v for k, v in dict(self.additional_info or {}).items() if v not in (None, "")}
        object.__setattr__(self, "additional_info", MappingProxyType(info))

    def __hash__(self) -> int:
        return hash(self.key)

    @property
    def key(self) -> Tuple[str, str]:
        """Compound key identifying this item across categories."""
        return (self.id, self.category)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "genre": self.genre,
            "description": self.description,
            "rating": self.rating,
            "year": self.year,
            "image": self.image,
        }
        if self.additional_info:
            data["additionalInfo"] = dict(self.additional_info)
        return data

    def favorite_fields(self) -> Dict[str, Any]:
        """Column values used when storing this record as a favorite."""
        return {
            "content_id": self.id,
            "content_type": self.category,
            "title": self.title,
            "image_url": self.image,
            "description": self.description,
            "genre": self.genre,
            "rating": self.rating,
            "year": self.year,
            "additional_info": json.dumps(dict(self.additional_info), ensure_ascii=False),
        }

    @classmethod
    def from_favorite_row(cls, row: Mapping[str, Any]) -> "Recommendation":
        """Rebuild a record from a row of the favorites table.

        Favorites store a snapshot of the record, so missing columns fall
        back to neutral values rather than catalog placeholders.
        """
        info: Optional[Any] = row.get("additional_info")
        if isinstance(info, str):
            info = json.loads(info) if info else {}
        return cls(
            id=str(row["content_id"]),
            title=row.get("title") or "",
            category=row["content_type"],
            genre=row.get("genre") or "N/A",
            description=row.get("description") or "",
            rating=float(row.get("rating") or 0),
            year=int(row.get("year") or date.today().year),
            image=row.get("image_url") or "",
            additional_info=info or {},
        )
