"""Series recommendations from a fixed sample."""

from __future__ import annotations

from types import MappingProxyType

from .base import StaticCatalogAdapter

SERIES = (
    {"id": "1", "title": "The Last of Us", "genre": "Drama", "year": 2023, "image": "https://image.tmdb.org/t/p/w500/uKvVjHNqB5VmOrdxqAt2F7J78ED.jpg", "description": "Sobrevivientes en un mundo post-apocalíptico"},
    {"id": "2", "title": "The Mandalorian", "genre": "Ciencia Ficción", "year": 2019, "image": "https://image.tmdb.org/t/p/w500/sWgBv7LV2PRoQgkxwlibdGXKz1S.jpg", "description": "Un cazarrecompensas en Star Wars"},
    {"id": "3", "title": "Stranger Things", "genre": "Ciencia Ficción", "year": 2016, "image": "https://image.tmdb.org/t/p/w500/x2LSRK2Cm7MZhjluni1msVJ3wDF.jpg", "description": "Misterios en Hawkins, Indiana"},
    {"id": "4", "title": "Wednesday", "genre": "Comedia", "year": 2022, "image": "https://image.tmdb.org/t/p/w500/9PFonBhy4cQy7Jz20NpMygczOkv.jpg", "description": "Wednesday Addams en Nevermore Academy"},
    {"id": "5", "title": "Breaking Bad", "genre": "Drama", "year": 2008, "image": "https://image.tmdb.org/t/p/w500/ggFHVNu6YYI5L9pCfOacjizRGt.jpg", "description": "Un profesor de química se vuelve narcotraficante"},
)


class SeriesAdapter(StaticCatalogAdapter):
    category = "series"
    items = SERIES
    rating = 4.6
    additional_info = MappingProxyType({"episodes": 8})
