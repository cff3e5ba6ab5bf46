"""Movie recommendations from a fixed sample of recent releases."""

from __future__ import annotations

from types import MappingProxyType

from .base import StaticCatalogAdapter

MOVIES = (
    {"id": "1", "title": "Oppenheimer", "genre": "Drama", "year": 2023, "image": "https://image.tmdb.org/t/p/w500/8Gxv8gSFCU0XGDykEGv7zR1n2ua.jpg", "description": "La historia del científico J. Robert Oppenheimer"},
    {"id": "2", "title": "Barbie", "genre": "Comedia", "year": 2023, "image": "https://image.tmdb.org/t/p/w500/iuFNMS8U5cb6xfzi51Dbkovj7vM.jpg", "description": "Barbie vive en Barbieland"},
    {"id": "3", "title": "Dune: Part Two", "genre": "Ciencia Ficción", "year": 2024, "image": "https://image.tmdb.org/t/p/w500/1pdfLvkbY9ohJlCjQH2CZjjYVvJ.jpg", "description": "Paul Atreides se une con Chani"},
    {"id": "4", "title": "The Batman", "genre": "Acción", "year": 2022, "image": "https://image.tmdb.org/t/p/w500/74xTEgt7R36Fpooo50r9T25onhq.jpg", "description": "Batman investiga la corrupción"},
    {"id": "5", "title": "Spider-Man: No Way Home", "genre": "Acción", "year": 2021, "image": "https://image.tmdb.org/t/p/w500/1g0dhYtq4irTY1GPXvft6k4YLjm.jpg", "description": "Peter Parker busca ayuda del Dr. Strange"},
)


class MovieAdapter(StaticCatalogAdapter):
    category = "movies"
    items = MOVIES
    rating = 4.5
    additional_info = MappingProxyType({"director": "Director destacado"})
