"""Main FastAPI application for Recomenda.

This module defines the web interface routes: signing in and out, choosing
content preferences, browsing and searching recommendations per category,
viewing item details, and managing favorites from the profile page.
Recommendations are served by the catalog adapters in
:mod:`recomenda.services`; users, preferences and favorites live in the
SQLite store in :mod:`recomenda.db`.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from . import db
from .exceptions import AuthError, StoreError, UnknownCategoryError
from .models import CATEGORIES
from .services.auth import AuthService, AuthSession
from .services.session import RecommendationSession

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
SESSION_COOKIE = "session"
RECOMMENDATION_LIMIT = 12

CATEGORY_LABELS = {
    "movies": "Películas",
    "series": "Series",
    "anime": "Anime",
    "books": "Libros",
    "games": "Juegos",
    "music": "Música",
}

GENRES = [
    "Acción",
    "Aventura",
    "Ciencia Ficción",
    "Fantasía",
    "Terror",
    "Romance",
    "Drama",
    "Comedia",
    "Thriller",
    "Misterio",
    "Historia",
    "Documentales",
]

INFO_LABELS = {
    "author": "Autor",
    "director": "Director",
    "artist": "Artista",
    "platform": "Plataforma",
    "episodes": "Episodios",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    db.init_db()
    yield


app = FastAPI(title="Recomenda", lifespan=lifespan)

# Mount static files
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")

# Set up template directory
templates = Jinja2Templates(directory=BASE_DIR / "templates")
templates.env.globals.update(category_labels=CATEGORY_LABELS, info_labels=INFO_LABELS)

auth = AuthService()


def _log_auth_event(event: str, session: AuthSession) -> None:
    logger.info("%s user=%s", event, session.user_id)


auth.subscribe(_log_auth_event)


def current_session(request: Request) -> Optional[AuthSession]:
    return auth.get_session(request.cookies.get(SESSION_COOKIE))


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=303)


def _safe_next(url: str) -> str:
    # "//host" and "/\host" are other hosts to a browser.
    if url.startswith("/") and not url.startswith(("//", "/\\")):
        return url
    return "/"


def _session_for(category: str) -> RecommendationSession:
    try:
        return RecommendationSession.for_category(category)
    except UnknownCategoryError:
        raise HTTPException(status_code=404, detail="Unknown category")


def _display_name(session: AuthSession) -> str:
    profile = db.get_profile(session.user_id) or {}
    return profile.get("display_name") or session.email


def _web_url(value: str) -> Optional[str]:
    value = value.strip()
    if value.lower().startswith(("http://", "https://")):
        return value
    return None


@app.get("/", response_class=HTMLResponse)
def home(request: Request) -> Response:
    """Render the home page, sending new users to sign-in or preferences first."""
    session = current_session(request)
    if session is None:
        return _redirect("/login")
    if db.get_preferences(session.user_id) is None:
        return _redirect("/preferences")
    context = {"user_name": _display_name(session)}
    return templates.TemplateResponse(request, "home.html", context)


@app.get("/login", response_class=HTMLResponse)
def login_page(request: Request) -> Response:
    if current_session(request) is not None:
        return _redirect("/")
    return templates.TemplateResponse(request, "login.html", {"error": None, "message": None})


@app.post("/login", response_class=HTMLResponse)
def login(request: Request, email: str = Form(...), password: str = Form(...)) -> Response:
    try:
        session = auth.sign_in(email, password)
    except AuthError as exc:
        context = {"error": str(exc), "message": None, "email": email}
        return templates.TemplateResponse(request, "login.html", context, status_code=400)
    response = _redirect("/")
    response.set_cookie(SESSION_COOKIE, session.token, httponly=True, samesite="lax", max_age=db.SESSION_MAX_AGE)
    return response


@app.post("/signup", response_class=HTMLResponse)
def signup(request: Request, email: str = Form(...), password: str = Form(...), name: str = Form("")) -> Response:
    try:
        auth.sign_up(email, password, display_name=name)
    except AuthError as exc:
        context = {"error": str(exc), "message": None, "email": email, "signup": True}
        return templates.TemplateResponse(request, "login.html", context, status_code=400)
    context = {"error": None, "message": "¡Registro exitoso! Ahora inicia sesión", "email": email}
    return templates.TemplateResponse(request, "login.html", context)


@app.post("/logout")
def logout(request: Request) -> RedirectResponse:
    token = request.cookies.get(SESSION_COOKIE)
    if token:
        auth.sign_out(token)
    response = _redirect("/login")
    response.delete_cookie(SESSION_COOKIE)
    return response


@app.get("/preferences", response_class=HTMLResponse)
def preferences_page(request: Request) -> Response:
    session = current_session(request)
    if session is None:
        return _redirect("/login")
    prefs = db.get_preferences(session.user_id) or {"categories": [], "favorite_genres": []}
    context = {"user_name": _display_name(session), "prefs": prefs, "genres": GENRES, "error": None}
    return templates.TemplateResponse(request, "preferences.html", context)


@app.post("/preferences", response_class=HTMLResponse)
def save_preferences(
    request: Request,
    categories: List[str] = Form([]),
    genres: List[str] = Form([]),
) -> Response:
    session = current_session(request)
    if session is None:
        return _redirect("/login")
    try:
        db.upsert_preferences(session.user_id, categories, genres)
    except StoreError as exc:
        prefs = {"categories": categories, "favorite_genres": genres}
        context = {"user_name": _display_name(session), "prefs": prefs, "genres": GENRES, "error": str(exc)}
        return templates.TemplateResponse(request, "preferences.html", context, status_code=400)
    return _redirect("/")


@app.get("/recommendations", response_class=HTMLResponse)
def recommendations_index(request: Request) -> Response:
    """List the categories the user enabled in their preferences."""
    session = current_session(request)
    if session is None:
        return _redirect("/login")
    prefs = db.get_preferences(session.user_id)
    if prefs is None:
        return _redirect("/preferences")
    enabled = [c for c in CATEGORIES if c in prefs["categories"]]
    return templates.TemplateResponse(request, "categories.html", {"categories": enabled})


@app.get("/recommendations/{category}", response_class=HTMLResponse)
def recommendations(request: Request, category: str, q: str = "") -> Response:
    """Show recommendations for a category, or search results when ``q`` is set."""
    session = current_session(request)
    if session is None:
        return _redirect("/login")
    prefs = db.get_preferences(session.user_id)
    if prefs is None:
        return _redirect("/preferences")
    reco = _session_for(category)
    query = q.strip()
    if query:
        items = reco.search_by_keyword(query, RECOMMENDATION_LIMIT)
    else:
        items = reco.fetch_recommendations(prefs["favorite_genres"], RECOMMENDATION_LIMIT)
    context: Dict[str, Any] = {
        "category": category,
        "items": items,
        "query": query,
        "favorites": db.favorite_keys(session.user_id),
    }
    return templates.TemplateResponse(request, "recommendations.html", context)


@app.get("/title/{category}/{item_id:path}", response_class=HTMLResponse)
def title_detail(request: Request, category: str, item_id: str) -> Response:
    """Display details for a single catalog item."""
    session = current_session(request)
    if session is None:
        return _redirect("/login")
    item = _session_for(category).get_details(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    context = {"item": item, "is_favorite": item.key in db.favorite_keys(session.user_id)}
    return templates.TemplateResponse(request, "title.html", context)


@app.post("/favorites/toggle")
def toggle_favorite(
    request: Request,
    category: str = Form(...),
    item_id: str = Form(...),
    next_url: str = Form("/"),
) -> RedirectResponse:
    """Add an item to the user's favorites, or remove it if already there."""
    session = current_session(request)
    if session is None:
        return _redirect("/login")
    if (item_id, category) in db.favorite_keys(session.user_id):
        db.remove_favorite(session.user_id, item_id, category)
    else:
        # Store a fresh snapshot rather than trusting form fields.
        item = _session_for(category).get_details(item_id)
        if item is None:
            raise HTTPException(status_code=404, detail="Item not found")
        db.add_favorite(session.user_id, item)
    return _redirect(_safe_next(next_url))


@app.get("/profile", response_class=HTMLResponse)
def profile_page(request: Request, category: str = "all") -> Response:
    """Show the profile, favorite counts and favorites, optionally filtered."""
    session = current_session(request)
    if session is None:
        return _redirect("/login")
    if category != "all" and category not in CATEGORIES:
        raise HTTPException(status_code=404, detail="Unknown category")
    context = {
        "email": session.email,
        "profile": db.get_profile(session.user_id) or {},
        "stats": db.get_stats(session.user_id),
        "favorites": db.list_favorites(session.user_id, None if category == "all" else category),
        "selected": category,
    }
    return templates.TemplateResponse(request, "profile.html", context)


@app.post("/profile")
def update_profile(
    request: Request,
    display_name: str = Form(""),
    bio: str = Form(""),
    location: str = Form(""),
    website: str = Form(""),
) -> RedirectResponse:
    session = current_session(request)
    if session is None:
        return _redirect("/login")
    db.upsert_profile(
        session.user_id,
        display_name=display_name.strip() or session.email,
        bio=bio.strip() or None,
        location=location.strip() or None,
        website=_web_url(website),
    )
    return _redirect("/profile")


@app.post("/favorites/{favorite_id}/delete")
def delete_favorite(request: Request, favorite_id: int) -> RedirectResponse:
    session = current_session(request)
    if session is None:
        return _redirect("/login")
    db.remove_favorite_by_id(session.user_id, favorite_id)
    return _redirect("/profile")
