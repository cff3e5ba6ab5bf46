"""SQLite store for users, preferences, profiles and favorites.

This module provides helper functions to initialise the schema and to read
and write the per-user data the web application needs. Favorites keep a
snapshot of the recommendation record and are keyed by user plus the
record's compound key (content id, content type).
"""

import json
import os
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Set, Tuple

from .exceptions import StoreError
from .models import CATEGORIES, Recommendation

DB_DIR = Path(os.environ.get("DB_DIR", "data"))
DB_PATH = DB_DIR / "data.db"

# Seconds a sign-in stays valid.
SESSION_MAX_AGE = int(os.environ.get("SESSION_MAX_AGE", 30 * 24 * 3600))

PROFILE_FIELDS = ("display_name", "bio", "location", "website")

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS auth_sessions (
    token TEXT PRIMARY KEY,
    user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS user_preferences (
    user_id TEXT PRIMARY KEY,
    categories TEXT NOT NULL,
    favorite_genres TEXT NOT NULL,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS user_profiles (
    user_id TEXT PRIMARY KEY,
    display_name TEXT NOT NULL DEFAULT '',
    bio TEXT,
    location TEXT,
    website TEXT,
    updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS user_favorites (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL,
    content_id TEXT NOT NULL,
    content_type TEXT NOT NULL,
    title TEXT NOT NULL,
    image_url TEXT,
    description TEXT,
    genre TEXT,
    rating REAL,
    year INTEGER,
    additional_info TEXT,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    UNIQUE (user_id, content_id, content_type)
);
"""


@contextmanager
def _connect() -> Iterator[sqlite3.Connection]:
    con = sqlite3.connect(DB_PATH)
    con.row_factory = sqlite3.Row
    con.execute("PRAGMA foreign_keys = ON")
    try:
        with con:
            yield con
    finally:
        con.close()


def init_db() -> None:
    """Ensure every table exists."""
    DB_DIR.mkdir(parents=True, exist_ok=True)
    with _connect() as con:
        con.executescript(SCHEMA)


# Users and sessions

def create_user(email: str, password_hash: str) -> Dict[str, Any]:
    """Insert a user, raising StoreError if the email is already taken."""
    user_id = str(uuid.uuid4())
    try:
        with _connect() as con:
            con.execute(
                "INSERT INTO users (id, email, password_hash) VALUES (?, ?, ?)",
                (user_id, email, password_hash),
            )
    except sqlite3.IntegrityError:
        raise StoreError(f"User already registered: {email}") from None
    return {"id": user_id, "email": email}


def get_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    with _connect() as con:
        row = con.execute("SELECT * FROM users WHERE email=?", (email,)).fetchone()
        return dict(row) if row else None


def create_session(token: str, user_id: str) -> None:
    """Store a new session, purging any that have expired."""
    with _connect() as con:
        con.execute(
            "DELETE FROM auth_sessions WHERE created_at < datetime('now', ?)", (f"-{SESSION_MAX_AGE} seconds",)
        )
        con.execute("INSERT INTO auth_sessions (token, user_id) VALUES (?, ?)", (token, user_id))


def get_session(token: str, max_age: Optional[int] = None) -> Optional[Dict[str, Any]]:
    """Return the session with its user's id and email, or None.

    Sessions created more than ``max_age`` seconds ago (``SESSION_MAX_AGE``
    by default) count as missing.
    """
    max_age = SESSION_MAX_AGE if max_age is None else max_age
    with _connect() as con:
        row = con.execute(
            """
            SELECT s.token, s.created_at, u.id AS user_id, u.email
            FROM auth_sessions s JOIN users u ON u.id = s.user_id
            WHERE s.token=? AND s.created_at >= datetime('now', ?)
            """,
            (token, f"-{max_age} seconds"),
        ).fetchone()
        return dict(row) if row else None


def delete_session(token: str) -> bool:
    with _connect() as con:
        cur = con.execute("DELETE FROM auth_sessions WHERE token=?", (token,))
        return cur.rowcount > 0


# Preferences

def get_preferences(user_id: str) -> Optional[Dict[str, List[str]]]:
    """Fetch the saved categories and favorite genres for a user.

    :return: Dict with ``categories`` and ``favorite_genres``, or None if the
        user has not chosen preferences yet.
    """
    with _connect() as con:
        row = con.execute(
            "SELECT categories, favorite_genres FROM user_preferences WHERE user_id=?",
            (user_id,),
        ).fetchone()
    if row is None:
        return None
    return {
        "categories": json.loads(row["categories"]),
        "favorite_genres": json.loads(row["favorite_genres"]),
    }


def upsert_preferences(user_id: str, categories: Sequence[str], favorite_genres: Sequence[str]) -> None:
    """Insert or update a user's preferences.

    At least one category and one genre are required. Categories keep the
    canonical order regardless of the order they were selected in.
    """
    unknown = [c for c in categories if c not in CATEGORIES]
    if unknown:
        raise StoreError(f"Unknown categories: {', '.join(unknown)}")
    ordered = [c for c in CATEGORIES if c in categories]
    genres = list(dict.fromkeys(g.strip() for g in favorite_genres if g.strip()))
    if not ordered:
        raise StoreError("Select at least one category")
    if not genres:
        raise StoreError("Select at least one genre")
    with _connect() as con:
        con.execute(
            """
            INSERT INTO user_preferences (user_id, categories, favorite_genres) VALUES (?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET categories=excluded.categories,
                favorite_genres=excluded.favorite_genres, updated_at=CURRENT_TIMESTAMP
            """,
            (user_id, json.dumps(ordered), json.dumps(genres, ensure_ascii=False)),
        )


# Profiles

def get_profile(user_id: str) -> Optional[Dict[str, Any]]:
    with _connect() as con:
        row = con.execute("SELECT * FROM user_profiles WHERE user_id=?", (user_id,)).fetchone()
        return dict(row) if row else None


def upsert_profile(user_id: str, **fields: Any) -> None:
    """Insert or update profile fields (display_name, bio, location, website)."""
    unknown = set(fields) - set(PROFILE_FIELDS)
    if unknown:
        raise StoreError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
    current = get_profile(user_id) or {"display_name": ""}
    values = {name: fields.get(name, current.get(name)) for name in PROFILE_FIELDS}
    with _connect() as con:
        con.execute(
            """
            INSERT INTO user_profiles (user_id, display_name, bio, location, website) VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(user_id) DO UPDATE SET display_name=excluded.display_name, bio=excluded.bio,
                location=excluded.location, website=excluded.website, updated_at=CURRENT_TIMESTAMP
            """,
            (user_id, values["display_name"] or "", values["bio"], values["location"], values["website"]),
        )


# Favorites

def add_favorite(user_id: str, record: Recommendation) -> None:
    """Store a favorite. Adding the same item twice keeps the first copy."""
    fields = record.favorite_fields()
    columns = ", ".join(["user_id", *fields])
    placeholders = ", ".join("?" * (len(fields) + 1))
    with _connect() as con:
        con.execute(
            f"INSERT OR IGNORE INTO user_favorites ({columns}) VALUES ({placeholders})",
            (user_id, *fields.values()),
        )


def remove_favorite(user_id: str, content_id: str, content_type: str) -> bool:
    """Delete a favorite by its compound key. Returns True if a row was removed."""
    with _connect() as con:
        cur = con.execute(
            "DELETE FROM user_favorites WHERE user_id=? AND content_id=? AND content_type=?",
            (user_id, content_id, content_type),
        )
        return cur.rowcount > 0


def remove_favorite_by_id(user_id: str, favorite_id: int) -> bool:
    with _connect() as con:
        cur = con.execute(
            "DELETE FROM user_favorites WHERE user_id=? AND id=?", (user_id, favorite_id)
        )
        return cur.rowcount > 0


def list_favorites(user_id: str, category: Optional[str] = None) -> List[Dict[str, Any]]:
    """List a user's favorites, newest first, optionally for one category.

    Each row carries the rebuilt :class:`Recommendation` under ``record``
    next to the row's ``id`` and ``created_at``.
    """
    query = "SELECT * FROM user_favorites WHERE user_id=?"
    params: Tuple[Any, ...] = (user_id,)
    if category:
        query += " AND content_type=?"
        params += (category,)
    query += " ORDER BY created_at DESC, id DESC"
    with _connect() as con:
        rows = [dict(r) for r in con.execute(query, params).fetchall()]
    return [
        {"id": row["id"], "created_at": row["created_at"], "record": Recommendation.from_favorite_row(row)}
        for row in rows
    ]


def favorite_keys(user_id: str) -> Set[Tuple[str, str]]:
    """Return the compound keys of everything the user has favorited."""
    with _connect() as con:
        rows = con.execute(
            "SELECT content_id, content_type FROM user_favorites WHERE user_id=?", (user_id,)
        ).fetchall()
    return {(row["content_id"], row["content_type"]) for row in rows}


def get_stats(user_id: str) -> Dict[str, Any]:
    """Count favorites per category.

    :return: Dict with ``total_favorites``, ``<category>_count`` for each
        category and ``last_activity`` (timestamp of the newest favorite).
    """
    with _connect() as con:
        rows = con.execute(
            """
            SELECT content_type, COUNT(*) AS n, MAX(created_at) AS last
            FROM user_favorites WHERE user_id=? GROUP BY content_type
            """,
            (user_id,),
        ).fetchall()
    stats: Dict[str, Any] = {f"{c}_count": 0 for c in CATEGORIES}
    last_activity = None
    for row in rows:
        stats[f"{row['content_type']}_count"] = row["n"]
        if last_activity is None or row["last"] > last_activity:
            last_activity = row["last"]
    stats["total_favorites"] = sum(stats[f"{c}_count"] for c in CATEGORIES)
    stats["last_activity"] = last_activity
    return stats
