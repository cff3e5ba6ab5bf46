"""Email and password authentication backed by the SQLite store.

Passwords are stored as salted PBKDF2-SHA256 hashes. Signing in issues an
opaque session token that the web layer keeps in a cookie. Listeners
registered with :meth:`AuthService.subscribe` are told about every sign-in
and sign-out.
"""

from __future__ import annotations

import hashlib
import hmac
import logging
import re
import secrets
from dataclasses import dataclass
from typing import Callable, List, Optional

from .. import db
from ..exceptions import AuthError, StoreError

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"

MIN_PASSWORD_LENGTH = 6
PBKDF2_ITERATIONS = 200_000
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class AuthSession:
    token: str
    user_id: str
    email: str


Listener = Callable[[str, AuthSession], None]


def hash_password(password: str, salt: Optional[str] = None) -> str:
    salt = salt or secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), bytes.fromhex(salt), PBKDF2_ITERATIONS)
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt, _, _ = stored.partition("$")
    return hmac.compare_digest(hash_password(password, salt), stored)


class AuthService:
    def __init__(self) -> None:
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener(event, session)``; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: str, session: AuthSession) -> None:
        for listener in list(self._listeners):
            listener(event, session)

    def sign_up(self, email: str, password: str, display_name: str = "") -> dict:
        """Register a new user. The user still has to sign in afterwards."""
        email = email.strip().lower()
        if not EMAIL_RE.match(email):
            raise AuthError("Invalid email address")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AuthError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        try:
            user = db.create_user(email, hash_password(password))
        except StoreError as exc:
            raise AuthError(str(exc)) from exc
        db.upsert_profile(user["id"], display_name=display_name.strip() or email.split("@")[0])
        logger.info("Registered user %s", user["id"])
        return user

    def sign_in(self, email: str, password: str) -> AuthSession:
        user = db.get_user_by_email(email.strip().lower())
        if user is None or not verify_password(password, user["password_hash"]):
            raise AuthError("Invalid login credentials")
        session = AuthSession(token=secrets.token_urlsafe(32), user_id=user["id"], email=user["email"])
        db.create_session(session.token, session.user_id)
        self._notify(SIGNED_IN, session)
        return session

    def sign_out(self, token: str) -> None:
        session = self.get_session(token)
        if session is None:
            return
        db.delete_session(token)
        self._notify(SIGNED_OUT, session)

    def get_session(self, token: Optional[str]) -> Optional[AuthSession]:
        if not token:
            return None
        row = db.get_session(token)
        if row is None:
            return None
        return AuthSession(token=row["token"], user_id=row["user_id"], email=row["email"])
