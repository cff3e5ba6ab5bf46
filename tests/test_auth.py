import pytest

from recomenda.exceptions import AuthError
from recomenda.services.auth import SIGNED_IN, SIGNED_OUT, AuthService, hash_password, verify_password


@pytest.fixture
def service(store):
    return AuthService()


def test_password_hash_round_trip():
    stored = hash_password("secret1")
    assert stored != hash_password("secret1")
    assert verify_password("secret1", stored)
    assert not verify_password("secret2", stored)


def test_sign_up_creates_user_and_profile(service, store):
    user = service.sign_up("  Ana@Example.com ", "secret1", display_name="Ana")
    assert user["email"] == "ana@example.com"
    assert store.get_profile(user["id"])["display_name"] == "Ana"


def test_sign_up_defaults_display_name_to_email_local_part(service, store):
    user = service.sign_up("luis@example.com", "secret1")
    assert store.get_profile(user["id"])["display_name"] == "luis"


@pytest.mark.parametrize("email,password", [("not-an-email", "secret1"), ("ana@example.com", "12345")])
def test_sign_up_validation(service, email, password):
    with pytest.raises(AuthError):
        service.sign_up(email, password)


def test_duplicate_email_rejected(service):
    service.sign_up("ana@example.com", "secret1")
    with pytest.raises(AuthError):
        service.sign_up("ANA@example.com", "another1")


def test_sign_in_and_session_lookup(service):
    user = service.sign_up("ana@example.com", "secret1")
    session = service.sign_in("Ana@example.com", "secret1")
    assert session.user_id == user["id"]
    assert service.get_session(session.token) == session
    assert service.get_session("bogus") is None
    assert service.get_session(None) is None


@pytest.mark.parametrize("email,password", [("ana@example.com", "wrong!"), ("nobody@example.com", "secret1")])
def test_sign_in_rejects_bad_credentials(service, email, password):
    service.sign_up("ana@example.com", "secret1")
    with pytest.raises(AuthError):
        service.sign_in(email, password)


def test_listeners_receive_sign_in_and_sign_out(service):
    events = []
    unsubscribe = service.subscribe(lambda event, session: events.append((event, session.email)))
    service.sign_up("ana@example.com", "secret1")
    session = service.sign_in("ana@example.com", "secret1")
    service.sign_out(session.token)
    service.sign_out(session.token)
    assert events == [(SIGNED_IN, "ana@example.com"), (SIGNED_OUT, "ana@example.com")]
    assert service.get_session(session.token) is None

    unsubscribe()
    service.sign_in("ana@example.com", "secret1")
    assert len(events) == 2


def test_expired_sessions_are_ignored(service, store):
    service.sign_up("ana@example.com", "secret1")
    old = service.sign_in("ana@example.com", "secret1")
    with store._connect() as con:
        con.execute("UPDATE auth_sessions SET created_at='2000-01-01 00:00:00' WHERE token=?", (old.token,))
    assert service.get_session(old.token) is None

    fresh = service.sign_in("ana@example.com", "secret1")
    assert service.get_session(fresh.token) == fresh
    with store._connect() as con:
        tokens = [row["token"] for row in con.execute("SELECT token FROM auth_sessions")]
    assert tokens == [fresh.token]


def test_session_max_age_is_configurable(service, store):
    service.sign_up("ana@example.com", "secret1")
    session = service.sign_in("ana@example.com", "secret1")
    assert store.get_session(session.token, max_age=-60) is None
    assert store.get_session(session.token)["user_id"] == session.user_id
