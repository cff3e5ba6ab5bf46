import pytest
import requests

from recomenda import db
from recomenda.services import auth


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class HttpStub:
    """Stand-in for ``requests.get`` answering by URL suffix."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, path, payload=None, status_code=200, error=None):
        self.routes[path] = error if error is not None else FakeResponse(payload, status_code)

    def __call__(self, url, headers=None, params=None, timeout=None):
        self.calls.append({"url": url, "params": params or {}, "timeout": timeout})
        for path, answer in self.routes.items():
            if url.endswith(path):
                if isinstance(answer, Exception):
                    raise answer
                return answer
        return FakeResponse({"error": "not found"}, status_code=404)

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def http(monkeypatch):
    stub = HttpStub()
    monkeypatch.setattr(requests, "get", stub)
    return stub


@pytest.fixture(autouse=True)
def fast_environment(monkeypatch):
    monkeypatch.setenv("JIKAN_REQUEST_DELAY", "0")
    monkeypatch.setattr(auth, "PBKDF2_ITERATIONS", 1000)


@pytest.fixture
def store(tmp_path, monkeypatch):
    monkeypatch.setattr(db, "DB_DIR", tmp_path)
    monkeypatch.setattr(db, "DB_PATH", tmp_path / "data.db")
    db.init_db()
    return db
