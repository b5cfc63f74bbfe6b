"""
Shared fixtures. Each ``client`` runs the app lifespan, so every test
starts with a fresh, empty keyword store.
"""
import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.keyword_store import KeywordStore


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def store():
    return KeywordStore()


@pytest.fixture
def sql_store(store):
    for word in ("SELECT", "FROM", "WHERE"):
        store.create(word)
    return store
