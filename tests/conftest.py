"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app, get_store
from api.models import BookResponse
from api.store import BookStore


@pytest.fixture
def store():
    """Fresh, empty book store for each test."""
    return BookStore()


@pytest.fixture
def client(store):
    """Test client wired to the per-test store."""
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def book_payload():
    """A complete, valid book payload."""
    return {
        "title": "The Left Hand of Darkness",
        "author": "Ursula K. Le Guin",
        "publishedDate": "1969-03-01",
        "summary": "An envoy visits a planet whose people have no fixed sex."
    }


@pytest.fixture
def sample_books():
    """Three stored records with ids matching their positions."""
    return [
        BookResponse(
            id=0,
            title="Dune",
            author="Frank Herbert",
            publishedDate="1965-08-01",
            summary="Desert planet politics."
        ),
        BookResponse(
            id=1,
            title="Neuromancer",
            author="William Gibson",
            publishedDate="1984-07-01",
            summary="A washed-up hacker takes one last job."
        ),
        BookResponse(
            id=2,
            title="Kindred",
            author="Octavia E. Butler",
            publishedDate="1979-06-01",
            summary="A writer is pulled back in time."
        ),
    ]


@pytest.fixture
def seeded_store(store, sample_books):
    """The per-test store pre-filled with the sample books."""
    store.add_books(sample_books)
    return store
