"""
Tests for the in-memory book store.
"""

from api.models import BookResponse
from api.store import BookStore


def make_book(book_id, title="Untitled"):
    return BookResponse(
        id=book_id,
        title=title,
        author="Anonymous",
        publishedDate="2000-01-01",
        summary="..."
    )


def test_empty_store():
    store = BookStore()
    assert len(store) == 0
    assert store.list_books() == []
    assert store.next_id() == 0


def test_add_books_appends_in_order():
    store = BookStore()
    store.add_books([make_book(0, "A"), make_book(1, "B")])
    assert [b.title for b in store.list_books()] == ["A", "B"]
    assert store.next_id() == 2


def test_list_books_is_a_snapshot():
    store = BookStore([make_book(0)])
    snapshot = store.list_books()
    snapshot.clear()
    assert len(store) == 1


def test_get_book_matches_by_id_not_position():
    store = BookStore([make_book(4, "Four"), make_book(0, "Zero")])
    assert store.get_book(0).title == "Zero"
    assert store.get_book(4).title == "Four"
    assert store.get_book(1) is None


def test_put_at_overwrites_in_range():
    store = BookStore([make_book(0, "A"), make_book(1, "B")])
    store.put_at(1, make_book(1, "B2"))
    assert [b.title for b in store.list_books()] == ["A", "B2"]


def test_put_at_appends_past_end():
    store = BookStore([make_book(0, "A")])
    store.put_at(9, make_book(9, "Nine"))
    assert [b.id for b in store.list_books()] == [0, 9]
    assert store.get_book(9).title == "Nine"


def test_remove_at_shifts_later_records():
    store = BookStore([make_book(0), make_book(1), make_book(2)])
    removed = store.remove_at(0)
    assert removed.id == 0
    assert [b.id for b in store.list_books()] == [1, 2]
    assert store.next_id() == 2


def test_remove_at_past_end_is_noop():
    store = BookStore([make_book(0)])
    assert store.remove_at(3) is None
    assert len(store) == 1


def test_clear():
    store = BookStore([make_book(0), make_book(1)])
    store.clear()
    assert len(store) == 0
