from src.common.pagination import apply_cursor, page
from tests.fake_supabase import FakeSupabase


def _ids(db, last_index=None, page_size=5):
    query = db.table("diary").select("id")
    return [row["id"] for row in apply_cursor(query, last_index, page_size).execute().data]


def test_first_page_starts_from_latest():
    db = FakeSupabase()
    for _ in range(7):
        db.seed("diary")
    assert _ids(db) == [7, 6, 5, 4, 3]


def test_cursor_is_exclusive():
    db = FakeSupabase()
    for _ in range(7):
        db.seed("diary")
    assert _ids(db, last_index=3) == [2, 1]
    assert _ids(db, last_index=1) == []


def test_page_size_limits_results():
    db = FakeSupabase()
    for _ in range(3):
        db.seed("diary")
    assert _ids(db, page_size=2) == [3, 2]
    assert _ids(db, page_size=0) == []


def test_page_matches_store_cursor():
    items = [{"id": number} for number in range(7, 0, -1)]
    assert [item["id"] for item in page(items)] == [7, 6, 5, 4, 3]
    assert [item["id"] for item in page(items, last_index=3)] == [2, 1]
    assert page(items, last_index=1) == []
    assert page([], last_index=10) == []


def test_page_ids_are_below_cursor_and_descending():
    items = [{"id": number} for number in (20, 13, 12, 8, 5, 2)]
    for last_index in (21, 13, 9, 3):
        ids = [item["id"] for item in page(items, last_index, page_size=3)]
        assert all(item_id < last_index for item_id in ids)
        assert ids == sorted(ids, reverse=True)

