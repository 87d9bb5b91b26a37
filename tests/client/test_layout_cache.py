# tests/client/test_layout_cache.py
"""Tests for the local layout preference cache."""

from bulletin_board.client.layout import LayoutPreferenceCache


def test_read_without_file(tmp_path) -> None:
    assert LayoutPreferenceCache(tmp_path / "layout.json").read() is None


def test_reconcile_writes_stored_value(tmp_path) -> None:
    cache = LayoutPreferenceCache(tmp_path / "prefs" / "layout.json")

    assert cache.reconcile({"id": 1, "narrow_layout": True}) is True
    assert cache.read() is True
    assert cache.reconcile({"id": 1, "narrow_layout": False}) is False
    assert cache.read() is False


def test_corrupt_file_is_ignored(tmp_path) -> None:
    path = tmp_path / "layout.json"
    path.write_text("{not json", encoding="utf-8")

    assert LayoutPreferenceCache(path).read() is None


def test_non_boolean_value_is_ignored(tmp_path) -> None:
    path = tmp_path / "layout.json"
    path.write_text('{"narrow_layout": "yes"}', encoding="utf-8")

    assert LayoutPreferenceCache(path).read() is None
