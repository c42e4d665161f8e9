from __future__ import annotations

from datetime import datetime, timezone

from adapters.sqlite_metadata_store import SQLiteMetadataStore
from nudge.models import Metadata


def _store(tmp_path) -> SQLiteMetadataStore:
    store = SQLiteMetadataStore(str(tmp_path / "nudge.db"))
    store.init_db()
    return store


def test_empty_store_has_no_metadata(tmp_path) -> None:
    assert _store(tmp_path).get_metadata() == []


def test_update_then_read_back(tmp_path) -> None:
    store = _store(tmp_path)
    shown_at = datetime(2024, 1, 1, 12, 30, tzinfo=timezone.utc)
    entry = Metadata(id="message-1", display_count=2, pressed=True, last_time_shown=shown_at)

    store.update_metadata(entry)

    assert store.get_metadata() == [entry]


def test_update_replaces_existing_row_and_keeps_order(tmp_path) -> None:
    store = _store(tmp_path)
    store.update_metadata(Metadata(id="first"))
    store.update_metadata(Metadata(id="second"))

    store.update_metadata(Metadata(id="first", dismissed=True, display_count=4))

    assert store.get_metadata() == [
        Metadata(id="first", dismissed=True, display_count=4),
        Metadata(id="second"),
    ]


def test_init_db_is_idempotent(tmp_path) -> None:
    store = _store(tmp_path)
    store.update_metadata(Metadata(id="message-1"))

    store.init_db()

    assert store.get_metadata() == [Metadata(id="message-1")]


def test_exposures_are_appended_in_order(tmp_path) -> None:
    store = _store(tmp_path)

    store.save_exposure("exp-a")
    store.save_exposure(None)

    exposures = store.list_exposures()
    assert [experiment_id for experiment_id, _ in exposures] == ["exp-a", None]
    assert all(recorded_at.tzinfo is not None for _, recorded_at in exposures)
