"""Tests for partition reconciliation."""

import pytest

from journal_sync.errors import MissingRecordIdError, StoreError
from journal_sync.models import Record
from journal_sync.sync.reconciler import Reconciler


@pytest.fixture
def reconciler(store):
    return Reconciler(store)


def test_first_sync_uploads_then_downloads(reconciler, store):
    local = [{"id": "1", "content": "hello", "date": "2024-01-01"}]

    result = reconciler.reconcile("daily", local)
    assert result.to_download == []
    assert result.uploaded_count == 1
    assert store.get("daily", "1").content == "hello"

    again = reconciler.reconcile("daily", [])
    assert [r.id for r in again.to_download] == ["1"]
    assert again.to_download[0].content == "hello"
    assert again.to_download[0].date == "2024-01-01"
    assert again.uploaded_count == 0


def test_download_is_exact_complement(reconciler, store):
    for i in range(5):
        store.upsert_replace(Record(id=str(i), app_id="daily", timestamp=i))

    result = reconciler.reconcile("daily", [{"id": "1"}, {"id": "3"}, {"id": "new"}])

    assert sorted(r.id for r in result.to_download) == ["0", "2", "4"]
    stored = {r.id for r in store.list_by_partition("daily")}
    assert {"1", "3", "new"} <= stored


def test_download_keeps_timestamp_order(reconciler, store):
    store.upsert_replace(Record(id="a", app_id="daily", timestamp=1))
    store.upsert_replace(Record(id="b", app_id="daily", timestamp=3))
    store.upsert_replace(Record(id="c", app_id="daily", timestamp=2))

    result = reconciler.reconcile("daily", [])
    assert [r.id for r in result.to_download] == ["b", "c", "a"]


def test_sync_does_not_overwrite_server_copy(reconciler, store):
    store.upsert_replace(Record(id="x", app_id="daily", content="server-version"))

    result = reconciler.reconcile("daily", [{"id": "x", "content": "client-version"}])

    assert result.to_download == []
    assert store.get("daily", "x").content == "server-version"


def test_local_app_id_is_overridden(reconciler, store):
    reconciler.reconcile("daily", [{"id": "1", "appId": "someone-else"}])

    assert store.get("daily", "1") is not None
    assert store.list_by_partition("someone-else") == []


def test_partitions_do_not_leak(reconciler, store):
    store.upsert_replace(Record(id="a1", app_id="a"))

    result = reconciler.reconcile("b", [])
    assert result.to_download == []


def test_uploaded_count_is_submitted_count(reconciler, store):
    store.upsert_replace(Record(id="dup", app_id="daily"))

    result = reconciler.reconcile("daily", [{"id": "dup"}, {"id": "n"}, {"id": "n"}])

    assert result.uploaded_count == 3
    assert store.count("daily") == 2


def test_tags_decoded_for_download(reconciler, store):
    store.upsert_replace(Record(id="t", app_id="daily", tags=["x", "y"]))

    result = reconciler.reconcile("daily", [])
    assert result.to_download[0].tags == ["x", "y"]


def test_accepts_record_objects(reconciler, store):
    reconciler.reconcile("daily", [Record(id="obj", app_id="daily", content="c")])
    assert store.get("daily", "obj").content == "c"


def test_missing_id_rejected_before_any_write(reconciler, store):
    with pytest.raises(MissingRecordIdError) as exc_info:
        reconciler.reconcile("daily", [{"id": "ok"}, {"content": "no id"}])

    assert exc_info.value.position == 1
    assert store.count("daily") == 0


def test_empty_app_id_uses_default(store):
    reconciler = Reconciler(store, default_app_id="mood")
    reconciler.reconcile("", [{"id": "1"}])
    assert store.get("mood", "1") is not None


def test_repeat_sync_is_stable(reconciler, store):
    local = [{"id": "1", "content": "a"}, {"id": "2", "content": "b"}]
    reconciler.reconcile("daily", local)
    snapshot = store.list_by_partition("daily")

    reconciler.reconcile("daily", local)
    assert store.list_by_partition("daily") == snapshot


def test_store_failure_propagates(reconciler, store):
    store.close()
    with pytest.raises(StoreError):
        reconciler.reconcile("daily", [{"id": "1"}])


def test_structured_fields_do_not_fail_sync(reconciler, store):
    result = reconciler.reconcile(
        "daily",
        [
            {"id": "1", "timestamp": {"ms": 1}},
            {"id": "2", "date": {"y": 2024}, "dateISO": ["2024", "01"]},
            {"id": "3", "timestamp": 2**70},
        ],
    )

    assert result.uploaded_count == 3
    assert store.get("daily", "1").timestamp == '{"ms": 1}'
    assert store.get("daily", "2").date == '{"y": 2024}'
    assert store.get("daily", "3").timestamp == str(2**70)


def test_non_object_entries_still_counted(reconciler, store):
    result = reconciler.reconcile("daily", [{"id": "1"}, "junk", None])
    assert result.uploaded_count == 3
    assert store.count("daily") == 1
