from jobs import JobStore
from models import JobStatus
from tests.conftest import FakeClock


def test_unknown_job():
    record = JobStore().get("missing")

    assert record.status == JobStatus.UNKNOWN
    assert record.to_dict() == {"status": "unknown", "message": "Job not found"}


def test_set_overwrites_previous_record():
    store = JobStore()
    store.set("42", JobStatus.EXTRACTING, "Extracting slides...")
    store.set("42", JobStatus.TRANSLATING, "Translating content... (33%)")

    assert store.get("42").to_dict() == {"status": "translating", "message": "Translating content... (33%)"}
    assert len(store) == 1


def test_jobs_are_independent():
    store = JobStore()
    store.set("a", JobStatus.COMPLETED, "done")
    store.set("b", JobStatus.ERROR, "boom")

    assert store.get("a").status == JobStatus.COMPLETED
    assert store.get("b").message == "boom"


def test_finished_jobs_are_evicted_after_retention():
    clock = FakeClock()
    store = JobStore(clock=clock, retention_seconds=60)
    store.set("done", JobStatus.COMPLETED, "PDF translation ready!")
    store.set("failed", JobStatus.ERROR, "Could not extract text from PDF.")

    clock.advance(60)
    assert store.get("done").status == JobStatus.COMPLETED

    clock.advance(1)
    assert store.get("done").status == JobStatus.UNKNOWN
    assert "failed" not in store


def test_running_jobs_are_never_evicted():
    clock = FakeClock()
    store = JobStore(clock=clock, retention_seconds=60)
    store.set("slow", JobStatus.TRANSLATING, "Translating content... (50%)")

    clock.advance(10_000)

    assert store.get("slow").status == JobStatus.TRANSLATING


def test_retention_counts_from_last_update():
    clock = FakeClock()
    store = JobStore(clock=clock, retention_seconds=60)
    store.set("job", JobStatus.TRANSLATING, "working")
    clock.advance(100)
    store.set("job", JobStatus.COMPLETED, "done")
    clock.advance(30)

    assert store.purge_expired() == 0
    clock.advance(31)
    assert store.purge_expired() == 1
