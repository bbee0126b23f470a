"""Tests for the indexing schedulers."""

import threading

import pytest

from factories import GitSourceFactory, SourceOwnerFactory
from git_source.notifications.scheduler import (
    IndexingRequest,
    LoggingIndexingScheduler,
    QueueIndexingScheduler,
)


@pytest.fixture
def owner():
    return SourceOwnerFactory(full_name="folder/repo", sources=[GitSourceFactory(id="repo")])


@pytest.mark.unit
class TestQueueIndexingScheduler:
    """Tests for QueueIndexingScheduler."""

    def test_handles_requests_in_order(self, owner) -> None:
        handled: list[IndexingRequest] = []
        scheduler = QueueIndexingScheduler(handled.append)
        scheduler.start()
        try:
            scheduler.schedule_indexing(owner, owner.sources[0], "hook")
            scheduler.schedule_indexing(owner, owner.sources[0], "cli")
            scheduler.join()
        finally:
            scheduler.stop()

        assert [(r.owner, r.source_id, r.origin) for r in handled] == [
            ("folder/repo", "repo", "hook"),
            ("folder/repo", "repo", "cli"),
        ]
        assert not scheduler.running

    def test_handler_failure_does_not_stop_worker(self, owner) -> None:
        handled: list[str] = []

        def handler(request: IndexingRequest) -> None:
            if request.origin == "boom":
                raise RuntimeError("indexing failed")
            handled.append(request.origin)

        scheduler = QueueIndexingScheduler(handler)
        scheduler.start()
        try:
            scheduler.schedule_indexing(owner, owner.sources[0], "boom")
            scheduler.schedule_indexing(owner, owner.sources[0], "ok")
            scheduler.join()
        finally:
            scheduler.stop()

        assert handled == ["ok"]

    def test_full_queue_drops_without_blocking(self, owner) -> None:
        release = threading.Event()
        started = threading.Event()
        handled: list[str] = []

        def handler(request: IndexingRequest) -> None:
            started.set()
            release.wait(5)
            handled.append(request.origin)

        scheduler = QueueIndexingScheduler(handler, maxsize=1)
        scheduler.start()
        try:
            scheduler.schedule_indexing(owner, owner.sources[0], "first")
            assert started.wait(5)
            scheduler.schedule_indexing(owner, owner.sources[0], "queued")
            scheduler.schedule_indexing(owner, owner.sources[0], "dropped")
            release.set()
            scheduler.join()
        finally:
            scheduler.stop()

        assert handled == ["first", "queued"]

    def test_start_is_idempotent(self) -> None:
        scheduler = QueueIndexingScheduler(lambda request: None)
        scheduler.start()
        scheduler.start()
        assert scheduler.running
        scheduler.stop()
        scheduler.stop()
        assert not scheduler.running


@pytest.mark.unit
class TestLoggingIndexingScheduler:
    """Tests for LoggingIndexingScheduler."""

    def test_accepts_requests(self, owner) -> None:
        assert LoggingIndexingScheduler().schedule_indexing(owner, owner.sources[0]) is None
