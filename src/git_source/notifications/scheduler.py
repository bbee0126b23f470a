"""Hand-off of re-indexing requests to a background worker."""

import queue
import threading
from datetime import datetime, timezone
from typing import Callable, Protocol

import structlog
from pydantic import BaseModel, Field

from git_source.sources.models import GitSource, SourceOwner

logger = structlog.get_logger(__name__)


class IndexingRequest(BaseModel):
    """Ask for an owner to re-index one of its sources."""

    owner: str
    source_id: str
    remote: str
    origin: str | None = None
    requested_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    class Config:
        frozen = True


class IndexingScheduler(Protocol):
    """Accepts re-indexing requests without reporting their outcome."""

    def schedule_indexing(
        self, owner: SourceOwner, source: GitSource, origin: str | None = None
    ) -> None:
        ...


def _request(owner: SourceOwner, source: GitSource, origin: str | None) -> IndexingRequest:
    return IndexingRequest(
        owner=owner.full_name,
        source_id=source.id,
        remote=source.remote,
        origin=origin,
    )


class LoggingIndexingScheduler:
    """Only logs requests. Used for dry runs."""

    def schedule_indexing(
        self, owner: SourceOwner, source: GitSource, origin: str | None = None
    ) -> None:
        request = _request(owner, source, origin)
        logger.info(
            "Indexing requested",
            owner=request.owner,
            source_id=request.source_id,
            origin=origin,
        )


class QueueIndexingScheduler:
    """Queues requests for a worker thread that runs ``handler`` on each.

    ``schedule_indexing`` never blocks: when the queue is full the request
    is dropped with a warning. Handler failures are logged and the worker
    moves on.
    """

    _STOP = object()

    def __init__(
        self,
        handler: Callable[[IndexingRequest], None],
        maxsize: int = 1000,
    ) -> None:
        self._handler = handler
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._thread = threading.Thread(
            target=self._run, name="indexing-scheduler", daemon=True
        )
        self._thread.start()
        logger.info("Indexing scheduler started")

    def stop(self, timeout: float | None = 5.0) -> None:
        """Finish queued requests, then stop the worker."""
        if not self.running:
            return
        self._queue.put(self._STOP)
        self._thread.join(timeout)
        self._thread = None
        logger.info("Indexing scheduler stopped")

    def schedule_indexing(
        self, owner: SourceOwner, source: GitSource, origin: str | None = None
    ) -> None:
        request = _request(owner, source, origin)
        try:
            self._queue.put_nowait(request)
        except queue.Full:
            logger.warning(
                "Indexing queue full, dropping request",
                owner=request.owner,
                source_id=request.source_id,
            )

    def join(self) -> None:
        """Block until every queued request has been handled."""
        self._queue.join()

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is self._STOP:
                    return
                self._handler(item)
            except Exception:
                logger.exception(
                    "Indexing handler failed",
                    owner=item.owner,
                    source_id=item.source_id,
                )
            finally:
                self._queue.task_done()
