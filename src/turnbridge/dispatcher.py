"""Single-worker background dispatch with a polled response queue."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

from loguru import logger

from . import responses
from .responses import NO_RESPONSE, Response

WORKER_THREAD_PREFIX = "turnbridge-worker"


class ResponseQueue:
    """FIFO of completed responses awaiting the turn loop's poll."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: deque[Response] = deque()

    def push(self, response: Response) -> None:
        with self._lock:
            self._items.append(response)

    def has_response(self) -> bool:
        with self._lock:
            return bool(self._items)

    def pop(self) -> Response:
        """Return the oldest response, or ``NO_RESPONSE`` when empty."""
        with self._lock:
            if not self._items:
                return NO_RESPONSE
            return self._items.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class AsyncDispatcher:
    """Run jobs on one background worker, at most one outstanding at a time.

    ``submit`` waits for the previous job before handing over the next one,
    so responses reach the queue in issue order. Jobs cannot be cancelled.
    """

    def __init__(self, queue: ResponseQueue | None = None) -> None:
        self.queue = queue if queue is not None else ResponseQueue()
        self._executor: ThreadPoolExecutor | None = None
        self._inflight: Future[None] | None = None
        self._pending = threading.Event()

    @property
    def pending(self) -> bool:
        return self._pending.is_set()

    def submit(self, job: Callable[[], Response]) -> None:
        self.wait()
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=WORKER_THREAD_PREFIX)
        self._pending.set()
        self._inflight = self._executor.submit(self._run, job)

    def _run(self, job: Callable[[], Response]) -> None:
        try:
            try:
                response = job()
            except Exception as exc:
                logger.exception("dispatcher.job.error")
                response = responses.worker_failure(exc)
            self.queue.push(response)
        finally:
            self._pending.clear()

    def wait(self) -> None:
        """Block until the in-flight job, if any, has queued its response."""
        inflight = self._inflight
        if inflight is None:
            return
        inflight.result()
        self._inflight = None

    def shutdown(self) -> None:
        self.wait()
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
