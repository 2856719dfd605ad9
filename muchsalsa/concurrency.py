"""Jobs, a worker thread pool and a wait group for coordinating them."""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from typing import Any

_log = logging.getLogger(__name__)


class Job:
    """A callable unit of work carrying its own parameters.

    The function is called with the job itself, so it can read the
    parameters through :meth:`get_param`.
    """

    __slots__ = ("_fn", "_params")

    def __init__(self, fn: Callable[[Job], Any] | None = None, *args: Any) -> None:
        self._fn = fn
        self._params: tuple[Any, ...] = args

    def __bool__(self) -> bool:
        return self._fn is not None

    def __call__(self) -> None:
        if self._fn is None:
            raise RuntimeError("Job holds no function.")
        self._fn(self)

    def get_param(self, idx: int) -> Any:
        """Return the parameter at position ``idx``."""
        return self._params[idx]

    def __repr__(self) -> str:
        return f"Job({self._fn!r}, params={self._params!r})"


class ThreadPool:
    """A fixed set of worker threads executing queued jobs.

    Jobs still queued when the pool shuts down are executed before the
    workers exit.
    """

    def __init__(self, thread_count: int) -> None:
        if thread_count < 1:
            raise ValueError("A thread pool needs at least one thread.")
        self._jobs: deque[Job] = deque()
        self._condition = threading.Condition()
        self._terminate = False
        self._threads = [
            threading.Thread(target=self._work, name=f"muchsalsa-worker-{n}", daemon=True)
            for n in range(thread_count)
        ]
        for thread in self._threads:
            thread.start()

    def _work(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._jobs or self._terminate)
                if not self._jobs:
                    return
                job = self._jobs.popleft()
            if not job:
                continue
            try:
                job()
            except Exception:
                _log.exception("Job raised an exception")

    def add_job(self, job: Job) -> None:
        """Queue ``job`` for execution by one of the workers."""
        with self._condition:
            if self._terminate:
                raise RuntimeError("Thread pool has been shut down.")
            self._jobs.append(job)
            self._condition.notify()

    def shutdown(self) -> None:
        """Finish all queued jobs and stop the workers."""
        with self._condition:
            if self._terminate:
                return
            self._terminate = True
            self._condition.notify_all()
        for thread in self._threads:
            thread.join()

    def __enter__(self) -> ThreadPool:
        return self

    def __exit__(self, *args: object) -> None:
        self.shutdown()


class WaitGroup:
    """Blocks a caller until a number of jobs have reported completion.

    While :meth:`wait` is in progress, :meth:`add` blocks until it returns;
    after it returns the group can be reused.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._waiting = False
        self._count = 0

    def add(self, new_jobs: int) -> None:
        """Raise the pending job counter by ``new_jobs``."""
        if new_jobs < 0:
            raise ValueError("Number of new jobs must not be negative.")
        with self._condition:
            self._condition.wait_for(lambda: not self._waiting)
            self._count += new_jobs

    def done(self) -> None:
        """Record that one job has completed."""
        with self._condition:
            if self._count == 0:
                raise ValueError("WaitGroup counter would become negative.")
            self._count -= 1
            if self._count == 0:
                self._condition.notify_all()

    def wait(self) -> None:
        """Block until every added job has called :meth:`done`."""
        with self._condition:
            self._waiting = True
            self._condition.wait_for(lambda: self._count == 0)
            self._waiting = False
            self._condition.notify_all()

    @property
    def pending(self) -> int:
        """Number of jobs not yet reported as done."""
        with self._condition:
            return self._count