"""Remote calls owned by a screen.

A :class:`ScreenScope` lives exactly as long as the screen that opened it.
Every call it starts runs on a shared executor and reports back by
dispatching an action into the screen's :class:`~.state.Store`. Closing the
scope cancels calls that have not started and discards the results of calls
that finish afterwards, so a screen that is gone never has its state touched.
"""

from __future__ import annotations

import threading
from concurrent.futures import FIRST_EXCEPTION, Executor, Future
from concurrent.futures import wait as wait_futures
from contextlib import AbstractContextManager, nullcontext
from typing import Any, Callable, Optional

from .state import Action, Store

ContextFactory = Callable[[], AbstractContextManager]


class ScreenScope:
    """Tracks the futures started on behalf of one screen."""

    def __init__(
        self,
        executor: Executor,
        store: Store,
        context: Optional[ContextFactory] = None,
    ) -> None:
        self.store = store
        self._executor = executor
        self._context = context or nullcontext
        self._futures: list[Future] = []
        self._lock = threading.RLock()
        self._closed = False
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def submit(
        self,
        fn: Callable[..., Any],
        *args: Any,
        to_action: Optional[Callable[[Any], Optional[Action]]] = None,
    ) -> Future:
        """Run ``fn(*args)`` and dispatch ``to_action(result)`` when it succeeds.

        ``to_action`` may return ``None`` (for example when a service reports
        failure with a ``None`` result) in which case nothing is dispatched.
        """
        with self._lock:
            if self._closed:
                raise RuntimeError("Screen scope is already closed.")
            future = self._executor.submit(self._run, to_action, fn, *args)
            self._futures.append(future)
        return future

    def _run(
        self,
        to_action: Optional[Callable[[Any], Optional[Action]]],
        fn: Callable[..., Any],
        *args: Any,
    ) -> Any:
        with self._context():
            result = fn(*args)
        # Dispatch happens before the future resolves.
        if to_action is not None:
            self._deliver(to_action, result)
        return result

    def _deliver(self, to_action: Callable[[Any], Optional[Action]], result: Any) -> None:
        with self._lock:
            if self._closed:
                self.dropped += 1
                return
            action = to_action(result)
            if action is not None:
                self.store.dispatch(action)

    def wait(self, timeout: Optional[float] = None) -> Store:
        """Block until every started call has finished, then return the store.

        The first exception raised by a call is re-raised here.
        """
        with self._lock:
            futures = list(self._futures)
        done, _ = wait_futures(futures, timeout=timeout, return_when=FIRST_EXCEPTION)
        for future in done:
            if not future.cancelled() and future.exception() is not None:
                raise future.exception()
        return self.store

    def close(self) -> int:
        """Cancel outstanding calls; return how many could still be cancelled."""
        with self._lock:
            if self._closed:
                return 0
            self._closed = True
            futures = list(self._futures)
        return sum(1 for future in futures if future.cancel())

    def __enter__(self) -> ScreenScope:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
