"""SerialDispatcher - one delivery context for all platform callbacks.

Platform adapters may receive callbacks on arbitrary threads. Submitting
them here runs every callback, in order, on a single worker thread, so the
detector's state never needs locking.
"""

import logging
import queue
import threading
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

_STOP = object()

Job = Tuple[Callable[..., Any], Tuple[Any, ...]]


class SerialDispatcher:
    """
    FIFO queue drained by one worker thread.

    A callback that raises is logged and the worker moves on to the next one.
    """

    def __init__(self, name: str = "beacon-dispatch") -> None:
        self._name = name
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the worker thread (no-op if already running)."""
        if self.running:
            return

        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        logger.info(f"Dispatcher {self._name} started")

    def submit(self, fn: Callable[..., Any], *args: Any) -> None:
        """
        Queue a callback for the worker thread.

        Args:
            fn: Callable to run
            *args: Positional arguments for fn

        Raises:
            RuntimeError: If the dispatcher is not running
        """
        if not self.running:
            raise RuntimeError(f"Dispatcher {self._name} is not running")
        self._queue.put((fn, args))

    def join(self) -> None:
        """Block until every queued callback has run."""
        self._queue.join()

    def stop(self, timeout: Optional[float] = None) -> None:
        """
        Run the remaining callbacks, then stop the worker thread.

        Args:
            timeout: Seconds to wait for the worker (None = wait forever)
        """
        if self._thread is None:
            return

        self._queue.put(_STOP)
        self._thread.join(timeout)
        self._thread = None
        logger.info(f"Dispatcher {self._name} stopped")

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                fn, args = item
                fn(*args)
            except Exception as e:
                logger.error(f"Error in dispatched callback: {e}", exc_info=True)
            finally:
                self._queue.task_done()
