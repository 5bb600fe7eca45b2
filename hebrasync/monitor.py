"""Hoare-style monitors with urgent-wait signal semantics and FIFO queues."""

from __future__ import annotations

import functools
import threading
from typing import Any, TypeVar

from hebrasync.fifoqueue import FIFOQueue

__all__ = [
    "UninitializedCondVarError",
    "CondVar",
    "HoareMonitor",
    "MonitorRef",
    "create",
]

M = TypeVar("M", bound="HoareMonitor")

DEFAULT_MONITOR_NAME = "unknown"


class UninitializedCondVarError(RuntimeError):
    """Raised when a condition variable not created by a monitor is used."""

    def __init__(self) -> None:
        super().__init__(
            "trying to use a condition variable which is not properly "
            "initialized with 'new_cond_var()' in its monitor"
        )


class CondVar:
    """Condition variable of a :class:`HoareMonitor`.

    ``signal`` has urgent-wait semantics: the signalling thread hands the
    monitor to the oldest waiting thread and waits in the monitor's urgent
    queue until it can run again. Waiting threads are woken in FIFO order.

    A condition variable created without a monitor is unusable; every
    operation on it raises :class:`UninitializedCondVarError`.
    """

    def __init__(self, monitor: HoareMonitor | None = None) -> None:
        self._monitor = monitor
        self._queue = FIFOQueue() if monitor is not None else None

    def _checked_monitor(self) -> HoareMonitor:
        if self._monitor is None or self._queue is None:
            raise UninitializedCondVarError()
        return self._monitor

    def wait(self) -> None:
        """Leave the monitor and block until signalled; then own it again."""
        monitor = self._checked_monitor()
        with monitor._lock:
            monitor._check_owner("wait on a condition variable")
            monitor._hand_over()
            self._queue.wait(monitor._lock)
            monitor._running_thread = threading.get_ident()

    def signal(self) -> None:
        """Wake the oldest waiting thread, if any, and yield the monitor to it."""
        monitor = self._checked_monitor()
        with monitor._lock:
            monitor._check_owner("signal a condition variable")
            if self._queue.waiting() == 0:
                return
            self._queue.signal()
            monitor._urgent_queue.wait(monitor._lock)
            monitor._running_thread = threading.get_ident()

    def waiting(self) -> int:
        """Return the number of threads blocked on this condition variable."""
        monitor = self._checked_monitor()
        with monitor._lock:
            monitor._check_owner("query a condition variable")
            return self._queue.waiting()

    def empty(self) -> bool:
        """Return True when no thread is blocked on this condition variable."""
        return self.waiting() == 0


class HoareMonitor:
    """Base class for monitors whose methods run in mutual exclusion.

    Subclasses create their condition variables with :meth:`new_cond_var`
    and are used through a :class:`MonitorRef` (see :func:`create`), which
    calls :meth:`enter` and :meth:`leave` around every method call.
    """

    def __init__(self, name: str = DEFAULT_MONITOR_NAME) -> None:
        self.name = name
        self._lock = threading.Lock()
        self._enter_queue = FIFOQueue()
        self._urgent_queue = FIFOQueue()
        self._is_running = False
        self._running_thread: int | None = None

    def new_cond_var(self) -> CondVar:
        """Create a condition variable bound to this monitor."""
        return CondVar(self)

    def enter(self) -> None:
        """Gain exclusive access to the monitor, waiting in FIFO order."""
        with self._lock:
            if self._is_running:
                self._enter_queue.wait(self._lock)
            else:
                self._is_running = True
            self._running_thread = threading.get_ident()

    def leave(self) -> None:
        """Release the monitor, preferring urgent threads over entering ones."""
        with self._lock:
            self._check_owner("leave the monitor")
            self._hand_over()

    def _check_owner(self, action: str) -> None:
        if not self._is_running or self._running_thread != threading.get_ident():
            raise RuntimeError(
                f"cannot {action}: the calling thread is not running in "
                f"monitor {self.name!r}"
            )

    def _hand_over(self) -> None:
        # caller holds self._lock
        if self._urgent_queue.waiting() > 0:
            self._urgent_queue.signal()
        elif self._enter_queue.waiting() > 0:
            self._enter_queue.signal()
        else:
            self._is_running = False

    def __enter__(self) -> HoareMonitor:
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.leave()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class MonitorRef:
    """Reference to a monitor that runs every access in mutual exclusion.

    Calling a method through the reference enters the monitor, runs the
    method and leaves the monitor, even if the method raises. Reading a
    plain attribute is done inside the monitor as well.
    """

    def __init__(self, monitor: HoareMonitor) -> None:
        if not isinstance(monitor, HoareMonitor):
            raise TypeError(
                f"a monitor reference needs a HoareMonitor, not {type(monitor).__name__}"
            )
        self._monitor = monitor

    def __getattr__(self, attr: str) -> Any:
        if attr == "_monitor":
            raise AttributeError(attr)
        monitor = self._monitor
        value = getattr(monitor, attr)
        if not callable(value):
            monitor.enter()
            try:
                return getattr(monitor, attr)
            finally:
                monitor.leave()

        @functools.wraps(value)
        def call(*args: Any, **kwargs: Any) -> Any:
            monitor.enter()
            try:
                return value(*args, **kwargs)
            finally:
                monitor.leave()

        return call

    def __repr__(self) -> str:
        return f"MonitorRef({self._monitor!r})"


def create(cls: type[M], *args: Any, **kwargs: Any) -> MonitorRef:
    """Build a monitor of class ``cls`` and return a reference to it."""
    return MonitorRef(cls(*args, **kwargs))