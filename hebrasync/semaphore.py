"""Counting semaphores that release blocked threads in FIFO order."""

from __future__ import annotations

import threading

from hebrasync.fifoqueue import FIFOQueue

__all__ = ["Semaphore", "sem_wait", "sem_signal"]

DEFAULT_NAME = "(name not given)"


class Semaphore:
    """Classic semaphore with a non-negative value and FIFO wake-up order.

    Each operation runs in mutual exclusion, like a small monitor: threads
    trying to operate while another one is inside wait in an entry queue,
    and threads waiting for a positive value wait in a separate queue.
    A signal that finds a waiting thread hands the semaphore over to it
    directly, so no newcomer can take the value first.

    Semaphores cannot be copied. They can be used as context managers:
    ``with sem:`` waits on entry and signals on exit.
    """

    def __init__(self, value: int, name: str = DEFAULT_NAME) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"semaphore value must be an int, not {type(value).__name__}")
        if value < 0:
            raise ValueError(f"semaphore value must be non-negative, got {value}")
        self._value = value
        self._name = name
        self._lock = threading.Lock()
        self._enter_queue = FIFOQueue()
        self._wait_queue = FIFOQueue()
        self._is_running = False
        self._running_thread: int | None = None

    @property
    def name(self) -> str:
        """The name given at creation, useful for debugging."""
        return self._name

    @property
    def value(self) -> int:
        """The current value (a snapshot; it may change at any moment)."""
        with self._lock:
            return self._value

    @property
    def waiting(self) -> int:
        """Number of threads blocked in :meth:`wait` for a positive value."""
        with self._lock:
            return self._wait_queue.waiting()

    def _enter(self) -> None:
        with self._lock:
            if self._is_running:
                self._enter_queue.wait(self._lock)
            else:
                self._is_running = True
            self._running_thread = threading.get_ident()

    def _leave(self) -> None:
        assert self._is_running
        assert self._running_thread == threading.get_ident()
        with self._lock:
            if self._enter_queue.waiting() > 0:
                self._enter_queue.signal()
            else:
                self._is_running = False

    def wait(self) -> None:
        """Block until the value is positive, then decrement it."""
        self._enter()
        if self._value == 0:
            with self._lock:
                if self._enter_queue.waiting() > 0:
                    self._enter_queue.signal()
                else:
                    self._is_running = False
                self._wait_queue.wait(self._lock)
                assert self._is_running
                self._running_thread = threading.get_ident()
        assert self._value > 0
        self._value -= 1
        self._leave()

    def signal(self) -> None:
        """Increment the value, waking the oldest waiting thread if any."""
        self._enter()
        self._value += 1
        do_leave = True
        if self._value == 1:
            with self._lock:
                if self._wait_queue.waiting() > 0:
                    # the woken thread takes over and will leave in our place
                    do_leave = False
                    self._wait_queue.signal()
        if do_leave:
            self._leave()

    def __enter__(self) -> Semaphore:
        self.wait()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.signal()

    def __copy__(self):
        raise TypeError("semaphores cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("semaphores cannot be copied")

    def __repr__(self) -> str:
        return f"Semaphore(value={self._value}, name={self._name!r})"


def sem_wait(sem: Semaphore) -> None:
    """Perform the wait operation on ``sem``."""
    sem.wait()


def sem_signal(sem: Semaphore) -> None:
    """Perform the signal operation on ``sem``."""
    sem.signal()