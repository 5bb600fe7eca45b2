"""A condition-variable-like queue that wakes waiting threads in FIFO order."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, field

__all__ = ["FIFOQueue"]


@dataclass
class _Waiter:
    condition: threading.Condition
    woken: bool = field(default=False)


class FIFOQueue:
    """Threads block in :meth:`wait` and are released one at a time, oldest first.

    Both operations must be called while holding the lock passed to ``wait``.
    """

    def __init__(self) -> None:
        self._waiters: deque[_Waiter] = deque()

    def wait(self, lock: threading.Lock) -> None:
        """Release ``lock``, block until signalled, then reacquire ``lock``."""
        waiter = _Waiter(threading.Condition(lock))
        self._waiters.append(waiter)
        try:
            while not waiter.woken:
                waiter.condition.wait()
        except BaseException:
            if not waiter.woken:
                self._waiters.remove(waiter)
            raise

    def signal(self) -> None:
        """Wake the oldest waiting thread; do nothing if none is waiting."""
        if not self._waiters:
            return
        waiter = self._waiters.popleft()
        waiter.woken = True
        waiter.condition.notify()

    def waiting(self) -> int:
        """Return the number of threads blocked and not yet signalled."""
        return len(self._waiters)

    def __len__(self) -> int:
        return len(self._waiters)