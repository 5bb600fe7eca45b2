"""Per-thread names for debugging, serialized logging and random integers."""

from __future__ import annotations

import random
import threading

__all__ = [
    "ThreadNameError",
    "register_thread_name",
    "get_thread_name",
    "log_message",
    "random_int",
]

UNKNOWN_NAME = "(unknown thread name)"

_names = threading.local()
_log_lock = threading.Lock()
_random_lock = threading.Lock()
_generator = random.Random(random.SystemRandom().getrandbits(64))


class ThreadNameError(RuntimeError):
    """Raised when a thread that already has a name is given another one."""


def register_thread_name(name: str, number: int | None = None) -> str:
    """Give the calling thread a name, optionally followed by a number.

    Returns the registered name. A thread can be named only once.
    """
    full_name = name if number is None else f"{name} {number}"
    existing = getattr(_names, "name", None)
    if existing is not None:
        raise ThreadNameError(
            f"trying to register name {full_name!r} for a thread which was "
            f"already registered with name {existing!r}"
        )
    _names.name = full_name
    return full_name


def get_thread_name() -> str:
    """Return the calling thread's registered name, or a placeholder."""
    return getattr(_names, "name", UNKNOWN_NAME)


def log_message(where: str, msg: str) -> str:
    """Print a line tagged with the thread name and location; return it."""
    line = f"{get_thread_name()} ({where}): {msg}"
    with _log_lock:
        print(line, flush=True)
    return line


def random_int(low: int, high: int) -> int:
    """Return a uniformly distributed integer in ``[low, high]``."""
    if low > high:
        raise ValueError(f"empty range: {low} > {high}")
    with _random_lock:
        return _generator.randint(low, high)