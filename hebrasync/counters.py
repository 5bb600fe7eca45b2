"""Concurrent increments of a shared counter: unprotected, atomic and locked."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from dataclasses import dataclass
from typing import Callable, Sequence, TextIO

from hebrasync.basics import factorial

__all__ = [
    "AtomicCounter",
    "CounterRun",
    "count_unsafe",
    "count_atomic",
    "count_mutex",
    "run_comparison",
    "locked_factorial_report",
    "main",
]

ITERATIONS = 1_000_000
ITERATIONS_LARGE = 800_000_000
THREADS = 2
NUM_THREADS = 8


class AtomicCounter:
    """An integer counter whose increments are indivisible."""

    def __init__(self, value: int = 0) -> None:
        self._value = value
        self._lock = threading.Lock()

    def increment(self) -> int:
        """Add one to the counter and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    def value(self) -> int:
        """Return the current value."""
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"AtomicCounter({self.value()})"


@dataclass(frozen=True)
class CounterRun:
    """Outcome of one concurrent counting run."""

    kind: str
    expected: int
    result: int
    milliseconds: float

    @property
    def correct(self) -> bool:
        """True when no increment was lost."""
        return self.result == self.expected


def _check(iterations: int, threads: int) -> None:
    if iterations < 0:
        raise ValueError(f"the number of iterations must not be negative, got {iterations}")
    if threads < 1:
        raise ValueError(f"at least one thread is needed, got {threads}")


def _run(
    kind: str,
    worker: Callable[[], None],
    read: Callable[[], int],
    iterations: int,
    threads: int,
) -> CounterRun:
    start = time.perf_counter()
    workers = [threading.Thread(target=worker) for _ in range(threads)]
    for thread in workers:
        thread.start()
    for thread in workers:
        thread.join()
    elapsed = (time.perf_counter() - start) * 1e3
    return CounterRun(kind, iterations * threads, read(), elapsed)


class _PlainCounter:
    def __init__(self) -> None:
        self.count = 0


def count_unsafe(iterations: int = ITERATIONS, threads: int = THREADS) -> CounterRun:
    """Increment a shared counter with no protection; updates may be lost."""
    _check(iterations, threads)
    counter = _PlainCounter()

    def worker() -> None:
        for _ in range(iterations):
            current = counter.count
            counter.count = current + 1

    return _run("no atom.", worker, lambda: counter.count, iterations, threads)


def count_atomic(iterations: int = ITERATIONS, threads: int = THREADS) -> CounterRun:
    """Increment a shared :class:`AtomicCounter` from several threads."""
    _check(iterations, threads)
    counter = AtomicCounter()

    def worker() -> None:
        for _ in range(iterations):
            counter.increment()

    return _run("atom.", worker, counter.value, iterations, threads)


def count_mutex(iterations: int = ITERATIONS, threads: int = THREADS) -> CounterRun:
    """Increment a plain shared counter, each increment under a mutex."""
    _check(iterations, threads)
    counter = _PlainCounter()
    mutex = threading.Lock()

    def worker() -> None:
        for _ in range(iterations):
            with mutex:
                counter.count += 1

    return _run("mutex", worker, lambda: counter.count, iterations, threads)


def run_comparison(iterations: int = ITERATIONS) -> list[CounterRun]:
    """Run the atomic, unprotected and locked counts with two threads each."""
    return [
        count_atomic(iterations),
        count_unsafe(iterations),
        count_mutex(iterations),
    ]


def locked_factorial_report(num_threads: int = NUM_THREADS, out: TextIO | None = None) -> None:
    """Thread ``i`` writes the factorial of ``i + 1``, writing under a mutex."""
    stream = sys.stdout if out is None else out
    mutex = threading.Lock()

    def worker(i: int) -> None:
        fac = factorial(i + 1)
        with mutex:
            stream.write(f"hebra número {i}, factorial({i + 1}) = {fac}\n")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def _format_runs(expected: int, runs: dict[str, CounterRun]) -> str:
    lines = [f"valor esperado       : {expected}"]
    if "mutex" in runs:
        lines.append(f"resultado (mutex)    : {runs['mutex'].result}")
    lines.append(f"resultado (atom.)    : {runs['atom.'].result}")
    lines.append(f"resultado (no atom.) : {runs['no atom.'].result}")
    if "mutex" in runs:
        lines.append(f"tiempo mutex         : {runs['mutex'].milliseconds:g} milisegundos")
    lines.append(f"tiempo atom.         : {runs['atom.'].milliseconds:g} milisegundos.")
    lines.append(f"tiempo no atom.      : {runs['no atom.'].milliseconds:g} millisegundos.")
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Run one of the counter examples (10, 11) or the locked report (12)."""
    parser = argparse.ArgumentParser(
        prog="hebrasync-counters",
        description="Concurrent counters: unprotected, atomic and with a mutex.",
    )
    parser.add_argument(
        "example", type=int, nargs="?", default=11, choices=(10, 11, 12),
        help="example number (default: 11)",
    )
    parser.add_argument(
        "-i", "--iterations", type=int, default=None,
        help="increments per thread (default depends on the example)",
    )
    args = parser.parse_args(argv)
    if args.iterations is not None and args.iterations < 0:
        parser.error("the number of iterations must not be negative")

    if args.example == 12:
        locked_factorial_report()
        return 0

    if args.example == 10:
        iterations = ITERATIONS_LARGE if args.iterations is None else args.iterations
        runs = [count_atomic(iterations), count_unsafe(iterations)]
    else:
        iterations = ITERATIONS if args.iterations is None else args.iterations
        runs = run_comparison(iterations)
    print(_format_runs(THREADS * iterations, {run.kind: run for run in runs}))
    return 0


if __name__ == "__main__":
    sys.exit(main())