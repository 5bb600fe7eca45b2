"""Starting threads, collecting their results and timing a computation."""

from __future__ import annotations

import argparse
import math
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, Sequence, TextIO

__all__ = [
    "factorial",
    "print_counting",
    "run_counting_threads",
    "factorials_with_threads",
    "factorials_with_futures",
    "factorial_report",
    "time_call",
    "main",
]

COUNT = 5000
NUM_THREADS = 8
COUNTING_PREFIXES = ("hebra 1", "                hebra 2")


def factorial(n: int) -> int:
    """Return ``n!``, or 1 for any ``n`` that is not positive."""
    return math.factorial(n) if n > 0 else 1


def print_counting(prefix: str, count: int = COUNT, out: TextIO | None = None) -> None:
    """Write ``count`` numbered lines tagged with ``prefix``."""
    stream = sys.stdout if out is None else out
    for i in range(count):
        stream.write(f"{prefix}, i == {i}\n")
        stream.flush()


def _start_counting_threads(
    count: int, out: TextIO | None, daemon: bool = False
) -> list[threading.Thread]:
    threads = [
        threading.Thread(target=print_counting, args=(prefix, count, out), daemon=daemon)
        for prefix in COUNTING_PREFIXES
    ]
    for thread in threads:
        thread.start()
    return threads


def run_counting_threads(count: int = COUNT, out: TextIO | None = None) -> None:
    """Run two counting threads at once and wait for both to finish."""
    for thread in _start_counting_threads(count, out):
        thread.join()


def factorials_with_threads(values: Iterable[int]) -> list[int]:
    """Compute each factorial in its own thread, collecting into shared storage."""
    values = list(values)
    results: list[int] = [0] * len(values)

    def worker(position: int, n: int) -> None:
        results[position] = factorial(n)

    threads = [
        threading.Thread(target=worker, args=(position, n))
        for position, n in enumerate(values)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return results


def factorials_with_futures(values: Iterable[int]) -> list[int]:
    """Compute each factorial concurrently and return the results in order."""
    values = list(values)
    with ThreadPoolExecutor(max_workers=max(1, len(values))) as pool:
        futures = [pool.submit(factorial, n) for n in values]
        return [future.result() for future in futures]


def factorial_report(num_threads: int = NUM_THREADS, out: TextIO | None = None) -> None:
    """Start ``num_threads`` threads; thread ``i`` writes the factorial of ``i + 1``."""
    stream = sys.stdout if out is None else out

    def worker(i: int) -> None:
        fac = factorial(i + 1)
        stream.write(f"hebra número {i}, factorial({i + 1}) = {fac}\n")

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(num_threads)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def time_call(func: Callable[..., Any], *args: Any) -> tuple[Any, float]:
    """Call ``func(*args)``; return its result and the elapsed microseconds."""
    start = time.perf_counter()
    result = func(*args)
    elapsed = time.perf_counter() - start
    return result, elapsed * 1e6


def _print_two_factorials(results: Sequence[int]) -> None:
    print(f"factorial(5)  == {results[0]}")
    print(f"factorial(10) == {results[1]}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run one of the thread examples, chosen by number (1 to 8)."""
    parser = argparse.ArgumentParser(
        prog="hebrasync-basics", description="Basic multithreading examples."
    )
    parser.add_argument(
        "example",
        type=int,
        nargs="?",
        default=2,
        choices=range(1, 9),
        help="example number (default: 2)",
    )
    args = parser.parse_args(argv)

    if args.example == 1:
        # threads are not waited for: the program may end before they do
        _start_counting_threads(COUNT, None, daemon=True)
    elif args.example == 2:
        run_counting_threads()
    elif args.example in (3, 4):
        _print_two_factorials(factorials_with_threads([5, 10]))
    elif args.example == 5:
        _print_two_factorials(factorials_with_futures([5, 10]))
    elif args.example == 6:
        factorial_report()
    elif args.example == 7:
        values = range(1, NUM_THREADS + 1)
        for n, result in zip(values, factorials_with_futures(values)):
            print(f"factorial({n}) = {result}")
    else:
        _, micros = time_call(factorial, 20)
        print(f"La actividad ha tardado : {micros:g} microsegundos.")
    return 0


if __name__ == "__main__":
    sys.exit(main())