"""Producer and consumer sharing one variable, synchronized with semaphores."""

from __future__ import annotations

import argparse
import sys
import threading
from typing import Sequence, TextIO

from hebrasync.semaphore import Semaphore, sem_signal, sem_wait

__all__ = ["run_producer_consumer", "main"]

ITERATIONS = 10000
_INDENT = " " * 20


def run_producer_consumer(iterations: int = ITERATIONS, out: TextIO | None = None) -> list[int]:
    """Pass the values 1..``iterations`` from a producer to a consumer thread.

    Writes a trace of every step and returns the values consumed, in order.
    """
    if iterations < 0:
        raise ValueError(f"the number of iterations must not be negative, got {iterations}")
    stream = sys.stdout if out is None else out

    def emit(line: str) -> None:
        stream.write(line + "\n")
        stream.flush()

    can_write = Semaphore(1, "puede_escribir")
    can_read = Semaphore(0, "puede_leer")
    shared: list[int] = [0]
    consumed: list[int] = []

    def produce(value: int) -> int:
        emit(f"producido: {value}")
        return value

    def consume(value: int) -> None:
        consumed.append(value)
        emit(f"{_INDENT}consumido: {value}")

    def producer() -> None:
        for value in range(1, iterations + 1):
            produced = produce(value)
            sem_wait(can_write)
            shared[0] = produced
            emit(f"escrito: {produced}")
            sem_signal(can_read)

    def consumer() -> None:
        for _ in range(iterations):
            sem_wait(can_read)
            read = shared[0]
            emit(f"{_INDENT}leído: {read}")
            sem_signal(can_write)
            consume(read)

    threads = [threading.Thread(target=producer), threading.Thread(target=consumer)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return consumed


def main(argv: Sequence[str] | None = None) -> int:
    """Run the producer-consumer example."""
    parser = argparse.ArgumentParser(
        prog="hebrasync-prodcons",
        description="Producer-consumer with semaphores.",
    )
    parser.add_argument(
        "-n", "--iterations", type=int, default=ITERATIONS,
        help=f"number of values to pass (default: {ITERATIONS})",
    )
    args = parser.parse_args(argv)
    if args.iterations < 0:
        parser.error("the number of iterations must not be negative")
    run_producer_consumer(args.iterations)
    return 0


if __name__ == "__main__":
    sys.exit(main())