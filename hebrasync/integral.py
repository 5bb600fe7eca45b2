"""Sequential and concurrent numerical integration of 4/(1+x^2) over [0, 1]."""

from __future__ import annotations

import argparse
import math
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

__all__ = [
    "IntegralReport",
    "f",
    "integral_sequential",
    "partial_sum",
    "integral_concurrent",
    "compare",
    "format_report",
    "main",
]

SAMPLES = 1024 * 1024 * 1024
WORKERS = 4


def _check_samples(samples: int) -> None:
    if samples <= 0:
        raise ValueError(f"the number of samples must be positive, got {samples}")


def _check_workers(workers: int) -> None:
    if workers <= 0:
        raise ValueError(f"the number of workers must be positive, got {workers}")


def f(x: float) -> float:
    """The integrand, whose integral over [0, 1] is pi."""
    return 4.0 / (1.0 + x * x)


def integral_sequential(samples: int = SAMPLES) -> float:
    """Average ``f`` over ``samples`` midpoints in a single thread."""
    _check_samples(samples)
    total = 0.0
    for j in range(samples):
        total += f((j + 0.5) / samples)
    return total / samples


def partial_sum(index: int, samples: int = SAMPLES, workers: int = WORKERS) -> float:
    """Sum ``f`` over the block of midpoints that belongs to worker ``index``."""
    _check_samples(samples)
    _check_workers(workers)
    if not 0 <= index < workers:
        raise ValueError(f"worker index {index} out of range 0..{workers - 1}")
    start = samples * index // workers
    end = samples * (index + 1) // workers
    total = 0.0
    for j in range(start, end):
        total += f((j + 0.5) / samples)
    return total


def integral_concurrent(samples: int = SAMPLES, workers: int = WORKERS) -> float:
    """Average ``f`` over the midpoints, splitting the work among threads."""
    _check_samples(samples)
    _check_workers(workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(partial_sum, i, samples, workers) for i in range(workers)]
        total = 0.0
        for future in futures:
            total += future.result()
    return total / samples


@dataclass(frozen=True)
class IntegralReport:
    """Results and timings of one sequential and one concurrent run."""

    samples: int
    workers: int
    sequential: float
    concurrent: float
    sequential_ms: float
    concurrent_ms: float

    @property
    def percentage(self) -> float:
        """Concurrent time as a percentage of sequential time."""
        if self.sequential_ms == 0:
            return math.inf if self.concurrent_ms > 0 else math.nan
        return 100.0 * self.concurrent_ms / self.sequential_ms


def compare(samples: int = SAMPLES, workers: int = WORKERS) -> IntegralReport:
    """Run both integrations, timing each in milliseconds."""
    start = time.perf_counter()
    sequential = integral_sequential(samples)
    sequential_ms = (time.perf_counter() - start) * 1e3

    start = time.perf_counter()
    concurrent = integral_concurrent(samples, workers)
    concurrent_ms = (time.perf_counter() - start) * 1e3

    return IntegralReport(
        samples=samples,
        workers=workers,
        sequential=sequential,
        concurrent=concurrent,
        sequential_ms=sequential_ms,
        concurrent_ms=concurrent_ms,
    )


def format_report(report: IntegralReport) -> str:
    """Render a report as the lines printed by the command."""
    lines = [
        f"Número de muestras (m)   : {report.samples}",
        f"Número de hebras (n)     : {report.workers}",
        f"Valor de PI              : {math.pi:.18g}",
        f"Resultado secuencial     : {report.sequential:.18g}",
        f"Resultado concurrente    : {report.concurrent:.18g}",
        f"Tiempo secuencial        : {report.sequential_ms:.5g} milisegundos. ",
        f"Tiempo concurrente       : {report.concurrent_ms:.5g} milisegundos. ",
        f"Porcentaje t.conc/t.sec. : {report.percentage:.4g}%",
    ]
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Compare sequential and concurrent integration and print the report."""
    parser = argparse.ArgumentParser(
        prog="hebrasync-integral",
        description="Compute pi by sequential and concurrent integration.",
    )
    parser.add_argument(
        "-m", "--samples", type=int, default=SAMPLES,
        help=f"number of samples (default: {SAMPLES})",
    )
    parser.add_argument(
        "-n", "--workers", type=int, default=WORKERS,
        help=f"number of threads (default: {WORKERS})",
    )
    args = parser.parse_args(argv)
    if args.samples <= 0:
        parser.error("the number of samples must be positive")
    if args.workers <= 0:
        parser.error("the number of workers must be positive")
    print(format_report(compare(args.samples, args.workers)))
    return 0


if __name__ == "__main__":
    sys.exit(main())