import io
import re
import threading

import pytest

from hebrasync.basics import factorial
from hebrasync.counters import (
    AtomicCounter,
    CounterRun,
    count_atomic,
    count_mutex,
    count_unsafe,
    locked_factorial_report,
    main,
    run_comparison,
)


def test_atomic_counter_initial_value():
    assert AtomicCounter(7).value() == 7
    assert AtomicCounter().value() == 0


def test_atomic_counter_increment_returns_new_value():
    counter = AtomicCounter(3)
    assert counter.increment() == 4
    assert counter.increment() == 5
    assert counter.value() == 5


def test_atomic_counter_concurrent_increments_are_exact():
    counter = AtomicCounter()

    def work():
        for _ in range(2000):
            counter.increment()

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert counter.value() == 8000


@pytest.mark.parametrize("threads", [1, 2, 3])
def test_count_atomic_is_exact(threads):
    run = count_atomic(5000, threads)
    assert run.kind == "atom."
    assert run.expected == 5000 * threads
    assert run.result == run.expected
    assert run.correct
    assert run.milliseconds >= 0


@pytest.mark.parametrize("threads", [1, 2, 4])
def test_count_mutex_is_exact(threads):
    run = count_mutex(5000, threads)
    assert run.kind == "mutex"
    assert run.result == 5000 * threads
    assert run.correct


def test_count_unsafe_never_exceeds_expected():
    run = count_unsafe(20000, 2)
    assert run.kind == "no atom."
    assert run.expected == 40000
    assert 2 <= run.result <= run.expected


def test_count_unsafe_single_thread_is_exact():
    run = count_unsafe(3000, 1)
    assert run.result == 3000


def test_zero_iterations():
    assert count_atomic(0).result == 0
    assert count_mutex(0).result == 0


@pytest.mark.parametrize("func", [count_unsafe, count_atomic, count_mutex])
def test_negative_iterations_rejected(func):
    with pytest.raises(ValueError):
        func(-1)


@pytest.mark.parametrize("func", [count_unsafe, count_atomic, count_mutex])
def test_no_threads_rejected(func):
    with pytest.raises(ValueError):
        func(10, 0)


def test_run_comparison_order_and_results():
    runs = run_comparison(1000)
    assert [run.kind for run in runs] == ["atom.", "no atom.", "mutex"]
    assert all(run.expected == 2000 for run in runs)
    assert runs[0].correct and runs[2].correct


def test_counter_run_correct_flag():
    assert not CounterRun("no atom.", 10, 9, 1.0).correct
    assert CounterRun("mutex", 10, 10, 1.0).correct


def test_locked_factorial_report_lines():
    out = io.StringIO()
    locked_factorial_report(8, out)
    lines = out.getvalue().splitlines()
    assert len(lines) == 8
    seen = set()
    for line in lines:
        match = re.fullmatch(r"hebra número (\d+), factorial\((\d+)\) = (\d+)", line)
        assert match
        i, n, fac = (int(g) for g in match.groups())
        assert n == i + 1
        assert fac == factorial(n)
        seen.add(i)
    assert seen == set(range(8))
    assert "hebra número 3, factorial(4) = 24" in lines


def test_main_example_11_output(capsys):
    assert main(["11", "-i", "500"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "valor esperado       : 1000"
    assert lines[1] == "resultado (mutex)    : 1000"
    assert lines[2] == "resultado (atom.)    : 1000"
    assert lines[3].startswith("resultado (no atom.) : ")
    assert lines[4].startswith("tiempo mutex         : ")
    assert len(lines) == 7


def test_main_example_10_has_no_mutex(capsys):
    assert main(["10", "-i", "200"]) == 0
    out = capsys.readouterr().out
    assert "mutex" not in out
    assert "resultado (atom.)    : 400" in out


def test_main_rejects_negative_iterations():
    with pytest.raises(SystemExit):
        main(["11", "-i", "-5"])