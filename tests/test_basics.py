import io
import math

import pytest

from hebrasync.basics import (
    factorial,
    factorial_report,
    factorials_with_futures,
    factorials_with_threads,
    main,
    print_counting,
    run_counting_threads,
    time_call,
)


@pytest.mark.parametrize("n", [1, 5, 10, 20])
def test_factorial_positive(n):
    assert factorial(n) == math.factorial(n)


@pytest.mark.parametrize("n", [0, -1, -7])
def test_factorial_non_positive_is_one(n):
    assert factorial(n) == 1


def test_print_counting_lines():
    out = io.StringIO()
    print_counting("hebra 1", 3, out)
    assert out.getvalue().splitlines() == [
        "hebra 1, i == 0",
        "hebra 1, i == 1",
        "hebra 1, i == 2",
    ]


def test_run_counting_threads_keeps_each_thread_in_order():
    out = io.StringIO()
    run_counting_threads(200, out)
    lines = out.getvalue().splitlines()
    assert len(lines) == 400
    first = [line for line in lines if line.startswith("hebra 1")]
    second = [line for line in lines if line.startswith("                hebra 2")]
    assert first == [f"hebra 1, i == {i}" for i in range(200)]
    assert second == [f"                hebra 2, i == {i}" for i in range(200)]


def test_factorials_with_threads():
    assert factorials_with_threads([5, 10]) == [math.factorial(5), math.factorial(10)]


def test_factorials_with_futures_keeps_order():
    values = list(range(1, 9))
    assert factorials_with_futures(values) == [math.factorial(n) for n in values]


def test_factorials_with_futures_empty():
    assert factorials_with_futures([]) == []


def test_threads_and_futures_agree():
    values = [3, 0, 12, 7]
    assert factorials_with_threads(values) == factorials_with_futures(values)


def test_factorial_report_lines():
    out = io.StringIO()
    factorial_report(8, out)
    lines = out.getvalue().splitlines()
    expected = {
        f"hebra número {i}, factorial({i + 1}) = {math.factorial(i + 1)}" for i in range(8)
    }
    assert len(lines) == 8
    assert set(lines) == expected


def test_time_call_returns_result_and_duration():
    result, micros = time_call(factorial, 20)
    assert result == math.factorial(20)
    assert micros >= 0.0


def test_time_call_passes_arguments():
    result, _ = time_call(max, 3, 9, 4)
    assert result == 9


def test_main_example_three(capsys):
    assert main(["3"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        f"factorial(5)  == {math.factorial(5)}",
        f"factorial(10) == {math.factorial(10)}",
    ]


def test_main_example_seven(capsys):
    assert main(["7"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [f"factorial({n}) = {math.factorial(n)}" for n in range(1, 9)]


def test_main_example_eight(capsys):
    assert main(["8"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("La actividad ha tardado : ")
    assert out.rstrip().endswith("microsegundos.")


def test_main_rejects_unknown_example():
    with pytest.raises(SystemExit):
        main(["9"])