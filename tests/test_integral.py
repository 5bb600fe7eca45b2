import math

import pytest

from hebrasync.integral import (
    IntegralReport,
    compare,
    f,
    format_report,
    integral_concurrent,
    integral_sequential,
    main,
    partial_sum,
)


def test_f_at_zero():
    assert f(0.0) == 4.0


def test_f_at_one():
    assert f(1.0) == 2.0


def test_f_is_decreasing_on_unit_interval():
    assert f(0.1) > f(0.5) > f(0.9)


def test_sequential_approximates_pi():
    assert integral_sequential(2000) == pytest.approx(math.pi, abs=1e-6)


@pytest.mark.parametrize("workers", [1, 2, 3, 4, 7])
def test_concurrent_matches_sequential(workers):
    samples = 3000
    assert integral_concurrent(samples, workers) == pytest.approx(
        integral_sequential(samples), rel=1e-12
    )


def test_partial_sums_cover_all_samples():
    samples, workers = 1001, 4
    total = sum(partial_sum(i, samples, workers) for i in range(workers))
    assert total / samples == pytest.approx(integral_sequential(samples), rel=1e-12)


def test_single_worker_partial_sum_is_whole_sum():
    samples = 500
    assert partial_sum(0, samples, 1) / samples == pytest.approx(
        integral_sequential(samples), rel=1e-12
    )


def test_partial_sum_rejects_bad_index():
    with pytest.raises(ValueError):
        partial_sum(4, 100, 4)
    with pytest.raises(ValueError):
        partial_sum(-1, 100, 4)


def test_rejects_non_positive_samples_and_workers():
    with pytest.raises(ValueError):
        integral_sequential(0)
    with pytest.raises(ValueError):
        integral_concurrent(100, 0)


def test_compare_fields():
    report = compare(800, 4)
    assert report.samples == 800
    assert report.workers == 4
    assert report.sequential == pytest.approx(report.concurrent, rel=1e-12)
    assert report.sequential_ms >= 0.0
    assert report.concurrent_ms >= 0.0


def test_percentage():
    report = IntegralReport(10, 2, 3.0, 3.0, sequential_ms=200.0, concurrent_ms=50.0)
    assert report.percentage == 25.0


def test_percentage_with_zero_sequential_time():
    report = IntegralReport(10, 2, 3.0, 3.0, sequential_ms=0.0, concurrent_ms=1.0)
    assert report.percentage == float("inf")


def test_format_report_lines():
    report = compare(1000, 4)
    lines = format_report(report).splitlines()
    assert len(lines) == 8
    assert lines[0] == "Número de muestras (m)   : 1000"
    assert lines[1] == "Número de hebras (n)     : 4"
    assert lines[2].startswith("Valor de PI              : 3.14159265358979")
    assert lines[5].endswith(" milisegundos. ")
    assert lines[7].startswith("Porcentaje t.conc/t.sec. : ")
    assert lines[7].endswith("%")


def test_main_prints_report(capsys):
    assert main(["-m", "1000", "-n", "2"]) == 0
    out = capsys.readouterr().out
    assert "Número de muestras (m)   : 1000" in out
    assert "Número de hebras (n)     : 2" in out


def test_main_rejects_zero_workers():
    with pytest.raises(SystemExit):
        main(["-m", "100", "-n", "0"])