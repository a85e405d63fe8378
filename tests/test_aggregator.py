import pandas as pd
import pytest

import aggregator
from data_structures import IterationRecord, RunReport
from exceptions import EmptyReportError


def _iter(prep, solve, number=1):
    return IterationRecord(
        number=number,
        preparing_time=pd.Timedelta(seconds=prep),
        solving_time=pd.Timedelta(seconds=solve),
    )


@pytest.fixture
def report():
    return RunReport(iterations=(_iter(1, 2, 1), _iter(0.5, 1.5, 2)))


def test_totals(report):
    assert report.total_time_preparing() == pd.Timedelta(seconds=1.5)
    assert report.total_time_solving() == pd.Timedelta(seconds=3.5)
    assert report.total_time() == pd.Timedelta(seconds=5)


def test_average(report):
    assert report.average_time() == pd.Timedelta(seconds=2.5)


def test_iteration_count(report):
    assert report.iteration_count() == 2
    assert len(report) == 2


def test_min_max_iteration_time(report):
    assert report.max_iteration_time() == pd.Timedelta(seconds=3)
    assert report.min_iteration_time() == pd.Timedelta(seconds=2)


def test_empty_report():
    empty = RunReport()
    assert empty.iteration_count() == 0
    assert empty.total_time() == pd.Timedelta(0)
    assert empty.max_iteration_time() == pd.Timedelta(0)
    with pytest.raises(EmptyReportError):
        empty.average_time()
    with pytest.raises(EmptyReportError):
        empty.min_iteration_time()


def test_reduce_with_custom_extractor_and_combiner(report):
    longest_solve = aggregator.reduce_iterations(report, aggregator.time_solving, aggregator.max_op)
    assert longest_solve == pd.Timedelta(seconds=2)


def test_combiners():
    a, b = pd.Timedelta(seconds=1), pd.Timedelta(seconds=4)
    assert aggregator.sum_op(a, b) == pd.Timedelta(seconds=5)
    assert aggregator.min_op(a, b) == a
    assert aggregator.max_op(a, b) == b
