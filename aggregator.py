"""
Timing reductions over parsed iterations.

Every statistic is a fold over the iteration sequence with a per-iteration
extractor (``key``) and a binary combiner (``op``).
"""
from typing import Any, Callable, Iterable, Sequence

import pandas as pd

from exceptions import EmptyReportError

ZERO = pd.Timedelta(0)

Extractor = Callable[[Any], pd.Timedelta]
Combiner = Callable[[pd.Timedelta, pd.Timedelta], pd.Timedelta]


def reduce_iterations(iterations: Iterable, key: Extractor, op: Combiner, initial: pd.Timedelta = ZERO) -> pd.Timedelta:
    result = initial
    for it in iterations:
        result = op(result, key(it))
    return result


# Extractors
def time_solving_preparing(it) -> pd.Timedelta:
    return it.solving_time + it.preparing_time

def time_solving(it) -> pd.Timedelta:
    return it.solving_time

def time_preparing(it) -> pd.Timedelta:
    return it.preparing_time


# Combiners
def sum_op(a: pd.Timedelta, b: pd.Timedelta) -> pd.Timedelta:
    return a + b

def max_op(a: pd.Timedelta, b: pd.Timedelta) -> pd.Timedelta:
    return a if a > b else b

def min_op(a: pd.Timedelta, b: pd.Timedelta) -> pd.Timedelta:
    return a if a < b else b


def total_time_preparing(iterations: Sequence) -> pd.Timedelta:
    return reduce_iterations(iterations, time_preparing, sum_op)

def total_time_solving(iterations: Sequence) -> pd.Timedelta:
    return reduce_iterations(iterations, time_solving, sum_op)

def total_time(iterations: Sequence) -> pd.Timedelta:
    return reduce_iterations(iterations, time_solving_preparing, sum_op)

def iteration_count(iterations: Sequence) -> int:
    return len(iterations)

def average_time(iterations: Sequence) -> pd.Timedelta:
    """Mean of preparing + solving time per iteration."""
    n = iteration_count(iterations)
    if n == 0:
        raise EmptyReportError("average time is undefined for a report without iterations")
    return total_time(iterations) / n

def max_iteration_time(iterations: Sequence) -> pd.Timedelta:
    """Longest preparing + solving time of a single iteration (zero when empty)."""
    return reduce_iterations(iterations, time_solving_preparing, max_op)

def min_iteration_time(iterations: Sequence) -> pd.Timedelta:
    """Shortest preparing + solving time of a single iteration."""
    if not iterations:
        raise EmptyReportError("minimum time is undefined for a report without iterations")
    first = time_solving_preparing(iterations[0])
    return reduce_iterations(iterations[1:], time_solving_preparing, min_op, initial=first)
