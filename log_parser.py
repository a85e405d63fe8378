"""
Block delimiting and per-iteration field extraction for solver outfiles.

An outfile reports each optimization iteration as a run of labelled lines:

    Iteration: 3
    Objective: 1.25
    Eigenvalue 1: 0.5
    Volume constraint: 0.01
    Preparing: 1 seconds 500 milliseconds
    Solving: 2 seconds
    Design change: 0.002

A block opens at an "Iteration: " line and closes at the last
"Design change: " line seen before the next "Iteration: " line.
"""
import re
from typing import List, Sequence, Tuple

import pandas as pd

import aggregator
from data_structures import INVALID_FLOAT, INVALID_INT, IterationRecord
import outfile_utils.logging as logging

logger = logging.getLogger(__name__)

# Block markers (prefix match, trailing space included)
ITERATION_MARKER = "Iteration: "
DESIGN_CHANGE_MARKER = "Design change: "

# Field markers, checked in this order; first match wins
ITERATION_FIELD = "Iteration:"
OBJECTIVE_FIELD = "Objective:"
EIGENVALUE_FIELD = "Eigenvalue"
VOLUME_FIELD = "Volume constraint:"
DESIGN_CHANGE_FIELD = "Design change:"
PREPARING_FIELD = "Preparing:"
SOLVING_FIELD = "Solving:"

_INT_RE = re.compile(r"[+-]?[0-9]+")
# One or more number+unit terms, e.g. "1h2m3s", "1.5s200ms", "2 seconds"
_DURATION_RE = re.compile(
    r"[+-]?(?:\s*(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)\s*"
    r"(?:milliseconds?|seconds?|ns|us|\u00b5s|ms|s|m|h))+\s*"
)


def delimit_iterations(lines: Sequence[str], extend_open_blocks: bool = False) -> Tuple[List[int], List[int]]:
    """
    Return parallel lists (starts, ends) of inclusive line ranges, one per iteration.

    A block without a "Design change: " line keeps end == start, so only its
    marker line is parsed; with extend_open_blocks it runs up to the line
    before the next iteration marker (or the last line) instead.
    """
    starts: List[int] = []
    ends: List[int] = []
    for ind, line in enumerate(lines):
        if line.startswith(ITERATION_MARKER):
            starts.append(ind)
            ends.append(ind)
        elif line.startswith(DESIGN_CHANGE_MARKER):
            if not ends:
                logger.debug("design change on line %d precedes any iteration marker; ignored", ind + 1)
                continue
            ends[-1] = ind

    for i, (begin, end) in enumerate(zip(starts, ends)):
        if begin != end:
            continue
        if extend_open_blocks:
            following = starts[i + 1] if i + 1 < len(starts) else len(lines)
            ends[i] = following - 1
        else:
            logger.warning(
                "iteration block at line %d has no %r line; only its marker line is parsed",
                begin + 1, DESIGN_CHANGE_MARKER.strip(),
            )
    return starts, ends


def value_after_colon(line: str) -> str:
    return line[line.rfind(":") + 1:].strip()


def parse_int(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def parse_duration(text: str) -> pd.Timedelta:
    """
    Parse outfile timing text such as "1 seconds 500 milliseconds" or "1h2m3s".
    Raises ValueError when the text is not a duration.
    """
    normalized = text.replace(" seconds ", "s").replace(" milliseconds", "ms")
    if normalized.strip() in ("0", "+0", "-0"):
        return aggregator.ZERO
    # Unitless numbers, day counts, clock and ISO 8601 forms are not outfile durations
    if not _DURATION_RE.fullmatch(normalized):
        raise ValueError(f"invalid duration: {text!r}")
    try:
        value = pd.Timedelta(normalized)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"invalid duration: {text!r}") from e
    if pd.isna(value):
        raise ValueError(f"invalid duration: {text!r}")
    return value


def parse_iteration(lines: Sequence[str]) -> IterationRecord:
    """Build one IterationRecord from the lines of a single block."""
    number = 0
    objective = 0.0
    eigenvalues: List[float] = []
    volume_constraint = 0.0
    design_change = 0.0
    preparing_time = aggregator.ZERO
    solving_time = aggregator.ZERO
    invalid: List[str] = []

    for line in lines:
        if ":" not in line:
            continue
        val = value_after_colon(line)

        if line.startswith(ITERATION_FIELD):
            try:
                number = parse_int(val)
            except ValueError:
                logger.warning("invalid iteration number %r", val)
                number = INVALID_INT
                invalid.append("number")
        elif line.startswith(OBJECTIVE_FIELD):
            objective = _float_or_sentinel(val, "objective", invalid)
        elif line.startswith(EIGENVALUE_FIELD):
            eigenvalues.append(
                _float_or_sentinel(val, f"eigenvalues[{len(eigenvalues)}]", invalid)
            )
        elif line.startswith(VOLUME_FIELD):
            volume_constraint = _float_or_sentinel(val, "volume_constraint", invalid)
        elif line.startswith(DESIGN_CHANGE_FIELD):
            design_change = _float_or_sentinel(val, "design_change", invalid)
        elif line.startswith(PREPARING_FIELD):
            preparing_time = _duration_or_zero(val, "preparing_time", invalid)
        elif line.startswith(SOLVING_FIELD):
            solving_time = _duration_or_zero(val, "solving_time", invalid)

    return IterationRecord(
        number=number,
        preparing_time=preparing_time,
        solving_time=solving_time,
        eigenvalues=tuple(eigenvalues),
        objective=objective,
        volume_constraint=volume_constraint,
        design_change=design_change,
        invalid_fields=tuple(invalid),
    )


def _float_or_sentinel(val: str, name: str, invalid: List[str]) -> float:
    try:
        return float(val)
    except ValueError:
        logger.warning("invalid %s value %r", name, val)
        invalid.append(name)
        return INVALID_FLOAT


def _duration_or_zero(val: str, name: str, invalid: List[str]) -> pd.Timedelta:
    # Unparsable timings fall back to zero without a warning
    try:
        return parse_duration(val)
    except ValueError:
        logger.debug("discarding unparsable %s %r", name, val)
        invalid.append(name)
        return aggregator.ZERO
