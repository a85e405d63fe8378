"""Tabular exports of a RunReport: per-iteration rows, a summary row, CSV writers."""

import csv
from datetime import datetime

import pandas as pd

from data_structures import RunReport
from exceptions import ReportWriteError
from outfile_utils.decorators import log_and_time
import outfile_utils.logging as logging
logger = logging.getLogger(__name__)

ITERATION_HEADER = [
    "SOURCE",
    "ITERATION",
    "PREPARING_SECONDS",
    "SOLVING_SECONDS",
    "TOTAL_SECONDS",
    "OBJECTIVE",
    "VOLUME_CONSTRAINT",
    "DESIGN_CHANGE",
    "NUM_EIGENVALUES",
    "EIGENVALUES",
    "INVALID_FIELDS",
]

SUMMARY_HEADER = [
    "TIME_STAMP",
    "SOURCE",
    "NUM_ITERATIONS",
    "TOTAL_PREPARING_SECONDS",
    "TOTAL_SOLVING_SECONDS",
    "TOTAL_SECONDS",
    "AVG_SECONDS",
    "MIN_ITERATION_SECONDS",
    "MAX_ITERATION_SECONDS",
]


def _seconds(td: pd.Timedelta) -> float:
    return round(td.total_seconds(), 6)


def gather_iteration_rows(report: RunReport):
    rows = []
    for it in report:
        rows.append([
            report.source or "",
            it.number,
            _seconds(it.preparing_time),
            _seconds(it.solving_time),
            _seconds(it.preparing_time + it.solving_time),
            it.objective,
            it.volume_constraint,
            it.design_change,
            len(it.eigenvalues),
            " ".join(repr(v) for v in it.eigenvalues),
            " ".join(it.invalid_fields),
        ])
    return rows


def gather_summary_rows(report: RunReport):
    """
    Generates a single statistics row for the report.
    Average and minimum are left blank when the report has no iterations.
    """
    timestamp = datetime.now().strftime("%a %b %d %H:%M:%S %Y")
    if report.iteration_count():
        avg = _seconds(report.average_time())
        shortest = _seconds(report.min_iteration_time())
    else:
        avg = shortest = ""

    return [[
        timestamp,
        report.source or "",
        report.iteration_count(),
        _seconds(report.total_time_preparing()),
        _seconds(report.total_time_solving()),
        _seconds(report.total_time()),
        avg,
        shortest,
        _seconds(report.max_iteration_time()),
    ]]


def iterations_frame(report: RunReport) -> pd.DataFrame:
    """One row per iteration with Timedelta timing columns."""
    records = [
        {
            "number": it.number,
            "preparing_time": it.preparing_time,
            "solving_time": it.solving_time,
            "objective": it.objective,
            "volume_constraint": it.volume_constraint,
            "design_change": it.design_change,
            "eigenvalues": list(it.eigenvalues),
        }
        for it in report
    ]
    columns = ["number", "preparing_time", "solving_time", "objective",
               "volume_constraint", "design_change", "eigenvalues"]
    return pd.DataFrame.from_records(records, columns=columns)


def _write_csv(final_filename, header, rows):
    with open(final_filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)


@log_and_time("write iteration CSV", error_cls=ReportWriteError)
def write_iteration_csv(final_filename, all_iteration_rows):
    _write_csv(final_filename, ITERATION_HEADER, all_iteration_rows)
    logger.info(f"[OK] Wrote Iteration CSV: {final_filename} with {len(all_iteration_rows)} rows.")


@log_and_time("write summary CSV", error_cls=ReportWriteError)
def write_summary_csv(final_filename, all_summary_rows):
    _write_csv(final_filename, SUMMARY_HEADER, all_summary_rows)
    logger.info(f"[OK] Wrote Summary CSV: {final_filename} with {len(all_summary_rows)} rows.")
