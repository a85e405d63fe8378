import csv

import pandas as pd
import pytest

import reports
from data_loader import load
from data_structures import RunReport
from exceptions import ReportWriteError


def test_iteration_rows(sample_outfile):
    rows = reports.gather_iteration_rows(load(sample_outfile))
    assert len(rows) == 2
    first = dict(zip(reports.ITERATION_HEADER, rows[0]))
    assert first["ITERATION"] == 1
    assert first["PREPARING_SECONDS"] == 1.0
    assert first["TOTAL_SECONDS"] == 3.0
    assert first["NUM_EIGENVALUES"] == 2
    assert first["INVALID_FIELDS"] == ""


def test_summary_row(sample_outfile):
    (row,) = reports.gather_summary_rows(load(sample_outfile))
    summary = dict(zip(reports.SUMMARY_HEADER, row))
    assert summary["NUM_ITERATIONS"] == 2
    assert summary["TOTAL_SECONDS"] == 5.0
    assert summary["AVG_SECONDS"] == 2.5
    assert summary["MIN_ITERATION_SECONDS"] == 2.0
    assert summary["MAX_ITERATION_SECONDS"] == 3.0


def test_summary_row_for_empty_report():
    (row,) = reports.gather_summary_rows(RunReport(source="empty.out"))
    summary = dict(zip(reports.SUMMARY_HEADER, row))
    assert summary["NUM_ITERATIONS"] == 0
    assert summary["AVG_SECONDS"] == ""


def test_iterations_frame(sample_outfile):
    frame = reports.iterations_frame(load(sample_outfile))
    assert list(frame["number"]) == [1, 2]
    assert frame["solving_time"].sum() == pd.Timedelta(seconds=3.5)


def test_iterations_frame_empty():
    frame = reports.iterations_frame(RunReport())
    assert frame.empty
    assert "preparing_time" in frame.columns


def test_write_csvs(sample_outfile, tmp_path):
    report = load(sample_outfile)
    it_path = tmp_path / "iterations.csv"
    sum_path = tmp_path / "summary.csv"
    reports.write_iteration_csv(it_path, reports.gather_iteration_rows(report))
    reports.write_summary_csv(sum_path, reports.gather_summary_rows(report))

    with open(it_path, newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0] == reports.ITERATION_HEADER
    assert len(rows) == 3

    with open(sum_path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert rows[0]["NUM_ITERATIONS"] == "2"


def test_write_failure_is_report_error(tmp_path):
    with pytest.raises(ReportWriteError):
        reports.write_summary_csv(tmp_path / "missing" / "summary.csv", [])
