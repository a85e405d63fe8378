import logging as stdlog

import pytest

from outfile_utils.context import LogContextFilter, parse_context, source_var, iteration_var
from outfile_utils.decorators import log_and_time
from exceptions import OutfileError, ReportWriteError


def _record():
    return stdlog.LogRecord("t", stdlog.INFO, __file__, 1, "msg", None, None)


def test_filter_fills_defaults():
    record = _record()
    assert LogContextFilter().filter(record)
    assert record.source == "-"
    assert record.iteration == "-"


def test_parse_context_sets_and_restores():
    with parse_context(source="run.out"):
        with parse_context(iteration=3):
            record = _record()
            LogContextFilter().filter(record)
            assert record.source == "run.out"
            assert record.iteration == "3"
        assert iteration_var.get() is None
    assert source_var.get() is None


def test_log_and_time_wraps_errors():
    @log_and_time("boom", error_cls=ReportWriteError)
    def fail():
        raise OSError("disk full")

    with pytest.raises(ReportWriteError) as info:
        fail()
    assert isinstance(info.value.__cause__, OSError)


def test_log_and_time_keeps_matching_errors():
    err = ReportWriteError("already wrapped")

    @log_and_time(error_cls=OutfileError)
    def fail():
        raise err

    with pytest.raises(ReportWriteError) as info:
        fail()
    assert info.value is err


def test_log_and_time_returns_result(caplog):
    @log_and_time("step")
    def ok():
        return 42

    with caplog.at_level(stdlog.INFO):
        assert ok() == 42
    assert "step done" in caplog.text


def test_setup_is_idempotent_until_teardown(tmp_path):
    import outfile_utils.logging as logging

    root = stdlog.getLogger()
    before = len(root.handlers)
    try:
        logging.setup(log_dir=str(tmp_path))
        logging.setup(log_dir=str(tmp_path))
        assert len(root.handlers) == before + 3
        assert (tmp_path / "errors.log").exists()
    finally:
        logging.teardown()
    assert len(root.handlers) == before
