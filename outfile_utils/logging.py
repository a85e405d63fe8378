"""
Project-local logging wrapper that configures handlers and re-exports stdlib logging.
Usage in your code:
    import outfile_utils.logging as logging
    logging.setup(log_dir="logs", level="INFO")
    logger = logging.getLogger(__name__)
"""
from __future__ import annotations

from pathlib import Path
import logging as _stdlog
from logging.handlers import RotatingFileHandler

from outfile_utils.context import LogContextFilter

FORMAT = "%(asctime)s | %(levelname)s | %(name)s | source=%(source)s iteration=%(iteration)s | %(message)s"


def setup(
    log_dir: str = "logs",
    level: str = "INFO",
    max_bytes: int = 5_000_000,
    backup_count: int = 5,
) -> _stdlog.Logger:
    """
    Console handler plus app.log / errors.log rotating files under log_dir.
    Repeated calls are no-ops until teardown().
    """
    root = _stdlog.getLogger()
    if getattr(root, "_outfile_logging_initialized", False):
        return root

    Path(log_dir).mkdir(parents=True, exist_ok=True)
    lvl = getattr(_stdlog, level.upper(), _stdlog.INFO)
    root.setLevel(lvl)

    console = _stdlog.StreamHandler()
    console.setLevel(lvl)
    file_info = RotatingFileHandler(str(Path(log_dir) / "app.log"), maxBytes=max_bytes,
                                    backupCount=backup_count, encoding="utf-8")
    file_info.setLevel(lvl)
    file_err = RotatingFileHandler(str(Path(log_dir) / "errors.log"), maxBytes=max_bytes,
                                   backupCount=backup_count, encoding="utf-8")
    file_err.setLevel(_stdlog.ERROR)

    filt = LogContextFilter()
    for handler in (console, file_info, file_err):
        handler.setFormatter(_stdlog.Formatter(FORMAT))
        handler.addFilter(filt)
        root.addHandler(handler)

    root._outfile_logging_initialized = True  # type: ignore[attr-defined]
    return root


def teardown() -> None:
    """Detach and close the handlers installed by setup()."""
    root = _stdlog.getLogger()
    if not getattr(root, "_outfile_logging_initialized", False):
        return
    for handler in list(root.handlers):
        if any(isinstance(f, LogContextFilter) for f in handler.filters):
            root.removeHandler(handler)
            handler.close()
    root._outfile_logging_initialized = False  # type: ignore[attr-defined]


getLogger = _stdlog.getLogger
