"""
Context utilities to inject source/iteration IDs into log records.
"""
import logging
from contextvars import ContextVar
from contextlib import contextmanager
from typing import Optional

source_var: ContextVar[Optional[str]] = ContextVar("source", default=None)
iteration_var: ContextVar[Optional[str]] = ContextVar("iteration", default=None)

def set_context(source: Optional[str] = None, iteration: Optional[int] = None) -> None:
    if source is not None:
        source_var.set(str(source))
    if iteration is not None:
        iteration_var.set(str(iteration))

class LogContextFilter(logging.Filter):
    """
    Adds contextvars to LogRecord so formatters can print them.
    """
    def filter(self, record: logging.LogRecord) -> bool:
        record.source = source_var.get() or "-"
        record.iteration = iteration_var.get() or "-"
        return True

@contextmanager
def parse_context(source: Optional[str] = None, iteration: Optional[int] = None):
    prev_s, prev_i = source_var.get(), iteration_var.get()
    try:
        set_context(source, iteration)
        yield
    finally:
        source_var.set(prev_s)
        iteration_var.set(prev_i)
