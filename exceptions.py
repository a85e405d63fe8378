"""
Custom exception hierarchy for clearer error handling.
Only source-level failures are raised to callers; field-level parse
problems are logged and replaced by sentinel values instead.
"""
class OutfileError(Exception):
    """Base class for outfile-related errors."""

class ConfigError(OutfileError):
    pass

class SourceReadError(OutfileError):
    """The outfile could not be opened, read or decoded."""

class EmptyReportError(OutfileError):
    """A statistic needs at least one iteration but the report has none."""

class ReportWriteError(OutfileError):
    pass
