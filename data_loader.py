import os
from typing import IO, List, Optional, Union

from config import SETTINGS, ParserConfig
from data_structures import RunReport
from exceptions import SourceReadError
from log_parser import delimit_iterations, parse_iteration
from outfile_utils.context import parse_context
import outfile_utils.logging as logging

logger = logging.getLogger(__name__)

Source = Union[str, "os.PathLike[str]", IO]


def get_raw(stream: IO, encoding: str = "utf-8", errors: str = "replace") -> List[str]:
    """Read every line of a text or binary stream, without line terminators."""
    data = []
    for line in stream:
        if isinstance(line, bytes):
            line = line.decode(encoding, errors)
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        data.append(line)
    return data


def get_raw_file(path, encoding: str = "utf-8", errors: str = "replace") -> List[str]:
    with open(path, "rb") as f:
        return get_raw(f, encoding, errors)


def _source_name(source: Source) -> str:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    return getattr(source, "name", None) or "<stream>"


def load(source: Source, config: Optional[ParserConfig] = None) -> RunReport:
    """
    Read and parse a whole outfile (path or open stream) into a RunReport.
    Raises SourceReadError if the source cannot be opened, read or decoded;
    malformed content never raises.
    """
    cfg = config or SETTINGS
    name = _source_name(source)

    with parse_context(source=name):
        try:
            if isinstance(source, (str, os.PathLike)):
                data = get_raw_file(source, cfg.encoding, cfg.errors)
            else:
                data = get_raw(source, cfg.encoding, cfg.errors)
        except (OSError, UnicodeDecodeError) as e:
            logger.error("cannot read %s: %s", name, e)
            raise SourceReadError(f"cannot read {name}: {e}") from e

        starts, ends = delimit_iterations(data, cfg.extend_open_blocks)
        iterations = []
        for ordinal, (begin, end) in enumerate(zip(starts, ends), start=1):
            with parse_context(iteration=ordinal):
                iterations.append(parse_iteration(data[begin:end + 1]))

    logger.info("Loaded %s with %d iterations from %d lines", name, len(iterations), len(data))
    return RunReport(iterations=tuple(iterations), source=name)
