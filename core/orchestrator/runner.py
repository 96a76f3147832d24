"""Feed input files line by line through an analyzer."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from core.analysis.base import Analyzer
from core.analysis.counter import PatternCounter
from core.analysis.matcher import PatternMatcher
from core.patterns.models import GroupTree, Pattern
from core.utils.errors import InputFileError
from core.utils.log_events import log_event

logger = logging.getLogger("patscan.runner")


def analyze_file(path: Path, analyzer: Analyzer) -> int:
    """Run ``analyzer`` over every line of ``path`` and return the line count.

    Lines are split on ``\\n`` and decoded one at a time, so a decode failure
    reports the exact line. Line terminators (``\\n`` with an optional
    preceding ``\\r``) are stripped before analysis. Any read or decode failure
    aborts the file.
    """

    start = time.perf_counter()
    log_event(logger, logging.DEBUG, "start", path=str(path), mode=analyzer.mode)
    line_number = 0
    try:
        with path.open("rb") as handle:
            for raw_line in handle:
                line_number += 1
                analyzer.analyze(_strip_terminator(raw_line.decode("utf-8")))
    except UnicodeDecodeError as exc:
        log_event(
            logger, logging.ERROR, "error", path=str(path), error_type="decode", line=line_number
        )
        raise InputFileError(
            f"Input file is not valid UTF-8 at line {line_number}: {path}",
            path=path,
            line_number=line_number,
        ) from exc
    except OSError as exc:
        log_event(logger, logging.ERROR, "error", path=str(path), error_type=type(exc).__name__)
        raise InputFileError(f"Unable to read input file {path}: {exc}", path=path) from exc

    log_event(
        logger,
        logging.DEBUG,
        "done",
        path=str(path),
        mode=analyzer.mode,
        lines=line_number,
        elapsed_ms=int((time.perf_counter() - start) * 1000),
    )
    return line_number


def count_file(path: Path, forest: list[GroupTree[Pattern]]) -> PatternCounter:
    """Count matching lines per pattern in one file."""

    counter = PatternCounter(forest)
    analyze_file(path, counter)
    return counter


def match_file(
    path: Path, forest: list[GroupTree[Pattern]], top: int | None = None
) -> PatternMatcher:
    """Collect match frequency tables for one file."""

    matcher = PatternMatcher(forest, top=top)
    analyze_file(path, matcher)
    return matcher


def _strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line
