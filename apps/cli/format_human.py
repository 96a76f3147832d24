"""Human-readable report rendering for CLI output."""

from __future__ import annotations

import io
from pathlib import Path

from core.analysis.base import Analyzer


def render_file_section(path: Path, analyzer: Analyzer) -> str:
    """Render one file's header, analyzer report and trailing blank line."""

    buffer = io.StringIO()
    buffer.write(f"==== {path.name} ====\n")
    analyzer.format(buffer)
    buffer.write("\n")
    return buffer.getvalue()
