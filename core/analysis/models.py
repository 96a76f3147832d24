"""Report models produced by analyzers."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CountNode(BaseModel):
    """One node of a count report.

    Leaves carry ``count``; groups carry ``children`` and leave ``count`` unset.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    count: int | None = None
    children: list[CountNode] = Field(default_factory=list)


class CountReport(BaseModel):
    """Count analysis output, nested like the pattern file."""

    model_config = ConfigDict(extra="forbid")

    mode: Literal["count"] = "count"
    groups: list[CountNode] = Field(default_factory=list)


class MatchEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    text: str
    count: int


class MatchTable(BaseModel):
    """Distinct matches recorded for one pattern.

    ``distinct`` counts every recorded match; ``matches`` may be cut to ``top``.
    """

    model_config = ConfigDict(extra="forbid")

    name: str
    distinct: int
    total: int
    matches: list[MatchEntry] = Field(default_factory=list)


class MatchReport(BaseModel):
    """Match analysis output, one table per pattern in flat order."""

    model_config = ConfigDict(extra="forbid")

    mode: Literal["match"] = "match"
    top: int | None = None
    patterns: list[MatchTable] = Field(default_factory=list)


class FileReport(BaseModel):
    """Results for one input file."""

    model_config = ConfigDict(extra="forbid")

    file: str
    lines: int
    report: CountReport | MatchReport


class RunReport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    files: list[FileReport] = Field(default_factory=list)
