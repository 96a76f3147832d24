"""Validated CLI run options."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

OutputMode = Literal["human", "json"]


class RunOptions(BaseModel):
    """Options shared by the ``count`` and ``match`` commands."""

    model_config = ConfigDict(extra="forbid")

    files: list[Path] = Field(min_length=1)
    patterns_file: Path
    output: OutputMode = "human"
    out_file: Path | None = None
    top: int | None = Field(default=None, ge=1)
