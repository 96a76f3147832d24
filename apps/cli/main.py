"""Typer CLI entrypoint for patscan."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from apps.cli.format_human import render_file_section
from apps.cli.io import dump_json, write_text_atomic
from apps.cli.options import RunOptions
from core.analysis.models import FileReport, RunReport
from core.analysis.registry import create_analyzer
from core.orchestrator.runner import analyze_file
from core.patterns.loader import load_patterns
from core.patterns.models import leaf_count
from core.utils.errors import InputFileError, PatternConfigError
from core.utils.log_events import log_event

app = typer.Typer(help="Analyze regex patterns inside text files.", rich_markup_mode=None)
logger = logging.getLogger("patscan.cli")

EXIT_CONFIG_ERROR = 2
EXIT_INPUT_ERROR = 3

FilesArgument = Annotated[list[Path], typer.Argument(help="Input files to analyze.")]
PatternsFileOption = Annotated[
    Path,
    typer.Option("--patterns-file", "-s", help="YAML file of named (grouped) patterns."),
]
OutputOption = Annotated[
    str, typer.Option("--output", "-o", help="Report format: human or json.")
]
OutFileOption = Annotated[
    Path | None,
    typer.Option("--out-file", help="Write the report to this file instead of stdout."),
]


@app.callback()
def cli_callback(
    log_level: Annotated[
        str, typer.Option("--log-level", help="Logging level written to stderr.")
    ] = "WARNING",
) -> None:
    """Configure logging for every subcommand."""

    level = logging.getLevelName(log_level.upper().strip())
    if not isinstance(level, int):
        typer.echo(f"ERROR: unknown log level: {log_level}")
        raise typer.Exit(code=1)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


@app.command("count")
def count_command(
    files: FilesArgument,
    patterns_file: PatternsFileOption,
    output: OutputOption = "human",
    out_file: OutFileOption = None,
) -> None:
    """Count the lines matched by every pattern, nested like the pattern file."""

    options = _build_options(
        files=files, patterns_file=patterns_file, output=output, out_file=out_file
    )
    raise typer.Exit(code=_run("count", options))


@app.command("match")
def match_command(
    files: FilesArgument,
    patterns_file: PatternsFileOption,
    top: Annotated[
        int | None,
        typer.Option("--top", "-t", help="Show only the top N matches per pattern."),
    ] = None,
    output: OutputOption = "human",
    out_file: OutFileOption = None,
) -> None:
    """List the distinct matches of every pattern by frequency."""

    options = _build_options(
        files=files, patterns_file=patterns_file, output=output, out_file=out_file, top=top
    )
    raise typer.Exit(code=_run("match", options))


@app.command("clean")
def clean_command() -> None:
    """Accepted for compatibility; does nothing."""


@app.command("vocab")
def vocab_command(
    files: Annotated[list[Path] | None, typer.Argument()] = None,
) -> None:
    """Vocabulary collection is not provided by this tool."""

    typer.echo("ERROR: vocab is not available in patscan.")
    raise typer.Exit(code=1)


def _build_options(**fields: Any) -> RunOptions:
    normalized = dict(fields)
    normalized["output"] = str(fields["output"]).lower().strip()
    try:
        return RunOptions.model_validate(normalized)
    except ValidationError as exc:
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"]) or "options"
            typer.echo(f"ERROR: --{location.replace('_', '-')}: {error['msg']}")
        raise typer.Exit(code=1) from exc


def _run(mode: str, options: RunOptions) -> int:
    try:
        forest = load_patterns(options.patterns_file)
    except PatternConfigError as exc:
        log_event(logger, logging.ERROR, "config_error", path=str(options.patterns_file))
        typer.echo(f"ERROR: {exc}")
        return EXIT_CONFIG_ERROR

    log_event(
        logger,
        logging.INFO,
        "patterns_loaded",
        path=str(options.patterns_file),
        patterns=leaf_count(forest),
        mode=mode,
    )

    sections: list[str] = []
    run_report = RunReport()
    for path in options.files:
        analyzer = create_analyzer(mode, forest, top=options.top)
        try:
            lines = analyze_file(path, analyzer)
        except InputFileError as exc:
            log_event(
                logger, logging.ERROR, "input_error", path=str(exc.path), line=exc.line_number
            )
            typer.echo(f"ERROR: {exc}")
            return EXIT_INPUT_ERROR

        log_event(logger, logging.INFO, "file_done", path=str(path), lines=lines)
        if options.output == "json":
            run_report.files.append(
                FileReport(file=path.name, lines=lines, report=analyzer.snapshot())
            )
            continue

        section = render_file_section(path, analyzer)
        if options.out_file is None:
            typer.echo(section, nl=False)
        else:
            sections.append(section)

    if options.output == "json":
        text = dump_json(run_report.model_dump(mode="json")) + "\n"
    else:
        text = "".join(sections)

    if options.out_file is not None:
        write_text_atomic(options.out_file, text)
        typer.echo(f"INFO: wrote report to {options.out_file}")
    elif options.output == "json":
        typer.echo(text, nl=False)
    return 0
