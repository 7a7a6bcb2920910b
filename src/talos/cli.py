"""CLI entry point for talos -- signature-focused code summarizer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .errors import ConfigError, TalosError
from .models import DEFAULT_EXTENSIONS, ScanOptions, parse_extensions
from .scanner import scan_project
from .writer import STDOUT, resolve_output, write_output

app = typer.Typer(
    name="talos",
    help="Extract concise code signatures from projects (JS/TS/CSS).",
    add_completion=False,
)

# stdout is reserved for the JSON document when --output is "-".
console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"talos {__version__}")
        raise typer.Exit()


def _build_options(
    ext: Optional[str],
    include: List[str],
    exclude: List[str],
    max_file_size: Optional[int],
    terse_output: bool,
    jobs: int,
) -> ScanOptions:
    extensions = parse_extensions(ext) if ext is not None else list(DEFAULT_EXTENSIONS)
    try:
        return ScanOptions(
            extensions=extensions,
            include=include,
            exclude=exclude,
            max_file_size=max_file_size,
            terse=terse_output,
            jobs=jobs,
        )
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise ConfigError(problems) from exc


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------


@app.command()
def main(
    path: Path = typer.Argument(..., help="Input directory path."),
    output: Optional[str] = typer.Option(
        None, "--output", "-o",
        help="Output filename ('-' for stdout). Defaults to 'talos.json' in the input directory.",
    ),
    terse_output: bool = typer.Option(
        False, "--terse-output", envvar="TALOS_TERSE", help="Skip files with 0 signatures.",
    ),
    ext: Optional[str] = typer.Option(
        None, "--ext", envvar="TALOS_EXT",
        help="Comma-separated list of allowed extensions (overrides defaults).",
    ),
    include: List[str] = typer.Option(
        [], "--include", envvar="TALOS_INCLUDE", help="Include glob (repeatable).",
    ),
    exclude: List[str] = typer.Option(
        [], "--exclude", envvar="TALOS_EXCLUDE", help="Exclude glob (repeatable).",
    ),
    max_file_size: Optional[int] = typer.Option(
        None, "--max-file-size", envvar="TALOS_MAX_FILE_SIZE",
        help="Max file size in bytes (skip larger files).",
    ),
    jobs: int = typer.Option(
        1, "--jobs", "-j", envvar="TALOS_JOBS", help="Parallel extraction workers.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Scan PATH and write a JSON index of its signatures."""
    _configure_logging(verbose)

    if not path.is_dir():
        console.print(f"[red]Error:[/red] input must be a directory: {path}")
        raise typer.Exit(code=1)

    try:
        options = _build_options(ext, include, exclude, max_file_size, terse_output, jobs)
        document, errors = scan_project(path, options)
    except ConfigError as exc:
        console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=2)
    except TalosError as exc:
        console.print(f"[red]Failed to scan project:[/red] {exc}")
        raise typer.Exit(code=1)

    target = resolve_output(output, path)
    try:
        write_output(document, target)
    except TalosError as exc:
        console.print(f"[red]Failed to write output:[/red] {exc}")
        raise typer.Exit(code=1)

    if target != STDOUT:
        summary = (
            f"[green]Wrote[/green] {target} "
            f"({document.file_count} file(s) in {len(document.directories)} director(ies)"
        )
        if errors:
            summary += f", [yellow]{len(errors)} error(s)[/yellow]"
        console.print(summary + ")")
