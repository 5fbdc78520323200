from __future__ import annotations

import dataclasses
import json
import logging
import time
from pathlib import Path

import typer

from .classify.classifier import Classifier
from .classify.mime import MimeTable
from .config import ScanConfig, load_config
from .errors import GitConfigError, WalkError
from .git import locate_git
from .report import Report, build_report, format_elapsed
from .walker.walker import TreeWalker

app = typer.Typer(add_completion=False, no_args_is_help=True)

# Display-hint color names mapped onto click's palette.
COLORS: dict[str, str] = {
    "lightcyan": "bright_cyan",
    "lightgreen": "bright_green",
    "lightred": "bright_red",
    "lightblue": "bright_blue",
    "lightyellow": "bright_yellow",
    "gray": "bright_black",
}


def _style(text: str, color: str) -> str:
    return typer.style(text, fg=COLORS.get(color, color))


def _setup_logging(log_file: str | None, log_level: str, verbose: bool) -> None:
    """Configure console and optional rotating file logging."""
    level = logging.DEBUG if verbose else getattr(logging, log_level.upper(), logging.WARNING)

    # Format with timestamp for auditability
    fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"

    handlers: list[logging.Handler] = []

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(fmt, datefmt))
    handlers.append(console)

    if log_file:
        from logging.handlers import RotatingFileHandler

        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(logging.Formatter(fmt, datefmt))
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)


def _cfg(config: str | None, path: str | None) -> ScanConfig:
    try:
        return load_config(config, root=path)
    except (OSError, ValueError) as e:
        raise typer.BadParameter(str(e)) from e


def _print_report(report: Report) -> None:
    now = time.time()
    for entry in report.files:
        c = entry.classification
        cells = [
            _style(entry.path, c.name_color),
            "[" + _style(c.description, c.type_color) + "]",
            _style(f"{format_elapsed(now - entry.info.mtime)} ago", "lightyellow"),
            entry.size_description,
        ]
        typer.echo("; ".join(cells))
    if report.files:
        typer.echo()

    for entry in report.directories:
        typer.echo("[" + _style("dir", "magenta") + "] " + _style(entry.path, "lightcyan") + _style("/", "lightgreen"))
    if report.directories:
        typer.echo()

    if report.ignored_count == 1:
        typer.echo("There is also one ignored file.")
        typer.echo()
    elif report.ignored_count > 1:
        typer.echo(f"There are also {report.ignored_count} ignored files.")
        typer.echo()

    if report.git_url:
        typer.echo("Git URL: " + _style(report.git_url, "red"))


@app.command()
def scan(
    path: str = typer.Argument(None, help="Directory to inspect (default: config root or .)"),
    config: str = typer.Option(None, help="Path to a dirscout.toml"),
    max_depth: int = typer.Option(None, "--max-depth", "-d", help="Override max_depth"),
    no_ignore_files: bool = typer.Option(False, "--no-ignore-files", help="Do not honour .ignore/.gitignore"),
    show_hidden: bool = typer.Option(False, "--show-hidden", help="Treat dotfiles as regular files"),
    workers: int = typer.Option(None, help="Override walk and classify worker counts"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    log_file: str = typer.Option(None, "--log-file", "-l", help="Log file path"),
    log_level: str = typer.Option(None, "--log-level", help="Log level: DEBUG, INFO, WARNING, ERROR"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"),
):
    """Walk a directory, classify its files and print the report."""
    cfg = _cfg(config, path)

    if max_depth is not None:
        cfg = dataclasses.replace(cfg, max_depth=max_depth)
    if no_ignore_files:
        cfg = dataclasses.replace(cfg, respect_ignore_files=False)
    if show_hidden:
        cfg = dataclasses.replace(cfg, respect_hidden_files=False)
    if workers is not None:
        cfg = dataclasses.replace(cfg, walk_workers=workers, classify_workers=workers)
    try:
        cfg.validate()
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    _setup_logging(log_file or cfg.log_file, log_level or cfg.log_level, verbose)

    walker = TreeWalker(
        respect_ignore_files=cfg.respect_ignore_files,
        respect_hidden_files=cfg.respect_hidden_files,
        max_depth=cfg.max_depth,
        workers=cfg.walk_workers,
    )
    try:
        findings = walker.examine(cfg.root)
    except WalkError as e:
        typer.echo(f"FAIL: {e}", err=True)
        raise typer.Exit(code=1)

    classifier = Classifier(mime_table=MimeTable.load(cfg.mime_types_file))
    report = build_report(
        findings,
        classifier,
        cfg.root,
        read_size_threshold=cfg.read_size_threshold,
        line_count_size_threshold=cfg.line_count_size_threshold,
        workers=cfg.classify_workers,
    )

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2))
    else:
        _print_report(report)


@app.command()
def git(path: str = typer.Argument(".", help="Repository root")):
    """Print the remote URL recorded in PATH/.git/config."""
    try:
        info = locate_git(Path(path) / ".git")
    except GitConfigError as e:
        typer.echo(f"FAIL: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(info.url)


@app.command()
def init(out: str = typer.Option("dirscout.toml", help="Write example config to this path"),
         root: str = typer.Option(".", help="Directory to inspect")):
    """Write a starter dirscout.toml."""
    outp = Path(out)
    outp.write_text(f"""[scan]
root = {json.dumps(root)}
respect_ignore_files = true
respect_hidden_files = true
max_depth = 1

[workers]
walk = 8
classify = 8

[classify]
read_size_threshold = 1024000
line_count_size_threshold = 102400
# mime_types_file = "/etc/mime.types"

[logging]
level = "WARNING"
# file = "logs/dirscout.log"
""", encoding="utf-8")
    typer.echo(f"Wrote {outp}")
