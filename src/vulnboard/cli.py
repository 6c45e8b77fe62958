"""Command-line interface for vulnboard.

A terminal rendering collaborator: it seeds a board session, optionally feeds
it JSON-lines commands, and prints the projected board.
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, replace
from pathlib import Path
from typing import IO, Any

import click

from vulnboard.board_store import CommandStatus, SortKey
from vulnboard.config import BoardConfig, ConfigError, find_config, load_config
from vulnboard.dispatcher import COMMAND_NAMES
from vulnboard.logging import setup_logging
from vulnboard.projector import BoardView
from vulnboard.session import BoardSession


def _load_session(ctx: click.Context) -> BoardSession:
    return BoardSession(ctx.obj["config"])


def view_to_dict(view: BoardView) -> dict[str, Any]:
    """Convert a projected board to plain JSON-compatible data."""
    data = asdict(view)
    data["columns"] = list(data["columns"])
    for column in data["columns"]:
        column["tasks"] = list(column["tasks"])
        column["visible"] = len(column["tasks"])
        for task in column["tasks"]:
            task["date"] = task["date"].isoformat()
            task["labels"] = list(task["labels"])
    data["total_tasks"] = view.total_tasks
    return data


def render_view(view: BoardView) -> str:
    """Render a projected board as plain text, one block per column."""
    lines = []
    header = f"Sort: {view.sort_by}"
    if view.search_term:
        header += f" | Search: {view.search_term!r}"
    if view.filter_label:
        header += f" | Filter: {view.filter_label}"
    lines.append(header)
    for column in view.columns:
        lines.append("")
        lines.append(f"{column.title} [{column.color}] ({column.visible}/{column.total})")
        if not column.tasks:
            lines.append("  (no tasks)")
        for task in column.tasks:
            labels = ", ".join(task.labels) or "-"
            lines.append(
                f"  #{task.id} {task.title} | {task.priority} | {task.type} | "
                f"{task.score:g} | {task.date.isoformat()} | {labels}"
            )
    return "\n".join(lines)


def _echo_view(view: BoardView, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(view_to_dict(view), indent=2))
    else:
        click.echo(render_view(view))


@click.group()
@click.version_option(package_name="vulnboard")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to vulnboard.yaml (auto-detected if not specified)",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """vulnboard - inspect and drive the board state engine."""
    try:
        if config_path is None:
            config_path = find_config()
        config = load_config(config_path) if config_path else BoardConfig.from_env()
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    if verbose:
        config.logging.level = "DEBUG"
    # Console handler only with --verbose
    setup_logging(replace(config.logging, console=config.logging.console and verbose))
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command()
@click.option("--search", "search_term", default="", help="Title/label substring")
@click.option("--filter", "filter_label", default="", help="Label or task type to keep")
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice([key.value for key in SortKey]),
    default=None,
    help="Sort key (default: from config)",
)
@click.option("--json", "as_json", is_flag=True, help="Print the board as JSON")
@click.pass_context
def show(
    ctx: click.Context,
    search_term: str,
    filter_label: str,
    sort_by: str | None,
    as_json: bool,
) -> None:
    """Print the default board, optionally searched, filtered and sorted."""
    session = _load_session(ctx)
    session.dispatch({"command": "set_search_term", "search_term": search_term})
    session.dispatch({"command": "set_filter_label", "filter_label": filter_label})
    if sort_by is not None:
        session.dispatch({"command": "set_sort_by", "sort_by": sort_by})
    _echo_view(session.view(), as_json)


@main.command(epilog="Commands: " + ", ".join(COMMAND_NAMES))
@click.argument("commands_file", type=click.File("r"))
@click.option("--json", "as_json", is_flag=True, help="Print the final board as JSON")
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 if any command was not applied",
)
@click.pass_context
def apply(ctx: click.Context, commands_file: IO[str], as_json: bool, strict: bool) -> None:
    """Apply JSON-lines commands to the default board, then print it.

    Each non-blank line is one command object with a "command" key, for
    example {"command": "add_column", "title": "Triage"}. Use "-" to read
    from stdin.
    """
    session = _load_session(ctx)
    failures = 0

    for line_number, line in enumerate(commands_file, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            payload = json.loads(line)
        except json.JSONDecodeError as e:
            click.echo(f"line {line_number}: [rejected] invalid JSON: {e.msg}", err=True)
            failures += 1
            continue
        if not isinstance(payload, dict):
            click.echo(f"line {line_number}: [rejected] expected a JSON object", err=True)
            failures += 1
            continue

        result = session.dispatch(payload)
        summary = f"line {line_number}: [{result.status}] {result.command}"
        if result.message:
            summary += f": {result.message}"
        click.echo(summary, err=True)
        for error in result.errors:
            click.echo(f"    {error}", err=True)
        if result.status != CommandStatus.APPLIED:
            failures += 1

    _echo_view(session.view(), as_json)
    if strict and failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
