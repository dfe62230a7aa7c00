"""CLI commands for anchorscore."""

import logging
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import NoReturn

import click

from anchorscore.fetch.client import AniListClient
from anchorscore.fetch.config import FetchConfig
from anchorscore.fetch.metrics import FetchMetrics
from anchorscore.fetch.models import FetchFailedError
from anchorscore.interpolation.errors import InterpolationPreconditionError
from anchorscore.interpolation.metrics import InterpolationMetrics
from anchorscore.interpolation.models import InterpolationResult
from anchorscore.observability.logging import (
    configure_logging,
    log_metrics_summary,
    session_context,
)
from anchorscore.session.errors import SessionError
from anchorscore.session.session import RankingSession
from anchorscore.settings.app import get_settings
from anchorscore.store.errors import StoreError
from anchorscore.store.io import dump_items, load_items
from anchorscore.store.models import Item


PIN_MARK = "*"
TITLE_WIDTH = 48


def _setup_logging(json_logs: bool, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.WARNING
    configure_logging(level=log_level, json_format=json_logs)


def _fail(message: str) -> NoReturn:
    """Print an error for the user and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


@contextmanager
def _metrics_summary() -> Iterator[None]:
    """Log fetch and interpolation counters when the command ends."""
    try:
        yield
    finally:
        log_metrics_summary(
            fetch=FetchMetrics.get_instance().to_dict(),
            interpolation=InterpolationMetrics.get_instance().to_dict(),
        )


def _format_score(score: float | None) -> str:
    return "-" if score is None else f"{score:.1f}"


def render_table(items: Sequence[Item]) -> str:
    """Render the ranked list as plain text, pinned rows marked."""
    lines = []
    for position, item in enumerate(items):
        mark = PIN_MARK if item.pinned else " "
        title = item.display_title[:TITLE_WIDTH]
        lines.append(
            f"{position:>4} {mark} {_format_score(item.score):>5}  "
            f"{title:<{TITLE_WIDTH}}  id={item.id} x{item.repeat_count}"
        )
    return "\n".join(lines)


def _parse_assignment(value: str) -> tuple[int, float]:
    item_id, sep, score = value.partition("=")
    if not sep:
        msg = f"expected ID=SCORE, got '{value}'"
        raise click.BadParameter(msg)
    try:
        return int(item_id), float(score)
    except ValueError as e:
        raise click.BadParameter(f"invalid assignment '{value}'") from e


def _parse_move(value: str) -> tuple[int, int]:
    source, sep, target = value.partition(":")
    if not sep:
        msg = f"expected FROM:TO, got '{value}'"
        raise click.BadParameter(msg)
    try:
        return int(source), int(target)
    except ValueError as e:
        raise click.BadParameter(f"invalid move '{value}'") from e


def _summary(result: InterpolationResult) -> str:
    summary = (
        f"Generated {result.assigned_count} score(s) "
        f"from {len(result.anchors)} anchor(s)."
    )
    if result.stale_tail_count:
        summary += (
            f" {result.stale_tail_count} item(s) below the last pin were not "
            "scored; pin the last row you care about."
        )
    return summary


@click.group()
@click.version_option(version="0.1.0")
@click.option(
    "--json-logs/--no-json-logs",
    default=False,
    help="Use JSON format for logs (default: false).",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging.",
)
def cli(json_logs: bool, verbose: bool) -> None:
    """Pin a few scores in a ranked list and interpolate the rest."""
    _setup_logging(json_logs, verbose)


@cli.command()
@click.option(
    "--user",
    "user_name",
    type=str,
    default=None,
    help="AniList user name (default: $ANCHORSCORE_USER).",
)
@click.option(
    "--list",
    "list_name",
    type=str,
    default=None,
    help="Name of the list to rank (default: $ANILIST_LIST_NAME or Completed).",
)
@click.option(
    "--out",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the fetched list to a .yaml or .json file.",
)
def fetch(user_name: str | None, list_name: str | None, output_path: Path | None) -> None:
    """Fetch a user's list sorted by score."""
    settings = get_settings()
    user_name = user_name or settings.default_user
    if not user_name:
        _fail("No user given; pass --user or set ANCHORSCORE_USER")

    session = RankingSession(
        client=AniListClient(FetchConfig.from_settings(settings, list_name=list_name))
    )
    with session_context(session.session_id), _metrics_summary():
        try:
            items = session.fetch(user_name)
        except (FetchFailedError, SessionError) as e:
            _fail(str(e))

        click.echo(render_table(items))
        if output_path is not None:
            dump_items(items, output_path)
            click.echo(f"Wrote {len(items)} item(s) to {output_path}")


@cli.command()
@click.argument(
    "items_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--pin", "pins", type=int, multiple=True, help="Pin the item with this id.")
@click.option(
    "--unpin", "unpins", type=int, multiple=True, help="Unpin the item with this id."
)
@click.option(
    "--set",
    "assignments",
    multiple=True,
    help="Set a score by hand, as ID=SCORE.",
)
@click.option(
    "--move",
    "moves",
    multiple=True,
    help="Move an item, as FROM:TO positions (applied in order).",
)
@click.option(
    "--out",
    "output_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the result to a .yaml or .json file.",
)
def generate(  # noqa: PLR0913
    items_path: Path,
    pins: tuple[int, ...],
    unpins: tuple[int, ...],
    assignments: tuple[str, ...],
    moves: tuple[str, ...],
    output_path: Path | None,
) -> None:
    """Apply edits to a saved list and interpolate unpinned scores.

    Edits run in this order: pins, unpins, scores, moves. The item at the
    top of the list always acts as an anchor.
    """
    parsed_assignments = [_parse_assignment(a) for a in assignments]
    parsed_moves = [_parse_move(m) for m in moves]

    try:
        items = load_items(items_path)
    except StoreError as e:
        _fail(str(e))

    session = RankingSession()
    with session_context(session.session_id), _metrics_summary():
        session.load(items)
        try:
            for item_id in pins:
                session.set_pinned(item_id, True)
            for item_id in unpins:
                session.set_pinned(item_id, False)
            for item_id, score in parsed_assignments:
                session.set_score(item_id, score)
            for source, target in parsed_moves:
                session.reorder(source, target)
        except (StoreError, SessionError) as e:
            _fail(str(e))

        try:
            result = session.generate()
        except InterpolationPreconditionError as e:
            _fail(f"Nothing to generate: {e}")

        click.echo(render_table(result.items))
        click.echo(_summary(result))
        if output_path is not None:
            dump_items(result.items, output_path)
            click.echo(f"Wrote {len(result.items)} item(s) to {output_path}")
