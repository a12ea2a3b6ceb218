"""Sliding Puzzle Game.

Usage::

    slidepuzzle                     # play on a 3×3 board
    slidepuzzle -s 4 -p Alice       # 4×4, as Alice
    slidepuzzle --scores            # print every leaderboard
"""

from __future__ import annotations

import logging
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

from slidepuzzle.backend.models.leaderboard import ORDERINGS
from slidepuzzle.backend.storage import JsonFileStore
from slidepuzzle.config import DEFAULT_SIZE, MAX_SIZE, MIN_SIZE, data_dir


class Order(StrEnum):
    time = "time"
    moves = "moves"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    size: int = typer.Option(
        DEFAULT_SIZE, "-s", "--size",
        min=MIN_SIZE, max=MAX_SIZE,
        help=f"Grid size ({MIN_SIZE}-{MAX_SIZE}).",
    ),
    player: Optional[str] = typer.Option(
        None, "-p", "--player",
        help="Play as this player (added if new).",
    ),
    order: Order = typer.Option(
        Order.time, "--order",
        help="Rank records by best time or by fewest moves first.",
    ),
    data: Optional[Path] = typer.Option(
        None, "--data-dir",
        help="Where the roster and leaderboard are kept.",
    ),
    scores: bool = typer.Option(
        False, "--scores",
        help="Show the leaderboard and exit.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log engine events.",
    ),
) -> None:
    """Sliding Puzzle Game."""
    _configure_logging(verbose)

    # Imported late so --help stays fast.
    from slidepuzzle.frontend.cli.rich import app as rich_app

    store = JsonFileStore(data or data_dir())
    if scores:
        rich_app.show_scores(store, ORDERINGS[order])
        return
    rich_app.run(store, size, ORDERINGS[order], player)


if __name__ == "__main__":
    app()
