"""Rich terminal frontend.

Renders a :class:`GameSession` with ``rich`` tables and panels and feeds it
key presses. The session's cooperative scheduler is driven from the
key-poll loop, so the clock line repaints roughly every tick.
"""

from __future__ import annotations

import sys
from typing import Any, Callable

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from slidepuzzle.backend.engine.gameclock import format_elapsed
from slidepuzzle.backend.engine.gameplay import GameSession
from slidepuzzle.backend.models.board import Board
from slidepuzzle.backend.models.leaderboard import Leaderboard, LeaderboardRecord, RankedRecord
from slidepuzzle.backend.models.players import NameEditMode
from slidepuzzle.backend.storage import KeyValueStore
from slidepuzzle.config import MAX_SIZE, MIN_SIZE, TICK_INTERVAL_MS
from slidepuzzle.frontend.cli.input_handler import get_key_timeout

console = Console()

# Digit keys pick the board size; "0" stands for 10.
_SIZE_KEYS = {str(n % 10): n for n in range(MIN_SIZE, MAX_SIZE + 1)}


# -- rendering ----------------------------------------------------------------


def _render_board(board: Board) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(board.size * board.size - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r in range(board.size):
        cells: list[str] = []
        for c in range(board.size):
            index = r * board.size + c
            val = board.tiles[index]
            if val == 0:
                cells.append("[dim]·[/dim]")
            elif board.is_tile_correct(index):
                cells.append(f"[bold green]{val:>{width}}[/bold green]")
            else:
                cells.append(f"[bold white]{val:>{width}}[/bold white]")
        table.add_row(*cells)

    return table


def _render_records(title: str, ranked: list[RankedRecord], highlight: str | None = None) -> Table:
    """Ranked leaderboard table; the *highlight* player is drawn in green."""
    table = Table(
        title=title,
        title_style="bold cyan",
        box=rich.box.ROUNDED,
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Player")
    table.add_column("Moves", justify="right", style="yellow")
    table.add_column("Time", justify="right", style="yellow")

    for rank, record in ranked:
        table.add_row(
            str(rank),
            record.player_name,
            "—" if record.best_moves is None else str(record.best_moves),
            "—" if record.best_time is None else format_elapsed(record.best_time),
            style="bold green" if record.player_name == highlight else "",
        )
    return table


def _stats_line(session: GameSession) -> tuple[str, str]:
    """Plain and ANSI-styled versions of the moves/time line."""
    plain = f"Moves: {session.move_count}    Time: {session.formatted_elapsed}"
    styled = (
        f"\033[2mMoves: \033[0m\033[33;1m{session.move_count}\033[0m"
        f"    \033[2mTime: \033[0m\033[33;1m{session.formatted_elapsed}\033[0m"
    )
    return plain, styled


def _draw_game(session: GameSession) -> None:
    console.clear()

    players = Text()
    for name in session.player_names:
        if players:
            players.append("  ")
        if name == session.active_player:
            players.append(f" {name} ", style="bold green on #313244")
        else:
            players.append(name, style="dim")

    controls = Text()
    for keys, label in (
        ("↑↓←→", "move"),
        ("Space", session.pause_label.lower()),
        ("S", "shuffle"),
        ("E", "end"),
        (f"{MIN_SIZE}-0", "size"),
        ("N/M/X/Tab", "add/rename/remove/next player"),
        ("Q", "quit"),
    ):
        controls.append(f"  {keys}", style="bold cyan")
        controls.append(f" {label} ", style="dim")

    title_style = "bold green" if session.is_solved else "bold cyan"
    panel = Panel(
        Group(Align.center(_render_board(session.board)), Text(""), Align.center(players)),
        title=f"[{title_style}]Sliding Puzzle  {session.size}×{session.size}[/{title_style}]",
        border_style="bold green" if session.is_solved else "bright_blue",
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    # Save the cursor right before the stats line so _update_time() can
    # overwrite just that line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(Text(_stats_line(session)[0], style="bold yellow")))
    if session.status_message:
        console.print(Align.center(Text(session.status_message, style="italic")))
    if session.is_solved:
        console.print(Align.center(Text("Press P or Space to play again.", style="dim")))
    console.print(Align.center(_render_records(
        f"Top {session.size}×{session.size}", session.top_ten(), session.active_player
    )))
    console.print(Align.center(controls))


def _update_time(session: GameSession) -> None:
    """Repaint the stats line in place, bypassing Rich."""
    plain, styled = _stats_line(session)
    pad = max(0, (console.width - len(plain)) // 2)
    sys.stdout.write(f"\033[u\033[K{' ' * pad}{styled}")
    sys.stdout.flush()


# -- player prompts -----------------------------------------------------------


def _ask_name(prompt: str) -> str:
    console.print()
    return console.input(f"  [bold cyan]{prompt}[/bold cyan] ")


def _handle_player_key(session: GameSession, key: str) -> bool:
    if key == "n":
        session.submit_name(NameEditMode.ADDING, _ask_name("New player name:"))
    elif key == "m":
        active = session.active_player
        session.submit_name(NameEditMode.EDITING, _ask_name(f"Rename {active} to:"), active)
    elif key == "x":
        session.remove_player(session.active_player)
    elif key == "tab":
        names = session.player_names
        current = names.index(session.active_player)
        session.select_player(names[(current + 1) % len(names)])
    else:
        return False
    return True


# -- game loop ----------------------------------------------------------------


def _play(session: GameSession) -> None:
    while True:
        _draw_game(session)

        # Poll with a short timeout so the scheduler keeps ticking.
        while True:
            key = get_key_timeout(TICK_INTERVAL_MS / 1000)
            had_status = bool(session.status_message)
            session.scheduler.run_pending()
            if key is not None:
                break
            if had_status and not session.status_message:
                _draw_game(session)

        if key == "quit" or key == "q":
            return
        if key in _SIZE_KEYS:
            session.set_size(_SIZE_KEYS[key])
        elif not _handle_player_key(session, key):
            session.handle_key(key)


# -- public entry point -------------------------------------------------------


def run(
    store: KeyValueStore,
    size: int,
    order: Callable[[LeaderboardRecord], Any],
    player: str | None = None,
) -> None:
    """Launch the Rich CLI."""
    session: GameSession | None = None

    def on_tick(_elapsed: int) -> None:
        if session is not None:
            _update_time(session)

    session = GameSession(store, size, order=order, on_tick=on_tick)
    if player:
        if player not in session.player_names:
            session.add_player(player)
        else:
            session.select_player(player)

    try:
        _play(session)
    finally:
        session.close()
        console.clear()
        console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))


def show_scores(store: KeyValueStore, order: Callable[[LeaderboardRecord], Any]) -> None:
    """Print every board size's ranked records."""
    leaderboard = Leaderboard(store)
    sizes = leaderboard.get_all_sizes()

    console.print()
    console.print(Align.center(Text("LEADERBOARD", style="bold")))
    if not sizes:
        console.print(Align.center(Text("No records yet.", style="dim")))
    for size in sizes:
        console.print(Align.center(_render_records(f"{size}×{size}", leaderboard.ranked(size, order))))
    console.print()
