"""Game session: moves, lifecycle, keyboard intents and records on solve."""

from __future__ import annotations

import random

from slidepuzzle.backend.engine.gameplay import GameSession
from slidepuzzle.backend.models.board import Board, Direction
from slidepuzzle.backend.models.leaderboard import LeaderboardRecord, RecordFlags
from slidepuzzle.backend.models.players import NameEditMode
from slidepuzzle.backend.storage import MemoryStore
from slidepuzzle.config import DEFAULT_PLAYER, STATUS_CLEAR_DELAY_MS

# -- helpers ------------------------------------------------------------------


def _near_solved(session: GameSession) -> None:
    """Put the session one move (index 8) away from solved."""
    session.state.board = Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])


def _solve(session: GameSession, fake_time, elapsed: int) -> None:
    """Move 7 → blank, back again, then finish: three moves in *elapsed* ms."""
    session.state.board = Board.from_flat(3, [1, 2, 3, 4, 5, 6, 7, 0, 8])
    assert session.move(6)
    assert session.move(7)
    fake_time.advance(elapsed)
    assert session.move(8)


# -- construction -------------------------------------------------------------


def test_new_session_is_shuffled_and_idle(session: GameSession) -> None:
    assert session.size == 3
    assert not session.is_solved
    assert session.board.is_solvable()
    assert session.move_count == 0
    assert session.elapsed == 0
    assert not session.is_running
    assert not session.is_paused
    assert session.pause_label == "Pause"
    assert session.active_player == DEFAULT_PLAYER


def test_unsupported_initial_size_uses_default(store: MemoryStore) -> None:
    assert GameSession(store, 42, rng=random.Random(1)).size == 3


# -- moves --------------------------------------------------------------------


def test_first_move_starts_clock(session: GameSession, fake_time) -> None:
    session.state.board = Board.from_flat(3, [1, 2, 3, 4, 0, 5, 6, 7, 8])

    assert session.move(5)
    assert session.tiles == [1, 2, 3, 4, 5, 0, 6, 7, 8]
    assert session.move_count == 1
    assert session.is_running

    fake_time.advance(1_500)
    assert session.formatted_elapsed == "00:01:500"


def test_illegal_moves_are_ignored(session: GameSession) -> None:
    before = session.tiles
    blank = session.board.blank_index()
    far = next(
        i for i in range(9) if i != blank and not session.board.is_adjacent(i)
    )

    assert not session.move(blank)
    assert not session.move(far)
    assert not session.move(99)
    assert session.tiles == before
    assert session.move_count == 0
    assert not session.is_running


def test_directional_intent(session: GameSession) -> None:
    session.state.board = Board.from_flat(3, [1, 2, 3, 4, 0, 5, 6, 7, 8])

    assert session.handle_direction(Direction.LEFT)  # 5 slides left
    assert session.tiles == [1, 2, 3, 4, 5, 0, 6, 7, 8]
    assert not session.handle_direction(Direction.LEFT)  # nothing to the right
    assert session.handle_direction(Direction.UP)  # 8 slides up
    assert session.tiles == [1, 2, 3, 4, 5, 8, 6, 7, 0]
    assert session.move_count == 2


def test_solving_stops_clock_and_records(session: GameSession, fake_time) -> None:
    _solve(session, fake_time, 3_000)

    assert session.is_solved
    assert not session.is_running
    assert session.last_result == RecordFlags(moves=True, time=True)
    assert session.leaderboard_snapshot() == [
        LeaderboardRecord(DEFAULT_PLAYER, 3, 3_000)
    ]
    assert "New best moves and time" in session.status_message

    fake_time.advance(5_000)
    assert session.elapsed == 3_000
    assert not session.move(7)
    assert not session.resume()


def test_second_worse_completion_keeps_bests(session: GameSession, fake_time) -> None:
    _solve(session, fake_time, 3_000)
    session.reset()
    _solve(session, fake_time, 3_500)

    assert session.last_result == RecordFlags(moves=False, time=False)
    assert session.leaderboard_snapshot() == [
        LeaderboardRecord(DEFAULT_PLAYER, 3, 3_000)
    ]


def test_records_go_to_active_player(session: GameSession, fake_time) -> None:
    session.add_player("Ann")
    _solve(session, fake_time, 1_000)
    assert [r.player_name for r in session.leaderboard_snapshot()] == ["Ann"]
    assert session.top_ten()[0].record.player_name == "Ann"


# -- lifecycle ----------------------------------------------------------------


def test_pause_and_resume(session: GameSession, fake_time) -> None:
    assert not session.pause()  # never started

    _near_solved(session)
    session.move(6)
    fake_time.advance(400)
    assert session.pause()
    assert session.is_paused
    assert session.pause_label == "Resume"
    assert session.status_message == "Game paused"

    fake_time.advance(10_000)
    assert session.elapsed == 400
    assert session.resume()
    assert session.status_message == "Game resumed"
    fake_time.advance(100)
    assert session.elapsed == 500


def test_reset_clears_game_and_cancels_sampler(
    session: GameSession, fake_time, scheduler
) -> None:
    _near_solved(session)
    session.move(6)
    fake_time.advance(900)

    session.reset()

    assert session.move_count == 0
    assert session.elapsed == 0
    assert not session.is_running
    assert not session.has_started
    assert not session.is_solved
    assert scheduler.pending == 0


def test_set_size(session: GameSession) -> None:
    assert session.set_size(5)
    assert session.size == 5
    assert len(session.tiles) == 25
    assert not session.set_size(2)
    assert not session.set_size(11)
    assert session.size == 5


def test_set_same_size_reshuffles(session: GameSession) -> None:
    _near_solved(session)
    session.move(6)
    assert session.set_size(3)
    assert session.move_count == 0


def test_end(session: GameSession, fake_time) -> None:
    _near_solved(session)
    session.move(6)
    fake_time.advance(100)
    session.end()
    assert session.status_message == "Game ended. New game ready"
    assert session.move_count == 0
    assert session.elapsed == 0


def test_close_cancels_everything(session: GameSession, scheduler) -> None:
    _near_solved(session)
    session.move(6)
    session.remove_player(DEFAULT_PLAYER)  # queues a status clear
    assert scheduler.pending == 2
    session.close()
    assert scheduler.pending == 0


# -- keyboard -----------------------------------------------------------------


def test_keys_before_start(session: GameSession) -> None:
    assert not session.handle_key("space")
    assert not session.handle_key("e")
    assert not session.handle_key("r")
    assert not session.handle_key("x")


def test_space_toggles_and_r_resumes(session: GameSession, fake_time) -> None:
    _near_solved(session)
    session.move(6)

    assert session.handle_key("space")
    assert session.is_paused
    assert session.handle_key("SPACE")
    assert session.is_running

    session.pause()
    assert session.handle_key("R")
    assert session.is_running
    assert not session.handle_key("r")


def test_s_and_e_keys(session: GameSession) -> None:
    assert session.handle_key("s")
    assert session.status_message == "New game shuffled"

    _near_solved(session)
    session.move(6)
    assert session.handle_key("e")
    assert session.status_message == "Game ended. New game ready"
    assert not session.has_started


def test_arrow_keys_move(session: GameSession) -> None:
    session.state.board = Board.from_flat(3, [1, 2, 3, 4, 0, 5, 6, 7, 8])
    assert session.handle_key("down")  # 2 slides down
    assert session.tiles == [1, 0, 3, 4, 2, 5, 6, 7, 8]


def test_play_again_after_solve(session: GameSession, fake_time) -> None:
    _solve(session, fake_time, 1_000)

    assert not session.handle_key("up")
    assert not session.handle_key("s")
    assert session.handle_key("p")
    assert session.status_message == "New game started"
    assert not session.is_solved
    assert session.move_count == 0


# -- players ------------------------------------------------------------------


def test_player_errors_become_transient_status(
    session: GameSession, fake_time, scheduler
) -> None:
    assert not session.remove_player(DEFAULT_PLAYER)
    assert "at least one player" in session.status_message

    fake_time.advance(STATUS_CLEAR_DELAY_MS - 1)
    scheduler.run_pending()
    assert session.status_message

    fake_time.advance(1)
    scheduler.run_pending()
    assert session.status_message == ""


def test_new_status_replaces_pending_clear(session: GameSession, fake_time, scheduler) -> None:
    session.add_player("")
    fake_time.advance(STATUS_CLEAR_DELAY_MS // 2)
    session.add_player(DEFAULT_PLAYER)
    fake_time.advance(STATUS_CLEAR_DELAY_MS // 2)
    scheduler.run_pending()
    assert "already exists" in session.status_message


def test_rename_collision_via_session(session: GameSession) -> None:
    session.add_player("A")
    session.add_player("B")
    session.select_player("A")

    assert not session.rename_player("A", "B")
    assert session.player_names == ["A", "B", DEFAULT_PLAYER]
    assert session.active_player == "A"


def test_submit_name_and_remove(session: GameSession) -> None:
    assert session.submit_name(NameEditMode.ADDING, "Ann")
    assert session.submit_name(NameEditMode.EDITING, "Anna", "Ann")
    assert session.active_player == "Anna"
    assert session.remove_player("Anna")
    assert session.active_player == DEFAULT_PLAYER
    assert not session.select_player("Ghost")


def test_session_reads_persisted_state(store: MemoryStore, fake_time) -> None:
    first = GameSession(store, 3, time_source=fake_time, rng=random.Random(3))
    first.add_player("Ann")
    _solve(first, fake_time, 2_000)

    second = GameSession(store, 3, time_source=fake_time, rng=random.Random(4))
    assert second.active_player == "Ann"
    assert second.leaderboard_snapshot() == [LeaderboardRecord("Ann", 3, 2_000)]
