"""End-to-end flow through the application context."""

from __future__ import annotations

from datetime import date

import pytest


def test_require_user_id_needs_session(app_context):
    assert app_context.current_user_id() is None
    with pytest.raises(RuntimeError):
        app_context.require_user_id()


def test_register_then_track_a_habit(app_context):
    session = app_context.auth.register("ana", "ana@example.com", "pw").unwrap()
    assert app_context.require_user_id() == session.user_id

    lists = app_context.list_board()
    list_id = lists.create_habit_list("Fitness").unwrap()
    board = app_context.habit_board(list_id)
    run_id = board.create_habit("Run").unwrap()
    board.load_week(date(2024, 6, 3))

    board.set_check(run_id, date(2024, 6, 4), "🔥")

    assert board.window.check_on(run_id, date(2024, 6, 4)).emoji == "🔥"
    assert app_context.habit_check_repo.get_longest_streak(run_id) == 1
