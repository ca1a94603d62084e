"""Tests for the per-table stores: CRUD contract, cascades and range queries."""

from __future__ import annotations

import pytest
from sqlalchemy import text

from habitcal.domain.errors import ConstraintViolation
from habitcal.models import Habit, HabitCheck, HabitList, User


class TestInsert:
    def test_insert_assigns_id(self, store, user):
        list_id = store.habit_lists.insert(HabitList(user_id=user.id, name="Fitness"))

        assert isinstance(list_id, int)
        assert store.habit_lists.get(list_id).name == "Fitness"

    def test_insert_with_existing_id_replaces_row(self, store, user):
        list_id = store.habit_lists.insert(HabitList(user_id=user.id, name="Fitness"))

        same_id = store.habit_lists.insert(HabitList(id=list_id, user_id=user.id, name="Health"))

        assert same_id == list_id
        assert [hl.name for hl in store.habit_lists.by_user(user.id)] == ["Health"]

    def test_insert_user_with_string_id(self, store):
        store.users.insert(User(id="u-1", username="ana", email="ana@example.com"))

        assert store.users.get("u-1").email == "ana@example.com"
        assert store.users.by_email("ana@example.com").id == "u-1"
        assert store.users.by_username("ana").id == "u-1"

    def test_missing_parent_raises_constraint_violation(self, store):
        with pytest.raises(ConstraintViolation):
            store.habits.insert(Habit(list_id=999, name="Orphan"))


class TestUpdateAndDelete:
    def test_update_missing_row_returns_zero(self, store, user):
        assert store.habit_lists.update(HabitList(id=12345, user_id=user.id, name="Ghost")) == 0
        assert store.habit_lists.update(HabitList(user_id=user.id, name="No id")) == 0

    def test_update_existing_row(self, store, habit_factory):
        habit = habit_factory(name="Run")
        habit.name = "Sprint"

        assert store.habits.update(habit) == 1
        assert store.habits.get(habit.id).name == "Sprint"

    def test_delete_returns_rows_affected(self, store, habit_factory):
        habit = habit_factory()

        assert store.habits.delete(habit) == 1
        assert store.habits.delete(habit) == 0
        assert store.habits.delete_by_id(habit.id) == 0
        assert store.habits.get(habit.id) is None


class TestCascade:
    def test_deleting_list_removes_its_habits_and_checks_only(
        self, store, habit_list_factory, habit_factory
    ):
        fitness = habit_list_factory("Fitness")
        reading = habit_list_factory("Reading")
        run = habit_factory("Run", habit_list=fitness)
        swim = habit_factory("Swim", habit_list=fitness)
        novel = habit_factory("Novel", habit_list=reading)

        check_ids = []
        for habit in (run, swim):
            for day in range(19870, 19873):
                check_ids.append(store.checks.insert(HabitCheck(habit_id=habit.id, date=day)))
        kept_check = store.checks.insert(HabitCheck(habit_id=novel.id, date=19870))

        assert store.habit_lists.delete(fitness) == 1

        assert store.habits.get(run.id) is None
        assert store.habits.get(swim.id) is None
        assert all(store.checks.get(check_id) is None for check_id in check_ids)
        assert store.habit_lists.get(reading.id) is not None
        assert store.habits.get(novel.id) is not None
        assert store.checks.get(kept_check) is not None

    def test_deleting_user_removes_everything_below(self, store, user, habit_list_factory, habit_factory):
        habit_list = habit_list_factory(owner=user)
        habit = habit_factory(habit_list=habit_list)
        check_id = store.checks.insert(HabitCheck(habit_id=habit.id, date=19870))

        assert store.users.delete_by_id(user.id) == 1

        assert store.habit_lists.by_user(user.id) == []
        assert store.habits.get(habit.id) is None
        assert store.checks.get(check_id) is None

    def test_deleting_habit_with_five_checks_empties_ranges(self, store, habit_factory):
        habit = habit_factory()
        for day in range(19870, 19875):
            store.checks.insert(HabitCheck(habit_id=habit.id, date=day))

        store.habits.delete(habit)

        assert store.checks.by_date_range(habit.id, 19870, 19874) == []
        assert store.checks.by_date_range(habit.id, 0, 100_000) == []
        assert store.checks.by_habit(habit.id) == []

    def test_cascade_delete_notifies_child_tables(self, store, habit_factory):
        habit = habit_factory()
        seen = []
        store.checks.watch_by_habit(habit.id).subscribe(seen.append)
        store.checks.insert(HabitCheck(habit_id=habit.id, date=19870))

        store.habit_lists.delete_by_id(habit.list_id)

        assert [len(result) for result in seen] == [0, 1, 0]

    def test_failed_cascade_rolls_back_entirely(self, db_engine, store, habit_list_factory, habit_factory):
        fitness = habit_list_factory("Fitness")
        run = habit_factory("Run", habit_list=fitness)
        check_id = store.checks.insert(HabitCheck(habit_id=run.id, date=19870))
        with db_engine.begin() as conn:
            conn.execute(
                text(
                    "CREATE TRIGGER block_check_delete BEFORE DELETE ON habit_checks "
                    "BEGIN SELECT RAISE(ABORT, 'check delete blocked'); END"
                )
            )

        with pytest.raises(ConstraintViolation):
            store.habit_lists.delete(fitness)

        assert store.habit_lists.get(fitness.id) is not None
        assert store.habits.get(run.id) is not None
        assert store.checks.get(check_id) is not None


class TestDateRange:
    def test_range_is_inclusive_ascending_and_filtered(self, store, habit_factory):
        run = habit_factory("Run")
        swim = habit_factory("Swim")
        for day in (19875, 19870, 19873, 19880, 19869):
            store.checks.insert(HabitCheck(habit_id=run.id, date=day))
        store.checks.insert(HabitCheck(habit_id=swim.id, date=19872))

        checks = store.checks.by_date_range(run.id, 19870, 19875)

        assert [c.date for c in checks] == [19870, 19873, 19875]
        assert all(c.habit_id == run.id for c in checks)

    def test_full_history_is_newest_first(self, store, habit_factory):
        habit = habit_factory()
        for day in (19870, 19872, 19871):
            store.checks.insert(HabitCheck(habit_id=habit.id, date=day))

        assert [c.date for c in store.checks.by_habit(habit.id)] == [19872, 19871, 19870]

    def test_delete_all_for_habit_leaves_other_habits(self, store, habit_factory):
        run = habit_factory("Run")
        swim = habit_factory("Swim")
        store.checks.insert(HabitCheck(habit_id=run.id, date=19870))
        store.checks.insert(HabitCheck(habit_id=run.id, date=19871))
        store.checks.insert(HabitCheck(habit_id=swim.id, date=19870))

        assert store.checks.delete_all_for_habit(run.id) == 2
        assert store.checks.by_habit(run.id) == []
        assert len(store.checks.by_habit(swim.id)) == 1
