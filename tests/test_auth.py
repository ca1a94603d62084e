"""Tests for the local auth service."""

from __future__ import annotations

import pytest

from habitcal.domain.errors import AuthError, ConstraintViolation, NotFound, ValidationError
from habitcal.services.auth import Authenticated, AuthService, Unauthenticated


@pytest.fixture
def auth(user_repo, settings_repo):
    return AuthService(user_repo, settings_repo)


def test_register_creates_user_and_session(auth, user_repo):
    result = auth.register("ana", "ana@example.com", "s3cret")

    assert result.is_success
    session = result.value
    assert user_repo.get_user(session.user_id).email == "ana@example.com"
    assert auth.current_session().first() == session


def test_password_is_not_stored_in_clear(auth, settings_repo):
    auth.register("ana", "ana@example.com", "s3cret")

    stored = settings_repo.get("credential:ana@example.com")
    assert stored is not None
    assert "s3cret" not in stored


def test_register_duplicate_email_fails(auth):
    auth.register("ana", "ana@example.com", "s3cret")

    result = auth.register("other", "ana@example.com", "pw")

    assert isinstance(result.error, AuthError)


@pytest.mark.parametrize("username,email", [("", "a@example.com"), ("ana", "  ")])
def test_register_validates_blank_fields(auth, username, email):
    assert isinstance(auth.register(username, email, "pw").error, ValidationError)


def test_login_and_logout(auth):
    auth.register("ana", "ana@example.com", "s3cret")
    auth.logout()
    assert auth.current_session().first() == Unauthenticated()

    bad = auth.login("ana@example.com", "wrong")
    good = auth.login("ana@example.com", "s3cret")

    assert isinstance(bad.error, AuthError)
    assert isinstance(good.value, Authenticated)
    assert auth.current_session().first().email == "ana@example.com"


def test_login_unknown_email(auth):
    assert isinstance(auth.login("nobody@example.com", "pw").error, AuthError)


def test_session_stream_follows_login_state(auth):
    states = []
    auth.current_session().subscribe(states.append)

    auth.register("ana", "ana@example.com", "s3cret")
    auth.logout()

    assert isinstance(states[0], Unauthenticated)
    assert any(isinstance(state, Authenticated) for state in states)
    assert isinstance(states[-1], Unauthenticated)


def test_update_profile_moves_credentials(auth):
    session = auth.register("ana", "ana@example.com", "s3cret").unwrap()

    updated = auth.update_profile(session.user_id, "Ana B", "anab@example.com")

    assert updated.value.username == "Ana B"
    assert auth.current_session().first().email == "anab@example.com"
    auth.logout()
    assert auth.login("anab@example.com", "s3cret").is_success
    assert auth.login("ana@example.com", "s3cret").is_failure


def test_update_profile_unknown_user(auth):
    assert isinstance(auth.update_profile("missing", "x", "x@example.com").error, NotFound)


def test_delete_account_cascades_and_logs_out(auth, store, list_repo, habit_repo, check_repo):
    from datetime import date

    session = auth.register("ana", "ana@example.com", "s3cret").unwrap()
    list_id = list_repo.create_habit_list(session.user_id, "Fitness").unwrap()
    habit_id = habit_repo.create_habit(list_id, "Run").unwrap()
    check_repo.create_or_update_habit_check(habit_id, date(2024, 6, 1))

    assert auth.delete_account(session.user_id).is_success

    assert store.habit_lists.get(list_id) is None
    assert store.habits.get(habit_id) is None
    assert store.checks.by_habit(habit_id) == []
    assert auth.current_session().first() == Unauthenticated()
    assert auth.login("ana@example.com", "s3cret").is_failure


def _fail_with_constraint_violation(*args, **kwargs):
    raise ConstraintViolation("disk is full")


def test_failed_credential_write_leaves_email_free(auth, settings_repo, user_repo, monkeypatch):
    monkeypatch.setattr(settings_repo, "set", _fail_with_constraint_violation)

    failed = auth.register("ana", "ana@example.com", "s3cret")

    assert isinstance(failed.error, ConstraintViolation)
    assert user_repo.get_user_by_email("ana@example.com") is None

    monkeypatch.undo()
    retried = auth.register("ana", "ana@example.com", "s3cret")

    assert retried.is_success
    auth.logout()
    assert auth.login("ana@example.com", "s3cret").is_success


def test_failed_email_move_restores_profile(auth, settings_repo, user_repo, monkeypatch):
    session = auth.register("ana", "ana@example.com", "s3cret").unwrap()
    monkeypatch.setattr(settings_repo, "set_many", _fail_with_constraint_violation)

    result = auth.update_profile(session.user_id, "Ana B", "anab@example.com")

    assert isinstance(result.error, ConstraintViolation)
    assert user_repo.get_user(session.user_id).email == "ana@example.com"

    monkeypatch.undo()
    auth.logout()
    assert auth.login("ana@example.com", "s3cret").is_success
    assert auth.login("anab@example.com", "s3cret").is_failure


def test_lookup_failures_come_back_as_results(auth, user_repo, monkeypatch):
    auth.register("ana", "ana@example.com", "s3cret")
    monkeypatch.setattr(user_repo, "get_user_by_email", _fail_with_constraint_violation)
    monkeypatch.setattr(user_repo, "get_user", _fail_with_constraint_violation)

    assert isinstance(auth.register("bob", "bob@example.com", "pw").error, ConstraintViolation)
    assert isinstance(auth.login("ana@example.com", "s3cret").error, ConstraintViolation)
    assert isinstance(auth.update_profile("u-1", "x", "x@example.com").error, ConstraintViolation)
    assert isinstance(auth.delete_account("u-1").error, ConstraintViolation)
