"""Local authentication: credential map, session keys and user rows.

There is no backend. Credentials (email -> argon2 hash) and the current
session live in the ``app_settings`` key-value table; the session's
``user_id`` is the root every habit list query hangs off.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Optional, Union

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from ..domain.errors import AuthError, NotFound, StoreError, ValidationError
from ..domain.repositories import UserRepository
from ..domain.results import Result
from ..infra.live import LiveQuery
from ..infra.repositories.settings import SQLModelSettingsRepository
from ..logging_config import get_logger
from ..models.user import User

logger = get_logger("auth")

_hasher = PasswordHasher()

CREDENTIAL_PREFIX = "credential:"
TOKEN_KEY = "session.token"
USER_ID_KEY = "session.user_id"
USERNAME_KEY = "session.username"
EMAIL_KEY = "session.email"
SESSION_KEYS = (TOKEN_KEY, USER_ID_KEY, USERNAME_KEY, EMAIL_KEY)


@dataclass(frozen=True)
class Unauthenticated:
    """No session is stored."""


@dataclass(frozen=True)
class Authenticated:
    token: str
    user_id: str
    username: str
    email: str


AuthState = Union[Unauthenticated, Authenticated]
AuthSession = Authenticated


def _session_state(values: dict[str, str]) -> AuthState:
    if all(values.get(key) for key in SESSION_KEYS):
        return Authenticated(
            token=values[TOKEN_KEY],
            user_id=values[USER_ID_KEY],
            username=values[USERNAME_KEY],
            email=values[EMAIL_KEY],
        )
    return Unauthenticated()


def _credential_key(email: str) -> str:
    return f"{CREDENTIAL_PREFIX}{email}"


def _validate_profile(username: str, email: str) -> Optional[ValidationError]:
    if not username or not username.strip():
        return ValidationError("username", "Username cannot be empty")
    if not email or not email.strip():
        return ValidationError("email", "Email cannot be empty")
    return None


class AuthService:
    """Mock auth backed by local storage."""

    def __init__(self, user_repo: UserRepository, settings_repo: SQLModelSettingsRepository):
        self.user_repo = user_repo
        self.settings = settings_repo

    def _save_session(self, user: User) -> AuthSession:
        token = uuid.uuid4().hex
        self.settings.set_many(
            {
                TOKEN_KEY: token,
                USER_ID_KEY: user.id,
                USERNAME_KEY: user.username,
                EMAIL_KEY: user.email,
            }
        )
        return Authenticated(token=token, user_id=user.id, username=user.username, email=user.email)

    def register(self, username: str, email: str, password: str) -> Result[AuthSession]:
        error = _validate_profile(username, email)
        if error:
            return Result.fail(error)
        if not password:
            return Result.fail(ValidationError("password", "Password cannot be empty"))
        email = email.strip()

        try:
            if self.settings.get(_credential_key(email)) is not None or self.user_repo.get_user_by_email(email):
                return Result.fail(AuthError("Email already registered"))
        except StoreError as exc:
            return Result.fail(exc)

        user = User(id=str(uuid.uuid4()), username=username.strip(), email=email)
        created = self.user_repo.create_user(user)
        if created.is_failure:
            return Result.fail(created.error)  # type: ignore[arg-type]
        try:
            self.settings.set(_credential_key(email), _hasher.hash(password))
            session = self._save_session(user)
        except StoreError as exc:
            logger.warning("Registration rolled back", extra={"user_id": user.id})
            self._discard_registration(user)
            return Result.fail(exc)
        logger.info("Registered user", extra={"user_id": user.id})
        return Result.ok(session)

    def _discard_registration(self, user: User) -> None:
        """Remove the user row and credential of a half-finished registration."""
        self.user_repo.delete_user(user.id)
        try:
            self.settings.delete(_credential_key(user.email))
        except StoreError:
            logger.warning("Could not remove credential", exc_info=True, extra={"user_id": user.id})

    def login(self, email: str, password: str) -> Result[AuthSession]:
        email = (email or "").strip()
        try:
            stored = self.settings.get(_credential_key(email)) if email else None
            if stored is None:
                return Result.fail(AuthError("Invalid email or password"))
            try:
                _hasher.verify(stored, password)
            except (VerifyMismatchError, InvalidHash, VerificationError):
                return Result.fail(AuthError("Invalid email or password"))

            user = self.user_repo.get_user_by_email(email)
            if user is None:
                return Result.fail(AuthError(f"User not found for email: {email}"))
            session = self._save_session(user)
        except StoreError as exc:
            return Result.fail(exc)
        logger.info("User logged in", extra={"user_id": user.id})
        return Result.ok(session)

    def logout(self) -> None:
        self.settings.delete(*SESSION_KEYS)

    def current_session(self) -> LiveQuery[AuthState]:
        return self.settings.watch(*SESSION_KEYS, transform=_session_state)

    def update_profile(self, user_id: str, username: str, email: str) -> Result[User]:
        error = _validate_profile(username, email)
        if error:
            return Result.fail(error)
        email = email.strip()
        try:
            current = self.user_repo.get_user(user_id)
            if current is None:
                return Result.fail(NotFound("User", user_id))
            email_changed = current.email != email
            if email_changed and (
                self.settings.get(_credential_key(email)) is not None or self.user_repo.get_user_by_email(email)
            ):
                return Result.fail(AuthError("Email already registered"))
        except StoreError as exc:
            return Result.fail(exc)

        updated = User(**{**current.model_dump(), "username": username.strip(), "email": email})
        result = self.user_repo.update_user(updated)
        if result.is_failure:
            return Result.fail(result.error)  # type: ignore[arg-type]

        try:
            if email_changed:
                password_hash = self.settings.get(_credential_key(current.email))
                if password_hash is not None:
                    self.settings.set(_credential_key(email), password_hash)
                    self.settings.delete(_credential_key(current.email))
            if self.settings.get(USER_ID_KEY) == user_id:
                self.settings.set_many({USERNAME_KEY: updated.username, EMAIL_KEY: updated.email})
        except StoreError as exc:
            logger.warning("Profile update rolled back", extra={"user_id": user_id})
            self.user_repo.update_user(current)
            if email_changed:
                self._restore_credential(current.email, email)
            return Result.fail(exc)
        logger.info("Updated profile", extra={"user_id": user_id})
        return Result.ok(updated)

    def _restore_credential(self, old_email: str, new_email: str) -> None:
        """Point the credential back at ``old_email`` after a failed email change."""
        try:
            new_hash = self.settings.get(_credential_key(new_email))
            if new_hash is not None:
                if self.settings.get(_credential_key(old_email)) is None:
                    self.settings.set(_credential_key(old_email), new_hash)
                self.settings.delete(_credential_key(new_email))
        except StoreError:
            logger.warning("Could not restore credential", exc_info=True, extra={"email": old_email})

    def delete_account(self, user_id: str) -> Result[None]:
        try:
            user = self.user_repo.get_user(user_id)
        except StoreError as exc:
            return Result.fail(exc)
        if user is None:
            return Result.fail(NotFound("User", user_id))

        deleted = self.user_repo.delete_user(user_id)
        if deleted.is_failure:
            return Result.fail(deleted.error)  # type: ignore[arg-type]

        self.settings.delete(_credential_key(user.email))
        self.logout()
        logger.info("Deleted account", extra={"user_id": user_id})
        return Result.ok(None)


__all__ = [
    "AuthService",
    "AuthSession",
    "AuthState",
    "Authenticated",
    "Unauthenticated",
]
