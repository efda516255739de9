# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
from datetime import datetime, timedelta

from portfolio_admin.domain.clock import Clock, utc_now
from portfolio_admin.domain.users.entities import ROLE_ADMIN, ROLE_USER, Session, TokenClaims, User
from portfolio_admin.domain.users.exceptions import (
    InvalidCredentialsError,
    SessionNotFoundError,
    TokenExpiredError,
    UserNotFoundError,
)
from portfolio_admin.domain.users.repositories import (
    PasswordHasher,
    SessionRepository,
    TokenSigner,
    UserRepository,
)
from portfolio_admin.shared.errors import StorageError
from portfolio_admin.shared.logging import logger

DEFAULT_SESSION_TTL = timedelta(hours=24)


def _new_id() -> str:
    return secrets.token_hex(12)


class CredentialStore:
    """Users, sessions and the signed tokens that point at them."""

    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
        token_signer: TokenSigner,
        session_ttl: timedelta = DEFAULT_SESSION_TTL,
        clock: Clock = utc_now,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._token_signer = token_signer
        self._session_ttl = session_ttl
        self._clock = clock

    @property
    def password_hasher(self) -> PasswordHasher:
        return self._password_hasher

    def _now(self) -> datetime:
        return self._clock()

    # Users

    def create_user(self, username: str, password_hash: str, role: str = ROLE_USER) -> bool:
        now = self._now()
        user = User(
            id=_new_id(),
            username=username,
            password_hash=password_hash,
            role=role,
            created_at=now,
            updated_at=now,
        )
        created = self._users.add_if_username_free(user)
        if created:
            logger.info(f"credential_store: created user={username} role={role}")
        else:
            logger.info(f"credential_store: username already taken user={username}")
        return created

    def get_user_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> User | None:
        return self._users.find_by_username(username)

    def list_users(self) -> list[User]:
        return self._users.list_by()

    def authenticate(self, username: str, password: str) -> User:
        user = self._users.find_by_username(username)
        if user is None:
            raise UserNotFoundError()
        if not self._password_hasher.verify(password, user.password_hash):
            raise InvalidCredentialsError()
        return user

    def update_user_password(self, user_id: str, new_hash: str) -> User:
        user = self._users.get(user_id)
        if user is None:
            logger.warning(f"credential_store: password update for unknown user={user_id}")
            raise UserNotFoundError()
        updated = User(
            id=user.id,
            username=user.username,
            password_hash=new_hash,
            role=user.role,
            created_at=user.created_at,
            updated_at=self._now(),
        )
        self._users.put(updated)
        logger.info(f"credential_store: password updated for user={user_id}")
        return updated

    def initialize_default_user(self, password: str, username: str = "admin") -> bool:
        """Seed a single administrator when the user collection is empty."""
        if self._users.list_by():
            return False
        created = self.create_user(username, self._password_hasher.hash(password), ROLE_ADMIN)
        if created:
            logger.warning(
                f"credential_store: default admin user '{username}' created, change its password"
            )
        return created

    # Sessions

    def issue_session(self, user_id: str) -> str:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError()

        now = self._now().replace(microsecond=0)
        expires_at = now + self._session_ttl
        token = self._token_signer.sign(
            TokenClaims(
                user_id=user.id,
                username=user.username,
                issued_at=now,
                expires_at=expires_at,
            )
        )
        self._sessions.put(
            Session(
                id=_new_id(),
                user_id=user.id,
                token=token,
                expires_at=expires_at,
                created_at=now,
            )
        )
        logger.info(
            f"Issued session for user={user.id} exp={expires_at.isoformat()} tok={token[:8]}…"
        )
        return token

    def verify_token(self, token: str) -> TokenClaims:
        claims = self._token_signer.decode(token)
        if self._now() >= claims.expires_at:
            raise TokenExpiredError()
        return claims

    def get_session_by_token(self, token: str) -> Session | None:
        return self._sessions.get_active(token, self._now())

    def require_session(self, token: str) -> Session:
        session = self.get_session_by_token(token)
        if session is None:
            raise SessionNotFoundError()
        return session

    def remove_session(self, token: str) -> None:
        try:
            removed = self._sessions.delete(token)
        except StorageError:
            logger.error(f"credential_store: could not remove session tok={token[:8]}…")
            return
        if removed:
            logger.info(f"credential_store: session removed tok={token[:8]}…")

    def list_sessions(self) -> list[Session]:
        return self._sessions.list_by()

    def cleanup_expired_sessions(self) -> int:
        removed = self._sessions.delete_expired(self._now())
        if removed:
            logger.info(f"credential_store: removed {removed} expired sessions")
        return removed


__all__ = ["CredentialStore", "DEFAULT_SESSION_TTL"]
