# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from portfolio_admin.domain.clock import parse_iso, to_iso
from portfolio_admin.domain.users.entities import Session, User
from portfolio_admin.domain.users.repositories import SessionRepository, UserRepository
from portfolio_admin.infrastructure.storage import JsonRecordStore, Record
from portfolio_admin.shared.errors import StorageError
from portfolio_admin.shared.logging import logger


def _user_from_record(record: Record) -> User | None:
    try:
        updated_at = record.get("updatedAt")
        return User(
            id=str(record["id"]),
            username=str(record["username"]),
            password_hash=str(record["password"]),
            role=str(record.get("role", "user")),
            created_at=parse_iso(record["createdAt"]),
            updated_at=parse_iso(updated_at) if updated_at else None,
        )
    except (KeyError, TypeError, ValueError):
        logger.warning(f"users: skipping malformed record id={record.get('id')}")
        return None


def _user_to_record(user: User) -> Record:
    record: Record = {
        "id": user.id,
        "username": user.username,
        "password": user.password_hash,
        "role": user.role,
        "createdAt": to_iso(user.created_at),
    }
    if user.updated_at is not None:
        record["updatedAt"] = to_iso(user.updated_at)
    return record


def _session_from_record(record: Record) -> Session | None:
    try:
        return Session(
            id=str(record["id"]),
            user_id=str(record["userId"]),
            token=str(record["token"]),
            expires_at=parse_iso(record["expiresAt"]),
            created_at=parse_iso(record["createdAt"]),
        )
    except (KeyError, TypeError, ValueError):
        logger.warning(f"sessions: skipping malformed record id={record.get('id')}")
        return None


def _session_to_record(session: Session) -> Record:
    return {
        "id": session.id,
        "userId": session.user_id,
        "token": session.token,
        "expiresAt": to_iso(session.expires_at),
        "createdAt": to_iso(session.created_at),
    }


class JsonUserRepository(UserRepository):
    def __init__(self, path: str | Path) -> None:
        self._store = JsonRecordStore(path, key="id")

    def get(self, user_id: str) -> User | None:
        record = self._store.get(user_id)
        return _user_from_record(record) if record else None

    def find_by_username(self, username: str) -> User | None:
        matches = self._store.list_by(lambda record: record.get("username") == username)
        return _user_from_record(matches[0]) if matches else None

    def put(self, user: User) -> None:
        self._store.put(_user_to_record(user))

    def add_if_username_free(self, user: User) -> bool:
        with self._store.transaction() as records:
            if any(record.get("username") == user.username for record in records):
                return False
            records.append(_user_to_record(user))
        return True

    def list_by(self, predicate: Callable[[User], bool] | None = None) -> list[User]:
        users = [u for u in map(_user_from_record, self._store.list_by()) if u is not None]
        if predicate is None:
            return users
        return [u for u in users if predicate(u)]


class JsonSessionRepository(SessionRepository):
    def __init__(self, path: str | Path) -> None:
        self._store = JsonRecordStore(path, key="token")

    def get(self, token: str) -> Session | None:
        record = self._store.get(token)
        return _session_from_record(record) if record else None

    def get_active(self, token: str, now: datetime) -> Session | None:
        session = self.get(token)
        if session is None:
            return None
        if session.is_expired(now):
            try:
                self.delete(token)
            except StorageError:
                logger.error(f"sessions: could not drop expired session id={session.id}")
                return None
            logger.info(f"sessions: dropped expired session id={session.id} user={session.user_id}")
            return None
        return session

    def put(self, session: Session) -> None:
        self._store.put(_session_to_record(session))

    def delete(self, token: str) -> bool:
        return self._store.delete(token)

    def delete_expired(self, now: datetime) -> int:
        def _expired(record: Record) -> bool:
            session = _session_from_record(record)
            return session is None or session.is_expired(now)

        return self._store.delete_where(_expired)

    def list_by(self, predicate: Callable[[Session], bool] | None = None) -> list[Session]:
        sessions = [s for s in map(_session_from_record, self._store.list_by()) if s is not None]
        if predicate is None:
            return sessions
        return [s for s in sessions if predicate(s)]


__all__ = ["JsonSessionRepository", "JsonUserRepository"]
