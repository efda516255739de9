# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from jose import jwt
from jose.exceptions import JWTError

from portfolio_admin.domain.users.entities import TokenClaims
from portfolio_admin.domain.users.exceptions import InvalidTokenError
from portfolio_admin.domain.users.repositories import TokenSigner


class JoseTokenSigner(TokenSigner):
    """HMAC-signed JWTs carrying ``userId``, ``username``, ``iat`` and ``exp``.

    ``decode`` checks signature and structure only; expiry is judged by the
    caller against its own clock.
    """

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm

    def sign(self, claims: TokenClaims) -> str:
        payload = {
            "userId": claims.user_id,
            "username": claims.username,
            "iat": int(claims.issued_at.timestamp()),
            "exp": int(claims.expires_at.timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> TokenClaims:
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise InvalidTokenError() from exc

        user_id = payload.get("userId")
        username = payload.get("username")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if not isinstance(user_id, str) or not isinstance(username, str):
            raise InvalidTokenError()
        if not isinstance(issued_at, int) or not isinstance(expires_at, int):
            raise InvalidTokenError()

        return TokenClaims(
            user_id=user_id,
            username=username,
            issued_at=datetime.fromtimestamp(issued_at, UTC),
            expires_at=datetime.fromtimestamp(expires_at, UTC),
        )


__all__ = ["JoseTokenSigner"]
