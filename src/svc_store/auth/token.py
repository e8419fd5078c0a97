"""Signed tokens binding a record id to an expiry.

Only the error surface matters to the rest of the library: an expired token
raises TokenExpiredError, anything else wrong with it raises AuthError.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from pydantic import BaseModel, ValidationError

from svc_store.db.nosql.types import PyObjectId
from svc_store.exceptions import AuthError, TokenExpiredError

from .settings import get_auth_settings


def _secret(secret: Optional[str]) -> str:
    if secret is not None:
        return secret
    return get_auth_settings().jwt_secret.get_secret_value()


class Token(BaseModel):
    id: PyObjectId
    exp: int

    @property
    def expires_at(self) -> datetime:
        return datetime.fromtimestamp(self.exp, tz=timezone.utc)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or datetime.now(timezone.utc)) > self.expires_at

    @classmethod
    def encode(
        cls,
        id: Any,
        lifetime: Optional[timedelta] = None,
        secret: Optional[str] = None,
        *,
        algorithm: str = "HS256",
    ) -> str:
        if lifetime is None:
            lifetime = timedelta(seconds=get_auth_settings().jwt_lifetime_seconds)
        exp = int((datetime.now(timezone.utc) + lifetime).timestamp())
        try:
            return jwt.encode({"id": str(id), "exp": exp}, _secret(secret), algorithm=algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise AuthError(str(exc)) from exc

    @classmethod
    def decode(
        cls,
        raw_token: str,
        secret: Optional[str] = None,
        *,
        algorithm: str = "HS256",
    ) -> "Token":
        try:
            claims = jwt.decode(
                raw_token,
                _secret(secret),
                algorithms=[algorithm],
                options={"require": ["exp", "id"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.PyJWTError as exc:
            raise AuthError(str(exc)) from exc
        try:
            return cls.model_validate(claims)
        except ValidationError as exc:
            raise AuthError(f"malformed token claims: {exc}") from exc


__all__ = ["Token"]
