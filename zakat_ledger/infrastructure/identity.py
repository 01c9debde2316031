"""Identity — verifies bearer tokens from the identity provider.

Invariants:
    - A valid token carries sub (user UUID) and role claims; exp is enforced when present
    - Any decode failure surfaces as AuthenticationError (never a raw jwt exception)
    - Role values are not checked here — the policy table denies unknown roles

Design Decisions:
    - PyJWT, shared secret (HS256 default): the provider and this service share jwt_secret
    - issue_access_token exists for operator scripts and tests; login flows live elsewhere
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from zakat_ledger.core.errors import AuthenticationError


@dataclass(frozen=True)
class CallerIdentity:
    user_id: UUID
    role: str


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> CallerIdentity:
    try:
        payload = jwt.decode(
            token, secret, algorithms=[algorithm],
            options={"require": ["sub", "role"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Token is invalid")
    try:
        user_id = UUID(str(payload["sub"]))
    except ValueError:
        raise AuthenticationError("Token subject is not a user id")
    return CallerIdentity(user_id=user_id, role=str(payload["role"]))


def issue_access_token(
    user_id: UUID,
    role: str,
    secret: str,
    algorithm: str = "HS256",
    expires_in: timedelta = timedelta(hours=1),
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + expires_in,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)
