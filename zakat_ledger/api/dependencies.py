"""Request Dependencies — caller identity and per-operation permission checks.

Invariants:
    - No bearer token, or an undecodable one, → AuthenticationError (401)
    - A role the policy table does not allow → PermissionDeniedError (403)
    - Permission is decided before the route touches a service

Design Decisions:
    - HTTPBearer(auto_error=False): missing credentials go through our own error
      envelope instead of FastAPI's default 403
    - require_permission(op) as a dependency factory, one operation name per route
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from zakat_ledger.config import get_settings
from zakat_ledger.core.errors import AuthenticationError, PermissionDeniedError
from zakat_ledger.core.policy import is_allowed
from zakat_ledger.infrastructure.identity import CallerIdentity, decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_caller(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CallerIdentity:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    settings = get_settings()
    return decode_access_token(
        credentials.credentials, settings.jwt_secret, settings.jwt_algorithm,
    )


def require_permission(operation: str):
    """Dependency factory: resolves the caller and checks the policy table."""

    async def check(caller: CallerIdentity = Depends(get_caller)) -> CallerIdentity:
        if not is_allowed(caller.role, operation):
            logger.warning(
                "Permission denied",
                extra={
                    "user_id": caller.user_id, "role": caller.role,
                    "operation": operation,
                },
            )
            raise PermissionDeniedError(caller.role, operation)
        return caller

    return check
