"""Bearer-token authentication filter.

Runs once per request, before any handler. It turns an
``Authorization: Bearer <token>`` header into an AuthContext, or into
nothing at all. It never rejects a request: rejecting unauthenticated
access is the job of the get_current_user gate on protected routers.

Fail-open caveat: every error on the way (bad token, missing user, even a
database failure during the lookup) is logged and then treated exactly
like "no credentials". A broken credential store therefore shows up as
401s on protected routes rather than 500s.
"""

from typing import Optional, Protocol

import structlog

from yogastudio.auth.context import AuthContext
from yogastudio.auth.jwt import TokenService
from yogastudio.auth.user_details import UserDetails

logger = structlog.get_logger()

BEARER_PREFIX = "Bearer "


class CredentialStore(Protocol):
    async def load_user_by_username(self, username: str) -> Optional[UserDetails]:
        ...


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    """Return the token part of a ``Bearer`` header value, if any."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):]


class AuthTokenFilter:
    """Resolves a request's Authorization header to an AuthContext."""

    def __init__(self, tokens: TokenService, users: CredentialStore):
        self.tokens = tokens
        self.users = users

    async def authenticate(self, authorization: Optional[str]) -> Optional[AuthContext]:
        try:
            token = parse_bearer(authorization)
            if token is None or not self.tokens.verify(token):
                return None

            username = self.tokens.subject(token)
            principal = await self.users.load_user_by_username(username)
            if principal is None:
                logger.info("auth.unknown_principal", username=username)
                return None
            return AuthContext.for_principal(principal)
        except Exception as e:
            logger.warning(
                "auth.filter_error",
                error=str(e),
                error_type=type(e).__name__,
            )
            return None
