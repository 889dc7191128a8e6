"""JWT bearer token issuance and verification.

Tokens are stateless: the server keeps nothing but the signing secret and
the token lifetime. The payload carries the username (``sub``), the issue
time and the expiry.

The clock is injectable so expiry can be checked against a frozen time.
PyJWT's own exp/iat checks read the wall clock, so they are switched off
and expiry is enforced here against ``self.clock``.
"""

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from yogastudio.config import settings


class TokenError(Exception):
    """Raised when a token cannot be parsed or trusted."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """Issues and checks HMAC-signed bearer tokens."""

    def __init__(
        self,
        secret: str,
        expiration_minutes: int,
        algorithm: str = "HS512",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.secret = secret
        self.expiration_minutes = expiration_minutes
        self.algorithm = algorithm
        self.clock = clock or _utcnow

    def issue(self, username: Optional[str]) -> str:
        """Create a signed token for ``username``.

        Raises ValueError if no username is given.
        """
        if not username:
            raise ValueError("A username is required to issue a token")
        now = self.clock()
        payload = {
            "sub": username,
            "iat": now,
            "exp": now + timedelta(minutes=self.expiration_minutes),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> bool:
        """True iff the token is well-formed, correctly signed and unexpired.

        Never raises.
        """
        try:
            self._decode(token)
        except TokenError:
            return False
        return True

    def subject(self, token: Optional[str]) -> str:
        """Return the username embedded in the token.

        Raises TokenError for malformed, tampered or expired tokens.
        """
        return self._decode(token)["sub"]

    def _decode(self, token: Optional[str]) -> dict:
        if not token:
            raise TokenError("Token is empty")
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": ["sub", "iat", "exp"],
                },
            )
        except jwt.InvalidTokenError as e:
            raise TokenError(f"Invalid token: {e}") from e

        if not isinstance(payload["sub"], str) or not payload["sub"]:
            raise TokenError("Invalid token: subject must be a non-empty string")
        try:
            expires_at = float(payload["exp"])
        except (TypeError, ValueError) as e:
            raise TokenError("Invalid token: exp must be a timestamp") from e
        if expires_at <= self.clock().timestamp():
            raise TokenError("Token has expired")
        return payload


# Configured from settings: override get_token_service in tests.
token_service = TokenService(
    secret=settings.jwt_secret,
    expiration_minutes=settings.jwt_expiration_minutes,
    algorithm=settings.jwt_algorithm,
)


def get_token_service() -> TokenService:
    """FastAPI dependency returning the process-wide token service."""
    return token_service
