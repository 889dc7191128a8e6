"""Per-request identity.

An AuthContext is created by the auth filter and handed to route
handlers through FastAPI dependencies. There is no global "current user":
code that needs the caller receives it as an argument.
"""

from dataclasses import dataclass, field

from yogastudio.auth.user_details import UserDetails

ADMIN_AUTHORITY = "admin"


@dataclass(frozen=True)
class AuthContext:
    """The authenticated identity making the request."""

    principal: UserDetails
    authorities: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def for_principal(cls, principal: UserDetails) -> "AuthContext":
        authorities = {ADMIN_AUTHORITY} if principal.admin else set()
        return cls(principal=principal, authorities=frozenset(authorities))

    @property
    def user_id(self) -> int:
        return self.principal.id

    @property
    def username(self) -> str:
        return self.principal.username

    def has_authority(self, authority: str) -> bool:
        return authority in self.authorities
