"""FastAPI auth dependencies.

authenticate_request is installed as an app-wide dependency, so the
auth filter runs for every request before its handler. It stores the
result on ``request.state.auth``, binds the user id into the structlog
context and returns it. FastAPI caches it per request, so
get_current_user reuses the same value.

get_current_user is the hard gate: protected routers declare it and get
a 401 when the filter found no identity.
"""

from typing import Optional

import structlog
from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from yogastudio.auth.context import AuthContext
from yogastudio.auth.filter import AuthTokenFilter
from yogastudio.auth.jwt import TokenService, get_token_service
from yogastudio.auth.user_details import UserDetailsService
from yogastudio.db.engine import get_db


async def authenticate_request(
    request: Request,
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
    db: AsyncSession = Depends(get_db),
) -> Optional[AuthContext]:
    """Run the auth filter. Never raises; returns None if unauthenticated."""
    auth_filter = AuthTokenFilter(tokens, UserDetailsService(db))
    context = await auth_filter.authenticate(authorization)
    request.state.auth = context
    if context is not None:
        structlog.contextvars.bind_contextvars(user_id=context.user_id)
    return context


async def get_current_user(
    context: Optional[AuthContext] = Depends(authenticate_request),
) -> AuthContext:
    """Require an authenticated identity (401 otherwise)."""
    if context is None:
        raise HTTPException(
            status_code=401,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return context
