"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Auth is applied at the include_router level: protected routers carry
the get_current_user dependency, so each of their handlers answers 401
when the auth filter found no identity. Health and auth stay open.
"""

from fastapi import APIRouter, Depends

from yogastudio.api.auth import router as auth_router
from yogastudio.api.health import router as health_router
from yogastudio.api.sessions import router as sessions_router
from yogastudio.api.teachers import router as teachers_router
from yogastudio.api.users import router as users_router
from yogastudio.auth.dependencies import get_current_user

_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api")

# Open routes: no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes: require a valid bearer token
api_router.include_router(teachers_router, tags=["teachers"], dependencies=_auth)
api_router.include_router(users_router, tags=["users"], dependencies=_auth)
api_router.include_router(sessions_router, tags=["sessions", "participation"], dependencies=_auth)
