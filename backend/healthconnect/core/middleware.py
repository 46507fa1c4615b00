import logging
from typing import Optional

from fastapi import Depends, Request, HTTPException
from jose import JWTError

from .auth import SESSION_COOKIE, decode_token
from healthconnect.db.session import get_db_session

logger = logging.getLogger(__name__)

# Paths that never need the session decoded
PUBLIC_PATHS = [
    "/auth/login",
    "/auth/register",
    "/auth/refresh",
    "/health",
    "/docs",
    "/openapi.json",
    "/redoc"
]


def _claims_from_token(token: str) -> Optional[dict]:
    try:
        token_data = decode_token(token, "access")
    except JWTError as e:
        # Invalid or expired tokens simply leave the request anonymous
        logger.debug(f"Ignoring session token: {e}")
        return None
    return {
        "user_id": token_data["sub"],
        "role": token_data.get("role")
    }


def _bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header.split(" ", 1)[1]
    return None


async def verify_token_middleware(request: Request, call_next):
    """
    Attach the caller's claims to `request.state.user`.

    The session cookie wins over an Authorization header. Anonymous and
    invalid-token requests pass through with `request.state.user = None`;
    routes that need a caller depend on `get_current_user`.
    """
    request.state.user = None

    if any(request.url.path.startswith(public_path) for public_path in PUBLIC_PATHS):
        return await call_next(request)

    token = request.cookies.get(SESSION_COOKIE) or _bearer_token(request)
    if token:
        request.state.user = _claims_from_token(token)

    return await call_next(request)


# FastAPI dependency for protected routes
def get_current_user(request: Request) -> dict:
    """Claims of the authenticated caller; 401 for anonymous requests."""
    user = getattr(request.state, "user", None)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_roles(roles: list):
    """
    Dependency factory limiting a route to the given roles (403 otherwise).
    Usage: current_user: dict = Depends(require_roles(["patient"]))
    """
    def _require_roles(user: dict = Depends(get_current_user)) -> dict:
        if user["role"] not in roles:
            raise HTTPException(status_code=403, detail="Not enough permissions")
        return user

    return _require_roles


async def get_db(request: Request):
    """Yield an async SQLAlchemy session (dependency)."""
    async for session in get_db_session(request):
        yield session
