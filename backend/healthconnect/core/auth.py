from datetime import datetime, timedelta, timezone
from typing import Literal

from fastapi import Response
from passlib.context import CryptContext
from jose import JWTError, jwt
from healthconnect.schemas.auth import AuthResponse
from healthconnect.db.models.user import UserModel

from healthconnect.config.settings import env, settings

TokenKind = Literal["access", "refresh"]

SESSION_COOKIE = "session"
REFRESH_COOKIE = "refresh"

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__ident="2b",
)

secure_cookie = env == "production"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_token(claims: dict, kind: TokenKind, lifetime: timedelta) -> str:
    to_encode = {**claims, "type": kind, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str, kind: TokenKind) -> dict:
    """
    Verify signature, expiry and token kind. Raises JWTError for any token
    that is not a valid `kind` token, so a refresh token can never stand in
    for a session.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    if payload.get("type") != kind or "sub" not in payload:
        raise JWTError(f"Expected a {kind} token")
    return payload


def create_tokens_for_user(user: UserModel) -> AuthResponse:
    access_lifetime = timedelta(minutes=settings.access_token_expire_minutes)
    return AuthResponse(
        access_token=create_token({"sub": str(user.id), "role": user.role}, "access", access_lifetime),
        refresh_token=create_token(
            {"sub": str(user.id)}, "refresh", timedelta(days=settings.refresh_token_expire_days)
        ),
        token_type="bearer",
        expires_in=int(access_lifetime.total_seconds()),
    )


def set_session_cookies(response: Response, tokens: AuthResponse) -> None:
    """Store both tokens as HttpOnly cookies."""
    for key, value, max_age in (
        (SESSION_COOKIE, tokens.access_token, settings.access_token_expire_minutes * 60),
        (REFRESH_COOKIE, tokens.refresh_token, settings.refresh_token_expire_days * 86400),
    ):
        response.set_cookie(
            key=key,
            value=value,
            httponly=True,
            secure=secure_cookie,
            samesite="lax",
            max_age=max_age,
        )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(key=SESSION_COOKIE)
    response.delete_cookie(key=REFRESH_COOKIE)
