import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload
from fastapi import HTTPException, status
from jose import JWTError

from healthconnect.db.models import UserModel, ProfileModel, DoctorModel
from healthconnect.schemas.auth import LoginRequest, AuthResponse
from healthconnect.schemas.shared import UserOut as User
from healthconnect.core.auth import get_password_hash, verify_password, decode_token, create_tokens_for_user
from healthconnect.core.errors import StoreUnavailable

logger = logging.getLogger(__name__)


def _new_account(
    db: AsyncSession,
    email: str,
    password: str,
    role: str,
    full_name: str,
    phone: Optional[str],
) -> UserModel:
    user = UserModel(email=email, password_hash=get_password_hash(password), role=role)
    db.add(user)
    db.add(ProfileModel(user=user, full_name=full_name, email=email, phone=phone))
    return user


async def _commit_or_raise(db: AsyncSession, email: str) -> None:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Email already registered")
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Account creation for {email} failed: {e}", exc_info=True)
        raise StoreUnavailable(f"Failed to create account: {e}") from e


async def create_account(
    db: AsyncSession,
    email: str,
    password: str,
    role: str,
    full_name: str,
    phone: Optional[str] = None,
) -> UserModel:
    """Insert an account and its profile in one transaction."""
    user = _new_account(db, email, password, role, full_name, phone)
    await _commit_or_raise(db, email)
    await db.refresh(user)
    logger.info(f"Created {role} account id={user.id}")
    return user


async def create_doctor_account(
    db: AsyncSession,
    email: str,
    password: str,
    full_name: str,
    phone: Optional[str],
    doctor_fields: Dict[str, Any],
) -> Tuple[UserModel, DoctorModel]:
    """
    Insert a doctor account, its profile and its directory row in one
    transaction. If the directory row cannot be written the account is
    rolled back with it.
    """
    user = _new_account(db, email, password, "doctor", full_name, phone)
    try:
        # flush to learn the account id the directory row points at
        await db.flush()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail="Email already registered")
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Doctor account creation for {email} failed: {e}", exc_info=True)
        raise StoreUnavailable(f"Failed to create account: {e}") from e

    doctor = DoctorModel(user_id=user.id, **doctor_fields)
    db.add(doctor)
    try:
        await db.flush()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(
            f"Directory row for {email} rejected, rolling back account: {e}", exc_info=True
        )
        raise StoreUnavailable(f"Failed to create doctor profile: {e}") from e

    await _commit_or_raise(db, email)
    await db.refresh(user)
    await db.refresh(doctor)
    logger.info(f"Created doctor account id={user.id} with directory row id={doctor.id}")
    return user, doctor


async def authenticate_user(db: AsyncSession, login_data: LoginRequest) -> UserModel | None:
    result = await db.execute(select(UserModel).where(UserModel.email == login_data.email))
    user = result.scalar_one_or_none()
    if not user:
        return None
    if not verify_password(login_data.password, user.password_hash):
        return None
    return user


async def get_user_by_id(db: AsyncSession, user_id: int) -> UserModel | None:
    """Get user by ID with its profile loaded."""
    user = await db.scalar(
        select(UserModel)
        .options(selectinload(UserModel.profile))
        .where(UserModel.id == user_id)
    )
    return user


async def get_current_account(db: AsyncSession, claims: dict) -> User:
    """The account behind already-verified session claims."""
    user = await get_user_by_id(db, int(claims["user_id"]))
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    return User.model_validate(user, from_attributes=True)


async def refresh_user_token(db: AsyncSession, refresh_token: str) -> AuthResponse:
    """Issues a fresh token pair from a valid refresh token."""
    if not refresh_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing refresh token")
    try:
        payload = decode_token(refresh_token, "refresh")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid refresh token")

    user = await db.get(UserModel, int(payload["sub"]))
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")

    return create_tokens_for_user(user)
