from fastapi import APIRouter, Depends, HTTPException, status, Response, Cookie
from sqlalchemy.ext.asyncio import AsyncSession
from healthconnect.core.auth import (
    REFRESH_COOKIE,
    clear_session_cookies,
    create_tokens_for_user,
    set_session_cookies,
)
from healthconnect.db.crud.auth import create_account, authenticate_user, get_current_account, refresh_user_token
from healthconnect.schemas.auth import AuthResponse, LoginRequest, RegisterRequest
from healthconnect.core.middleware import get_current_user, get_db
from healthconnect.schemas.shared import Role, UserOut

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register_patient(
    user_data: RegisterRequest,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    """Patient sign-up. Doctors register through /doctors/register."""
    patient = await create_account(
        db,
        email=user_data.email,
        password=user_data.password,
        role=Role.patient.value,
        full_name=user_data.full_name,
        phone=user_data.phone,
    )
    tokens = create_tokens_for_user(patient)
    set_session_cookies(response, tokens)
    return tokens


@router.post("/login", response_model=AuthResponse)
async def login(
    login_data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db)
):
    user = await authenticate_user(db, login_data)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    tokens = create_tokens_for_user(user)
    set_session_cookies(response, tokens)
    return tokens


@router.post("/refresh", response_model=AuthResponse)
async def refresh(
    response: Response,
    refresh_token: str = Cookie(None, alias=REFRESH_COOKIE),
    db: AsyncSession = Depends(get_db)
):
    tokens = await refresh_user_token(db, refresh_token)
    set_session_cookies(response, tokens)
    return tokens


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout():
    # cookies deleted on a returned response, not the injected one
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    clear_session_cookies(response)
    return response


@router.get("/me", response_model=UserOut)
async def me(
    db: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user)
):
    """Account of the caller, authenticated by cookie or Bearer header."""
    return await get_current_account(db, current_user)
