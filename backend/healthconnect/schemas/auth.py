# healthconnect/schemas/auth.py
from __future__ import annotations
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class TokenType(Enum):
    bearer = 'bearer'


class AuthResponse(BaseModel):
    model_config = ConfigDict(extra='forbid')

    access_token: str
    refresh_token: str
    token_type: TokenType
    expires_in: int


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    email: EmailStr
    password: Annotated[str, Field(min_length=8, max_length=128)]


class RegisterRequest(BaseModel):
    """Patient sign-up; doctors register through /doctors/register."""
    email:     EmailStr
    password:  Annotated[str, Field(min_length=8, max_length=128)]
    full_name: Annotated[str, Field(min_length=1, max_length=120)]
    phone:     Optional[str] = Field(None, max_length=30)
