from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoginRequestDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    login: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)


class RegisterRequestDTO(LoginRequestDTO):
    first_name: str = Field(min_length=1, max_length=64)
    last_name: str = Field(min_length=1, max_length=64)


class LoginResponseDTO(BaseModel):
    token: str


class AuthStatusDTO(BaseModel):
    user_id: int


class LogoutAllResponseDTO(BaseModel):
    ok: bool = True
    revoked: int


class AuthSuccessDTO(BaseModel):
    ok: bool = True
