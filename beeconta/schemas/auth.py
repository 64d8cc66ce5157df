"""
Pydantic schemas for authentication endpoints.

These models define the request/response contracts for sign-in, sign-up,
password recovery and the current-user profile.
"""

from typing import Optional
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Email/password credentials."""
    email: str = Field(..., min_length=3, max_length=320, examples=["ana@colmeia.com.br"])
    password: str = Field(..., min_length=1, description="Account password")


class LoginResponse(BaseModel):
    """
    Tokens returned after a successful sign-in.

    The access_token is the bearer token for every other endpoint.
    """
    user_id: str = Field(..., description="User UUID")
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = Field(None, description="Seconds until the access token expires")
    token_type: str = Field("bearer", examples=["bearer"])


class GoogleLoginResponse(BaseModel):
    """URL the client must follow to complete Google OAuth."""
    url: str = Field(..., description="Provider authorization URL")


class RegisterRequest(BaseModel):
    """
    Sign-up request. The user profile row is created alongside the auth user.
    """
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=6, description="At least 6 characters")
    nome: str = Field(..., min_length=1, max_length=100, examples=["Ana"])
    sobrenome: Optional[str] = Field(None, max_length=100, examples=["Souza"])


class RegisterResponse(BaseModel):
    status: str = Field("CREATED")
    user_id: str
    email: str
    message: str = Field(..., examples=["User registered successfully"])


class PasswordRecoverRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)


class PasswordResetRequest(BaseModel):
    """New password for the authenticated user."""
    password: str = Field(..., min_length=6)


class MessageResponse(BaseModel):
    status: str = Field(..., examples=["OK"])
    message: str


class UserProfile(BaseModel):
    """
    Profile of the authenticated user (usuarios row).

    Fields fall back to auth metadata when the row cannot be read.
    """
    id: str = Field(..., description="User UUID")
    email: Optional[str] = None
    nome: Optional[str] = Field(None, description="First name")
    sobrenome: Optional[str] = Field(None, description="Last name")
    nome_exibicao: Optional[str] = Field(None, description="Display name")
    url_avatar: Optional[str] = Field(None, description="Public URL of the avatar")
    empresa_padrao_id: Optional[str] = Field(
        None,
        description="Default company restored at the next sign-in"
    )
    admin_sistema: bool = Field(False, description="System administrator flag")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "38f7d540-23fa-497a-8df2-3ab9cbe13da5",
                    "email": "ana@colmeia.com.br",
                    "nome": "Ana",
                    "sobrenome": "Souza",
                    "nome_exibicao": "Ana Souza",
                    "url_avatar": None,
                    "empresa_padrao_id": None,
                    "admin_sistema": False
                }
            ]
        }
    }


class UserUpdateRequest(BaseModel):
    """Editable profile fields. Only provided fields are changed."""
    nome: Optional[str] = Field(None, min_length=1, max_length=100)
    sobrenome: Optional[str] = Field(None, max_length=100)
    nome_exibicao: Optional[str] = Field(None, max_length=200)
    url_avatar: Optional[str] = None
    empresa_padrao_id: Optional[str] = None
