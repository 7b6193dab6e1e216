from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel, utcnow


class LoginRequest(CamelModel):
    username: str = ""
    password: str = ""


class RegisterRequest(CamelModel):
    username: str = ""
    password: str = ""
    # str y no EmailStr: el formato se valida con los mensajes configurados
    email: str = ""


class RefreshTokenRequest(CamelModel):
    token: str = ""


class LoginResponse(CamelModel):
    token: str
    expires_at: datetime
    username: str


class User(CamelModel):
    """Usuario tal y como se guarda en el store (nunca se devuelve tal cual)."""
    username: str
    password_hash: str
    email: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)


class UserOut(CamelModel):
    username: str
    email: Optional[str] = None
    created_at: datetime
