from datetime import datetime, timedelta, timezone
from typing import Optional
import logging
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext

from .config import Settings, get_settings
from .errors import ServiceError

logger = logging.getLogger(__name__)

ALGO = "HS256"
# pbkdf2 en vez de bcrypt: bcrypt trunca a 72 bytes y el máximo configurado es 100
pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")


def hash_password(plain: str) -> str:
    return pwd.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    return pwd.verify(plain, hashed)


def create_access_token(
    username: str,
    secret: str,
    expires_hours: Optional[int] = None,
) -> tuple[str, datetime]:
    """Firma un JWT HS256 con ``name``/``sub`` = username. Devuelve (token, expiración)."""
    now = datetime.now(timezone.utc)
    expire = now + timedelta(hours=expires_hours or 1)
    payload = {"name": username, "sub": username, "iat": now, "exp": expire}
    return jwt.encode(payload, secret, algorithm=ALGO), expire


def decode_access_token(token: str, secret: str) -> str:
    """Valida firma y expiración; devuelve el subject. Lanza JWTError si algo falla."""
    payload = jwt.decode(token, secret, algorithms=[ALGO])
    sub = payload.get("sub") or payload.get("name")
    if not sub:
        raise JWTError("token without subject")
    return str(sub)


async def get_current_username(
    token: str = Depends(oauth2_scheme),
    settings: Settings = Depends(get_settings),
) -> str:
    try:
        return decode_access_token(token, settings.jwt_secret)
    except JWTError as exc:
        logger.warning(f"Token rechazado: {exc}")
        raise ServiceError.unauthorized(settings.error_messages.auth.invalid_token)
