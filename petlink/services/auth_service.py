"""Login, registro y renovación de tokens."""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends
from jose import JWTError

from ..config import Settings, get_settings
from ..errors import ServiceError
from ..schemas.common import utcnow
from ..schemas.user import LoginRequest, LoginResponse, RegisterRequest, User
from ..security import create_access_token, decode_access_token, hash_password, verify_password
from ..store import InMemoryStore, get_store
from ..validation import validate_login_fields, validate_register_fields

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, store: InMemoryStore, settings: Settings):
        self.store = store
        self.settings = settings
        self.rules = settings.validation.user
        self.messages = settings.error_messages.auth

    def _find(self, username: str) -> Optional[User]:
        return self.store.users.get(username.lower())

    def authenticate(self, payload: LoginRequest) -> LoginResponse:
        validate_login_fields(payload, self.rules)
        with self.store.users_lock:
            user = self._find(payload.username)
        # Mismo mensaje para usuario inexistente y contraseña incorrecta
        if user is None or not verify_password(payload.password, user.password_hash):
            logger.warning(f"Login fallido para {payload.username!r}")
            raise ServiceError.unauthorized(self.messages.invalid_credentials)
        return self._issue(user.username)

    def validate_user(self, username: str, password: str) -> bool:
        if not username or not password:
            return False
        with self.store.users_lock:
            user = self._find(username)
        return user is not None and verify_password(password, user.password_hash)

    def get_user(self, username: str) -> Optional[User]:
        if not username:
            raise ServiceError.validation("Username is required")
        with self.store.users_lock:
            user = self._find(username)
            return user.model_copy() if user else None

    def register(self, payload: RegisterRequest) -> User:
        validate_register_fields(payload, self.rules)
        email = payload.email.casefold()
        with self.store.users_lock:
            if self._find(payload.username) is not None:
                raise ServiceError.conflict(self.messages.user_exists)
            if any(u.email and u.email.casefold() == email for u in self.store.users.values()):
                raise ServiceError.conflict(self.messages.email_exists)
            user = User(
                username=payload.username,
                password_hash=hash_password(payload.password),
                email=payload.email,
                created_at=utcnow(),
            )
            self.store.users[user.username.lower()] = user
        logger.info(f"Usuario registrado: {user.username}")
        return user.model_copy()

    def refresh_token(self, token: str) -> LoginResponse:
        if not token or not token.strip():
            raise ServiceError.validation("Refresh token is required")
        try:
            username = decode_access_token(token, self.settings.jwt_secret)
        except JWTError as exc:
            logger.warning(f"Refresh con token inválido: {exc}")
            raise ServiceError.unauthorized(self.messages.invalid_token)
        return self._issue(username)

    def generate_token(self, username: str):
        """Devuelve (token, expires_at)."""
        if not username:
            raise ServiceError.validation("Username is required for token generation")
        return create_access_token(username, self.settings.jwt_secret, self.settings.jwt_expires_hours)

    def _issue(self, username: str) -> LoginResponse:
        token, expires_at = self.generate_token(username)
        return LoginResponse(token=token, expires_at=expires_at, username=username)


def get_auth_service(
    store: InMemoryStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    return AuthService(store, settings)
