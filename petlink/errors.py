"""
Errores tipados que los servicios propagan hasta el middleware.

Un único tipo de excepción (``ServiceError``) con una etiqueta ``ErrorKind``
que indica la categoría y, con ella, el código HTTP de la respuesta.
"""
from __future__ import annotations

from enum import Enum
from http import HTTPStatus
from typing import Iterable


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    CONFLICT = "conflict"
    BUSINESS_RULE = "business_rule"

    @property
    def status(self) -> HTTPStatus:
        return _STATUS_BY_KIND[self]


_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: HTTPStatus.BAD_REQUEST,
    ErrorKind.NOT_FOUND: HTTPStatus.NOT_FOUND,
    ErrorKind.UNAUTHORIZED: HTTPStatus.UNAUTHORIZED,
    ErrorKind.CONFLICT: HTTPStatus.CONFLICT,
    ErrorKind.BUSINESS_RULE: HTTPStatus.BAD_REQUEST,
}


class ServiceError(Exception):
    def __init__(self, kind: ErrorKind, message: str, errors: Iterable[str] | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.errors: list[str] = list(errors) if errors is not None else [message]

    @property
    def status(self) -> HTTPStatus:
        return self.kind.status

    def __repr__(self) -> str:
        return f"ServiceError(kind={self.kind.value!r}, message={self.message!r})"

    @classmethod
    def validation(cls, messages: str | Iterable[str]) -> "ServiceError":
        """Uno o varios mensajes; ``message`` es siempre el primero."""
        errors = [messages] if isinstance(messages, str) else list(messages)
        if not errors:
            raise ValueError("a validation error needs at least one message")
        return cls(ErrorKind.VALIDATION, errors[0], errors)

    @classmethod
    def not_found(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized access") -> "ServiceError":
        return cls(ErrorKind.UNAUTHORIZED, message)

    @classmethod
    def conflict(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    def business_rule(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.BUSINESS_RULE, message)
