"""
Validaciones de negocio sobre los datos de entrada.

Cada función lanza ``ServiceError`` de tipo VALIDATION en vez de devolver un
booleano: o la entrada es válida o la operación se aborta.
"""
import re
from typing import Iterator, Optional, Protocol

from email_validator import EmailNotValidError, validate_email

from .config import PaginationSettings, PetValidationSettings, UserValidationSettings
from .errors import ServiceError

PET_TYPE_RE = re.compile(r"^[A-Za-z ]+$")
USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")


class PetFields(Protocol):
    name: str
    type: str
    description: Optional[str]
    age: Optional[int]


def validate_id(id: int, label: str = "ID") -> None:
    if id <= 0:
        raise ServiceError.validation(f"{label} must be greater than 0")


def validate_pagination(page: int, page_size: int, settings: Optional[PaginationSettings] = None) -> None:
    max_page_size = settings.max_page_size if settings is not None else 100
    if page < 1:
        raise ServiceError.validation("Page must be greater than 0")
    if page_size < 1 or page_size > max_page_size:
        raise ServiceError.validation(f"PageSize must be between 1 and {max_page_size}")


def _pet_field_errors(pet: PetFields, s: PetValidationSettings) -> Iterator[str]:
    name = pet.name or ""
    type_ = pet.type or ""
    if not s.name_min_length <= len(name) <= s.name_max_length:
        yield f"Pet name must be between {s.name_min_length} and {s.name_max_length} characters"
    if not s.type_min_length <= len(type_) <= s.type_max_length:
        yield f"Pet type must be between {s.type_min_length} and {s.type_max_length} characters"
    if not PET_TYPE_RE.fullmatch(type_):
        yield "Pet type can only contain letters and spaces"
    if pet.description and len(pet.description) > s.description_max_length:
        yield f"Description cannot exceed {s.description_max_length} characters"
    if pet.age is not None and not s.min_age <= pet.age <= s.max_age:
        yield f"Age must be between {s.min_age} and {s.max_age} years"


def validate_pet_fields(pet: PetFields, settings: PetValidationSettings, collect_all: bool = False) -> None:
    """
    Comprueba longitudes de nombre/tipo, formato del tipo, descripción y edad.

    Por defecto se informa solo del primer fallo; con ``collect_all=True``
    el error lleva todos los mensajes.
    """
    errors = _pet_field_errors(pet, settings)
    if collect_all:
        messages = list(errors)
        if messages:
            raise ServiceError.validation(messages)
        return
    first = next(errors, None)
    if first is not None:
        raise ServiceError.validation(first)


def validate_login_fields(request, settings: UserValidationSettings) -> None:
    """
    Solo presencia y longitud máxima: una contraseña incorrecta de cualquier
    longitud tiene que acabar en el mismo 401 que un usuario inexistente.
    """
    username, password = request.username, request.password
    if not username or not username.strip():
        raise ServiceError.validation("Username is required")
    if len(username) > settings.username_max_length:
        raise ServiceError.validation(f"Username cannot exceed {settings.username_max_length} characters")
    if not password or not password.strip():
        raise ServiceError.validation("Password is required")
    if len(password) > settings.password_max_length:
        raise ServiceError.validation(f"Password cannot exceed {settings.password_max_length} characters")


def is_valid_email(email: str) -> bool:
    try:
        result = validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    # Sin normalizaciones: la dirección debe ser exactamente la introducida
    return result.normalized.lower() == email.lower()


def validate_register_fields(request, settings: UserValidationSettings) -> None:
    validate_login_fields(request, settings)
    s = settings
    if len(request.username) < s.username_min_length:
        raise ServiceError.validation(f"Username must be at least {s.username_min_length} characters")
    if not USERNAME_RE.fullmatch(request.username):
        raise ServiceError.validation("Username can only contain letters, numbers, and underscores")
    if len(request.password) < s.password_min_length:
        raise ServiceError.validation(f"Password must be at least {s.password_min_length} characters")
    email = request.email
    if not email or not email.strip():
        raise ServiceError.validation("Email is required")
    if len(email) > settings.email_max_length:
        raise ServiceError.validation(f"Email cannot exceed {settings.email_max_length} characters")
    if not is_valid_email(email):
        raise ServiceError.validation("Invalid email format")
