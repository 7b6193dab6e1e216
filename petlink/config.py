from functools import lru_cache
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel
import json
import logging
import os
from pathlib import Path
from dotenv import load_dotenv
load_dotenv()  # carga el archivo .env de la raíz

logger = logging.getLogger(__name__)


class _ConfigSection(BaseModel):
    # Acepta claves camelCase (formato appsettings) o snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== Límites de validación ====================

class PetValidationSettings(_ConfigSection):
    name_min_length: int = 2
    name_max_length: int = 50
    type_min_length: int = 2
    type_max_length: int = 30
    description_max_length: int = 500
    min_age: int = 0
    max_age: int = 50


class UserValidationSettings(_ConfigSection):
    username_min_length: int = 3
    username_max_length: int = 50
    password_min_length: int = 6
    password_max_length: int = 100
    email_max_length: int = 100


class PaginationSettings(_ConfigSection):
    default_page_size: int = 10
    max_page_size: int = 100


class ValidationSettings(_ConfigSection):
    pet: PetValidationSettings = Field(default_factory=PetValidationSettings)
    user: UserValidationSettings = Field(default_factory=UserValidationSettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)


# ==================== Mensajes de error ====================

class GeneralErrorMessages(_ConfigSection):
    validation_failed: str = "Validation failed"
    not_found: str = "Resource not found"
    unauthorized: str = "Unauthorized access"
    internal_server_error: str = "An internal server error occurred"


class PetErrorMessages(_ConfigSection):
    not_found: str = "Pet not found"
    already_adopted: str = "Pet is already adopted"
    cannot_delete_adopted: str = "Cannot delete an adopted pet"
    duplicate_name: str = "A pet with this name already exists"


class AuthErrorMessages(_ConfigSection):
    invalid_credentials: str = "Invalid username or password"
    user_exists: str = "Username already exists"
    email_exists: str = "Email already exists"
    invalid_token: str = "Invalid or expired token"


class ErrorMessages(_ConfigSection):
    general: GeneralErrorMessages = Field(default_factory=GeneralErrorMessages)
    pet: PetErrorMessages = Field(default_factory=PetErrorMessages)
    auth: AuthErrorMessages = Field(default_factory=AuthErrorMessages)


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    app_name: str = os.getenv("APP_NAME", "PetLink")
    env: str = os.getenv("APP_ENV", "prod")
    # Solo para demo: en producción el secreto debe venir de un gestor de secretos
    jwt_secret: str = os.getenv("JWT_SECRET", "this is my custom Secret key for authentication")
    jwt_expires_hours: int = int(os.getenv("JWT_EXPIRES_HOURS", "1"))
    frontend_base_url: str = os.getenv("FRONTEND_BASE_URL", "http://localhost:4200")
    rate_limit_enabled: bool = _env_bool("RATE_LIMIT_ENABLED", "true")
    validation_config_file: str | None = os.getenv("VALIDATION_CONFIG_FILE")
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    error_messages: ErrorMessages = Field(default_factory=ErrorMessages)

    @property
    def is_dev(self) -> bool:
        return self.env == "dev"


def load_validation_config(path: str | Path | None) -> tuple[ValidationSettings, ErrorMessages]:
    """
    Lee los límites de validación y los mensajes desde un JSON opcional.

    El fichero puede tener las secciones ``validation`` y ``errorMessages``.
    Si no existe o no se puede interpretar, se registra un warning y se usan
    los valores por defecto: el servicio tiene que arrancar igualmente.
    """
    validation = ValidationSettings()
    messages = ErrorMessages()
    if not path:
        return validation, messages

    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(raw, dict):
            raise ValueError("the root of the config file must be an object")
        validation = ValidationSettings.model_validate(raw.get("validation") or {})
        messages = ErrorMessages.model_validate(
            raw.get("errorMessages") or raw.get("error_messages") or {}
        )
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning(f"No se pudo cargar la configuración de validación ({path}): {exc}. Se usan los valores por defecto")
        return ValidationSettings(), ErrorMessages()
    return validation, messages


def _apply_env_overrides(validation: ValidationSettings) -> ValidationSettings:
    pagination = validation.pagination
    for field, var in (("default_page_size", "DEFAULT_PAGE_SIZE"), ("max_page_size", "MAX_PAGE_SIZE")):
        value = os.getenv(var)
        if value is None:
            continue
        try:
            setattr(pagination, field, int(value))
        except ValueError:
            logger.warning(f"{var}={value!r} no es un entero, se ignora")
    return validation


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    validation, messages = load_validation_config(settings.validation_config_file)
    settings.validation = _apply_env_overrides(validation)
    settings.error_messages = messages
    return settings
