"""
Tests para las validaciones de negocio
"""
import pytest

from petlink.config import PaginationSettings, PetValidationSettings, UserValidationSettings
from petlink.errors import ErrorKind, ServiceError
from petlink.schemas.pet import PetCreate
from petlink.schemas.user import LoginRequest, RegisterRequest
from petlink.validation import (
    is_valid_email,
    validate_id,
    validate_login_fields,
    validate_pagination,
    validate_pet_fields,
    validate_register_fields,
)

PET_RULES = PetValidationSettings()
USER_RULES = UserValidationSettings()


def test_validate_id_rejects_zero_and_negative():
    validate_id(1)
    for bad in (0, -5):
        with pytest.raises(ServiceError) as exc:
            validate_id(bad, "Pet ID")
        assert exc.value.kind is ErrorKind.VALIDATION
        assert exc.value.message == "Pet ID must be greater than 0"


def test_validate_pagination_bounds():
    settings = PaginationSettings(max_page_size=100)
    validate_pagination(1, 100, settings)

    with pytest.raises(ServiceError) as exc:
        validate_pagination(0, 10, settings)
    assert exc.value.message == "Page must be greater than 0"

    for size in (0, 101):
        with pytest.raises(ServiceError) as exc:
            validate_pagination(1, size, settings)
        assert exc.value.message == "PageSize must be between 1 and 100"


def test_validate_pagination_without_settings_uses_default_max():
    with pytest.raises(ServiceError):
        validate_pagination(1, 101)


def test_valid_pet_passes():
    validate_pet_fields(PetCreate(name="Nala", type="Siamese Cat", description="x", age=3), PET_RULES)


@pytest.mark.parametrize("pet, message", [
    (PetCreate(name="N", type="Cat"), "Pet name must be between 2 and 50 characters"),
    (PetCreate(name="Nala", type="C"), "Pet type must be between 2 and 30 characters"),
    (PetCreate(name="Nala", type="Cat9"), "Pet type can only contain letters and spaces"),
    (PetCreate(name="Nala", type="Cat\n"), "Pet type can only contain letters and spaces"),
    (PetCreate(name="Nala", type="Cat", description="d" * 501), "Description cannot exceed 500 characters"),
    (PetCreate(name="Nala", type="Cat", age=51), "Age must be between 0 and 50 years"),
    (PetCreate(name="Nala", type="Cat", age=-1), "Age must be between 0 and 50 years"),
])
def test_invalid_pet_fields(pet, message):
    with pytest.raises(ServiceError) as exc:
        validate_pet_fields(pet, PET_RULES)
    assert exc.value.errors == [message]


def test_pet_fields_report_first_failure_by_default():
    pet = PetCreate(name="N", type="C4", age=99)
    with pytest.raises(ServiceError) as exc:
        validate_pet_fields(pet, PET_RULES)
    assert exc.value.errors == ["Pet name must be between 2 and 50 characters"]


def test_pet_fields_collect_all_failures():
    pet = PetCreate(name="N", type="C4", age=99)
    with pytest.raises(ServiceError) as exc:
        validate_pet_fields(pet, PET_RULES, collect_all=True)
    assert exc.value.errors == [
        "Pet name must be between 2 and 50 characters",
        "Pet type can only contain letters and spaces",
        "Age must be between 0 and 50 years",
    ]
    assert exc.value.message == exc.value.errors[0]


def test_pet_rules_follow_configuration():
    rules = PetValidationSettings(name_max_length=5, max_age=10)
    with pytest.raises(ServiceError) as exc:
        validate_pet_fields(PetCreate(name="Whiskers", type="Cat"), rules)
    assert exc.value.message == "Pet name must be between 2 and 5 characters"


@pytest.mark.parametrize("username, password, message", [
    ("", "password", "Username is required"),
    ("a" * 51, "password", "Username cannot exceed 50 characters"),
    ("admin", "", "Password is required"),
    ("admin", "p" * 101, "Password cannot exceed 100 characters"),
])
def test_login_fields(username, password, message):
    with pytest.raises(ServiceError) as exc:
        validate_login_fields(LoginRequest(username=username, password=password), USER_RULES)
    assert exc.value.message == message


def test_login_fields_skip_min_length_and_charset():
    """En login solo se exige presencia y longitud máxima"""
    for username, password in (("ab", "password"), ("admin", "wrong"), ("bad-name", "12345")):
        validate_login_fields(LoginRequest(username=username, password=password), USER_RULES)


@pytest.mark.parametrize("username, password, message", [
    ("ab", "secret1", "Username must be at least 3 characters"),
    ("good_name", "12345", "Password must be at least 6 characters"),
])
def test_register_fields_min_lengths(username, password, message):
    with pytest.raises(ServiceError) as exc:
        validate_register_fields(
            RegisterRequest(username=username, password=password, email="a@petlink.com"), USER_RULES
        )
    assert exc.value.message == message


def test_register_fields_ok():
    validate_register_fields(
        RegisterRequest(username="new_user1", password="secret1", email="new@petlink.com"), USER_RULES
    )


@pytest.mark.parametrize("username, email, message", [
    ("bad-name", "a@petlink.com", "Username can only contain letters, numbers, and underscores"),
    ("admin\n", "a@petlink.com", "Username can only contain letters, numbers, and underscores"),
    ("good_name", "", "Email is required"),
    ("good_name", "not-an-email", "Invalid email format"),
    ("good_name", "x" * 95 + "@petlink.com", "Email cannot exceed 100 characters"),
])
def test_register_fields_invalid(username, email, message):
    with pytest.raises(ServiceError) as exc:
        validate_register_fields(RegisterRequest(username=username, password="secret1", email=email), USER_RULES)
    assert exc.value.message == message


def test_is_valid_email():
    assert is_valid_email("someone@petlink.com")
    assert not is_valid_email("someone@")
    assert not is_valid_email("someone petlink.com")
