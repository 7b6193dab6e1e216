"""
Configuración de pytest para tests
"""
import pytest
from fastapi.testclient import TestClient

from petlink.config import Settings
from petlink.services.auth_service import AuthService
from petlink.services.pet_service import PetService
from petlink.store import get_store, seed_store


# Deshabilitar rate limiting en la app antes de importarla
@pytest.fixture(scope="session", autouse=True)
def disable_rate_limiting():
    """Deshabilita rate limiting para todos los tests"""
    from petlink.main import app
    app.state.limiter = None


@pytest.fixture
def settings():
    """Settings con los valores por defecto (sin fichero ni variables)"""
    return Settings(env="prod", jwt_secret="test-secret")


@pytest.fixture
def store():
    """Store nuevo con los datos de demo en cada test"""
    return seed_store()


@pytest.fixture
def pet_service(store, settings):
    return PetService(store, settings)


@pytest.fixture
def auth_service(store, settings):
    return AuthService(store, settings)


@pytest.fixture
def client(store):
    """Fixture para cliente de test de FastAPI"""
    # Importar aquí para evitar problemas de importación circular
    from petlink.main import app
    app.dependency_overrides[get_store] = lambda: store
    # Asegurar que rate limiting esté deshabilitado
    app.state.limiter = None
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Cabecera Authorization con un token del usuario admin"""
    response = client.post("/auth/login", json={"username": "admin", "password": "password"})
    token = response.json()["data"]["token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def new_pet_data():
    """Datos de mascota de prueba"""
    return {
        "name": "Nala",
        "type": "Cat",
        "description": "Calm and curious",
        "age": 3,
    }
