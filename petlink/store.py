"""
Store en memoria: la "base de datos" del proceso.

Se construye una vez al arrancar y se inyecta en los servicios con
``Depends(get_store)``; en los tests se crea uno nuevo por test.
"""
from datetime import timedelta
import threading
from typing import Iterable, Optional

from .schemas.common import utcnow
from .schemas.pet import Pet
from .schemas.user import User
from .security import hash_password


class InMemoryStore:
    def __init__(self, pets: Iterable[Pet] = (), users: Iterable[User] = ()):
        self.pets: dict[int, Pet] = {}
        self.users: dict[str, User] = {}  # clave: username en minúsculas
        # Un lock por colección; RLock para poder anidar operaciones del servicio
        self.pets_lock = threading.RLock()
        self.users_lock = threading.RLock()
        for pet in pets:
            self.pets[pet.id] = pet
        for user in users:
            self.users[user.username.lower()] = user
        self._next_pet_id = max(self.pets, default=0) + 1

    def next_pet_id(self) -> int:
        """Siguiente id de mascota; llamar con ``pets_lock`` adquirido."""
        pet_id = self._next_pet_id
        self._next_pet_id += 1
        return pet_id


def seed_store() -> InMemoryStore:
    """Store con los datos de demo (4 mascotas y 2 usuarios)."""
    now = utcnow()
    seed_pets = [("Fluffy", "Cat", False), ("Rover", "Dog", True), ("Buddy", "Dog", False), ("Whiskers", "Cat", False)]
    pets = [
        Pet(id=i, name=name, type=type_, adopted=adopted, created_at=now - timedelta(days=len(seed_pets) - i + 1))
        for i, (name, type_, adopted) in enumerate(seed_pets, start=1)
    ]
    users = [
        User(username="admin", password_hash=hash_password("password"),
             email="admin@petlink.com", created_at=now - timedelta(days=30)),
        User(username="user", password_hash=hash_password("userpass"),
             email="user@petlink.com", created_at=now - timedelta(days=15)),
    ]
    return InMemoryStore(pets, users)


_store: Optional[InMemoryStore] = None


def get_store() -> InMemoryStore:
    global _store
    if _store is None:
        _store = seed_store()
    return _store
