"""Lógica de negocio de mascotas sobre el store en memoria."""
from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from fastapi import Depends

from ..config import Settings, get_settings
from ..errors import ServiceError
from ..schemas.common import utcnow
from ..schemas.pet import Pet, PetCreate, PetUpdate
from ..store import InMemoryStore, get_store
from ..validation import validate_id, validate_pagination, validate_pet_fields

logger = logging.getLogger(__name__)


class PetService:
    """
    Único componente que modifica la colección de mascotas.

    Todas las operaciones se ejecutan con ``store.pets_lock`` adquirido, así
    que comprobar y modificar (nombre duplicado + alta, existencia + adopción)
    es atómico frente a otras peticiones. Se devuelven copias, nunca las
    instancias del store.
    """

    def __init__(self, store: InMemoryStore, settings: Settings):
        self.store = store
        self.rules = settings.validation.pet
        self.pagination = settings.validation.pagination
        self.messages = settings.error_messages.pet

    # ---- Helpers ----
    def _name_taken(self, name: str, exclude_id: Optional[int] = None) -> bool:
        wanted = name.casefold()
        return any(
            p.name.casefold() == wanted and p.id != exclude_id
            for p in self.store.pets.values()
        )

    def _paginate(self, pets: List[Pet], page: int, page_size: int) -> Tuple[List[Pet], int]:
        ordered = sorted(pets, key=lambda p: (p.created_at, p.id))
        start = (page - 1) * page_size
        return [p.model_copy() for p in ordered[start:start + page_size]], len(ordered)

    # ---- Lectura ----
    def list_all(self) -> List[Pet]:
        with self.store.pets_lock:
            return [p.model_copy() for p in self.store.pets.values()]

    def list(self, page: int, page_size: int) -> Tuple[List[Pet], int]:
        validate_pagination(page, page_size, self.pagination)
        with self.store.pets_lock:
            return self._paginate(list(self.store.pets.values()), page, page_size)

    def search(
        self,
        name: Optional[str] = None,
        type: Optional[str] = None,
        adopted: Optional[bool] = None,
        page: int = 1,
        page_size: int = 10,
    ) -> Tuple[List[Pet], int]:
        validate_pagination(page, page_size, self.pagination)
        name_q = name.casefold() if name else None
        type_q = type.casefold() if type else None
        with self.store.pets_lock:
            matches = [
                p for p in self.store.pets.values()
                if (name_q is None or name_q in p.name.casefold())
                and (type_q is None or p.type.casefold() == type_q)
                and (adopted is None or p.adopted == adopted)
            ]
            return self._paginate(matches, page, page_size)

    def get_by_id(self, pet_id: int) -> Optional[Pet]:
        validate_id(pet_id, "Pet ID")
        with self.store.pets_lock:
            pet = self.store.pets.get(pet_id)
            return pet.model_copy() if pet else None

    # ---- Escritura ----
    def create(self, payload: PetCreate) -> Pet:
        validate_pet_fields(payload, self.rules)
        with self.store.pets_lock:
            if self._name_taken(payload.name):
                raise ServiceError.conflict(self.messages.duplicate_name)
            pet = Pet(
                id=self.store.next_pet_id(),
                name=payload.name,
                type=payload.type,
                description=payload.description,
                age=payload.age,
                adopted=False,
                created_at=utcnow(),
            )
            self.store.pets[pet.id] = pet
            logger.info(f"Mascota creada: id={pet.id} name={pet.name!r}")
            return pet.model_copy()

    def update(self, pet_id: int, payload: PetUpdate) -> Optional[Pet]:
        validate_id(pet_id, "Pet ID")
        with self.store.pets_lock:
            existing = self.store.pets.get(pet_id)
            if existing is None:
                return None
            validate_pet_fields(payload, self.rules)
            if self._name_taken(payload.name, exclude_id=pet_id):
                raise ServiceError.conflict(self.messages.duplicate_name)
            # adopted y created_at no se tocan por esta vía
            updated = existing.model_copy(update={
                "name": payload.name,
                "type": payload.type,
                "description": payload.description,
                "age": payload.age,
            })
            self.store.pets[pet_id] = updated
            logger.info(f"Mascota actualizada: id={pet_id}")
            return updated.model_copy()

    def delete(self, pet_id: int) -> bool:
        validate_id(pet_id, "Pet ID")
        with self.store.pets_lock:
            pet = self.store.pets.get(pet_id)
            if pet is None:
                return False
            if pet.adopted:
                raise ServiceError.business_rule(self.messages.cannot_delete_adopted)
            del self.store.pets[pet_id]
            logger.info(f"Mascota eliminada: id={pet_id}")
            return True

    def adopt(self, pet_id: int) -> bool:
        validate_id(pet_id, "Pet ID")
        with self.store.pets_lock:
            pet = self.store.pets.get(pet_id)
            if pet is None:
                return False
            if pet.adopted:
                raise ServiceError.business_rule(self.messages.already_adopted)
            self.store.pets[pet_id] = pet.model_copy(update={"adopted": True})
            logger.info(f"Mascota adoptada: id={pet_id}")
            return True


def get_pet_service(
    store: InMemoryStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> PetService:
    return PetService(store, settings)
