from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel, utcnow


class PetCreate(CamelModel):
    # Solo forma: los límites configurables se comprueban en el servicio
    name: str
    type: str
    description: Optional[str] = None
    age: Optional[int] = None


class PetUpdate(PetCreate):
    pass


class Pet(CamelModel):
    id: int
    name: str
    type: str
    description: Optional[str] = None
    age: Optional[int] = None
    adopted: bool = False
    created_at: datetime = Field(default_factory=utcnow)
