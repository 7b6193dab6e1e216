from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from ..config import Settings, get_settings
from ..errors import ServiceError
from ..schemas.common import ApiResponse, PaginatedResponse
from ..schemas.pet import Pet, PetCreate, PetUpdate
from ..services.pet_service import PetService, get_pet_service

router = APIRouter()


def not_found(pets: PetService) -> ServiceError:
    return ServiceError.not_found(pets.messages.not_found)


@router.get("", response_model=PaginatedResponse[Pet])
async def list_pets(
    page: int = Query(1),
    page_size: Optional[int] = Query(None, alias="pageSize"),
    name: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    adopted: Optional[bool] = Query(None),
    pets: PetService = Depends(get_pet_service),
    settings: Settings = Depends(get_settings),
):
    size = page_size if page_size is not None else settings.validation.pagination.default_page_size
    if name or type or adopted is not None:
        items, total = pets.search(name=name, type=type, adopted=adopted, page=page, page_size=size)
    else:
        items, total = pets.list(page, size)
    return PaginatedResponse[Pet].create(items, page, size, total, "Pets retrieved successfully")


@router.get("/all", response_model=ApiResponse[list[Pet]])
async def list_all_pets(pets: PetService = Depends(get_pet_service)):
    return ApiResponse[list[Pet]].ok(pets.list_all(), "Pets retrieved successfully")


@router.get("/{pet_id}", response_model=ApiResponse[Pet])
async def get_pet(pet_id: int, pets: PetService = Depends(get_pet_service)):
    pet = pets.get_by_id(pet_id)
    if pet is None:
        raise not_found(pets)
    return ApiResponse[Pet].ok(pet, "Pet retrieved successfully")


@router.post("", response_model=ApiResponse[Pet], status_code=status.HTTP_201_CREATED)
async def create_pet(payload: PetCreate, pets: PetService = Depends(get_pet_service)):
    pet = pets.create(payload)
    return ApiResponse[Pet].ok(pet, "Pet created successfully")


@router.put("/{pet_id}", response_model=ApiResponse[Pet])
async def update_pet(pet_id: int, payload: PetUpdate, pets: PetService = Depends(get_pet_service)):
    pet = pets.update(pet_id, payload)
    if pet is None:
        raise not_found(pets)
    return ApiResponse[Pet].ok(pet, "Pet updated successfully")


@router.delete("/{pet_id}", response_model=ApiResponse[None])
async def delete_pet(pet_id: int, pets: PetService = Depends(get_pet_service)):
    if not pets.delete(pet_id):
        raise not_found(pets)
    return ApiResponse[None].ok(message="Pet deleted successfully")


@router.post("/{pet_id}/adopt", response_model=ApiResponse[Pet])
async def adopt_pet(pet_id: int, pets: PetService = Depends(get_pet_service)):
    if not pets.adopt(pet_id):
        raise not_found(pets)
    pet = pets.get_by_id(pet_id)
    return ApiResponse[Pet].ok(pet, "Pet adopted successfully")
