import math
from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    # JSON en camelCase (createdAt, pageSize...), atributos en snake_case
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    """Sobre común de todas las respuestas de la API."""
    success: bool = True
    message: str = "Success"
    data: Optional[T] = None
    errors: Optional[List[str]] = None
    timestamp: datetime = Field(default_factory=utcnow)

    @classmethod
    def ok(cls, data=None, message: str = "Operation completed successfully"):
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, errors: Optional[List[str]] = None):
        return cls(success=False, message=message, errors=errors)


class PaginatedResponse(ApiResponse[List[T]], Generic[T]):
    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def create(cls, data: List[T], page: int, page_size: int, total_count: int,
               message: str = "Data retrieved successfully"):
        total_pages = math.ceil(total_count / page_size) if page_size > 0 else 0
        return cls(
            success=True,
            message=message,
            data=data,
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_next_page=page < total_pages,
            has_previous_page=page > 1,
        )
