# catalog/models.py
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, Field

IMAGE_URL_PATTERN = r"^https?://.+"


class LoadingState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class Product(BaseModel):
    id: int
    title: str
    price: float
    category: str
    image: str
    description: str


class CreateProductDto(BaseModel):
    title: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    category: str = Field(..., min_length=1)
    image: str = Field(..., pattern=IMAGE_URL_PATTERN)
    description: str = Field(..., min_length=1)


class UpdateProductDto(CreateProductDto):
    pass


def _make_product(product_id: int, dto: CreateProductDto) -> Product:
    return Product(id=product_id, **dto.model_dump())


def _product_payload(dto: CreateProductDto) -> Dict[str, Any]:
    # request body as sent over the wire
    return dto.model_dump(mode="json")
