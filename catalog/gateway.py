from fastapi import HTTPException

from .models import CreateProductDto, UpdateProductDto, _make_product
from .database import PRODUCTS

# This file contains the logic behind the demo gateway endpoints.
# Like the public Fake Store API it answers writes without storing them.

# Product reads
async def list_products_logic():
    return list(PRODUCTS.values())

async def get_product_logic(product_id: int):
    p = PRODUCTS.get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    return p

# Product writes (acknowledged, never persisted)
async def create_product_logic(payload: CreateProductDto):
    # same answer every time, the way the public API does it
    pid = len(PRODUCTS) + 1
    return _make_product(pid, payload).model_dump()

async def update_product_logic(product_id: int, payload: UpdateProductDto):
    if product_id not in PRODUCTS:
        raise HTTPException(status_code=404, detail="product not found")
    return _make_product(product_id, payload).model_dump()

async def delete_product_logic(product_id: int):
    p = PRODUCTS.get(product_id)
    if not p:
        raise HTTPException(status_code=404, detail="product not found")
    return p
