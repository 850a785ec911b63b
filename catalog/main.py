# catalog/main.py
from fastapi import FastAPI

from .models import CreateProductDto, UpdateProductDto
from .gateway import (
    list_products_logic, get_product_logic, create_product_logic,
    update_product_logic, delete_product_logic
)

app = FastAPI(title="fakestore-catalog (local demo gateway)")

# ---------------------------
# Product endpoints
# ---------------------------
@app.get("/products")
async def list_products():
    return await list_products_logic()

@app.get("/products/{product_id}")
async def get_product(product_id: int):
    return await get_product_logic(product_id)

@app.post("/products")
async def create_product(payload: CreateProductDto):
    return await create_product_logic(payload)

@app.put("/products/{product_id}")
async def update_product(product_id: int, payload: UpdateProductDto):
    return await update_product_logic(product_id, payload)

@app.delete("/products/{product_id}")
async def delete_product(product_id: int):
    return await delete_product_logic(product_id)


def run(host: str = None, port: int = None):
    import uvicorn
    from .config import get_settings

    settings = get_settings()
    uvicorn.run(
        app,
        host=host or settings.gateway_host,
        port=port or settings.gateway_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
