"""In-memory catalog state kept in step with the remote products API.

The remote API acknowledges writes without storing them, so the store
applies each confirmed create/update/delete to its own copy of the
catalog, using the payload the server sent back. Nothing is changed
locally before the server has answered.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel

from sdk.fakestore import AsyncFakeStoreClient

from .errors import CatalogError, StoreBusyError, describe_error
from .models import (
    CreateProductDto, LoadingState, Product, UpdateProductDto, _product_payload
)

logger = logging.getLogger(__name__)

Subscriber = Callable[["CatalogStore"], None]


def _to_dto(cls, dto):
    if isinstance(dto, BaseModel):
        dto = dto.model_dump()
    return cls.model_validate(dto)


def _unique_by_id(products) -> List[Product]:
    seen = set()
    out = []
    for p in products:
        if p.id in seen:
            logger.warning("Dropping repeated product id %s from list response", p.id)
            continue
        seen.add(p.id)
        out.append(p)
    return out


def _check_id(product_id: int) -> int:
    if isinstance(product_id, bool) or not isinstance(product_id, int) or product_id < 1:
        raise ValueError(f"product id must be a positive integer, got {product_id!r}")
    return product_id


class CatalogStore:
    """
    Owns the product list, the loading state of the last operation and
    its error message.

    Views read `products`, `loading_state` and `error`, and register with
    `subscribe()` to be called back after every change. Only one
    state-changing operation may be pending at a time; a second one raises
    StoreBusyError without touching any state.
    """

    def __init__(self, client: AsyncFakeStoreClient):
        self._client = client
        self._products: List[Product] = []
        self._loading_state = LoadingState.IDLE
        self._error: Optional[str] = None
        self._subscribers: List[Subscriber] = []
        self._lock = asyncio.Lock()

    # ---------------------------
    # Read surface
    # ---------------------------
    @property
    def products(self) -> Tuple[Product, ...]:
        return tuple(self._products)

    @property
    def loading_state(self) -> LoadingState:
        return self._loading_state

    @property
    def error(self) -> Optional[str]:
        return self._error

    @property
    def is_loading(self) -> bool:
        return self._loading_state is LoadingState.LOADING

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # ---------------------------
    # State helpers
    # ---------------------------
    def _notify(self):
        for callback in list(self._subscribers):
            try:
                callback(self)
            except Exception:
                logger.exception("CatalogStore subscriber %r failed", callback)

    def _set_state(self, state: LoadingState, error: Optional[str] = None):
        self._loading_state = state
        self._error = error
        self._notify()

    def _set_products(self, products: List[Product], state: LoadingState):
        self._products = products
        self._loading_state = state
        self._notify()

    def _handle_error(self, operation: str, exc: Exception) -> CatalogError:
        err = describe_error(exc)
        self._set_state(LoadingState.ERROR, err.message)
        logger.error("CatalogStore %s failed: %s", operation, err.message.replace("\n", " | "))
        return err

    @asynccontextmanager
    async def _operation(self, name: str):
        if self._lock.locked():
            raise StoreBusyError(f"Error: cannot {name} while another operation is pending")
        async with self._lock:
            logger.debug("CatalogStore %s started", name)
            self._set_state(LoadingState.LOADING)
            try:
                yield
            except Exception as exc:
                raise self._handle_error(name, exc) from exc
            finally:
                # cancelled or otherwise unsettled operations end in error
                if self._loading_state is LoadingState.LOADING:
                    self._set_state(LoadingState.ERROR, f"Error: {name} was cancelled")

    # ---------------------------
    # Operations
    # ---------------------------
    async def load_all(self) -> Tuple[Product, ...]:
        async with self._operation("load_all"):
            data = await self._client.list_products()
            products = _unique_by_id(Product.model_validate(p) for p in data)
            self._set_products(products, LoadingState.SUCCESS)
            logger.info("Loaded %d products", len(products))
        return self.products

    async def fetch_one(self, product_id: int) -> Product:
        _check_id(product_id)
        try:
            data = await self._client.get_product(product_id)
            return Product.model_validate(data)
        except Exception as exc:
            err = describe_error(exc)
            logger.error("CatalogStore fetch_one(%s) failed: %s", product_id, err.message.replace("\n", " | "))
            raise err from exc

    async def create(self, dto: Union[CreateProductDto, Dict[str, Any]]) -> Product:
        dto = _to_dto(CreateProductDto, dto)
        async with self._operation("create"):
            data = await self._client.create_product(_product_payload(dto))
            product = Product.model_validate(data)
            ids = {p.id for p in self._products}
            if product.id in ids:
                local_id = max(ids) + 1
                logger.warning("Server returned existing id %s for new product, using %s", product.id, local_id)
                product = product.model_copy(update={"id": local_id})
            self._set_products([product] + self._products, LoadingState.SUCCESS)
            logger.info("Created product %s", product.id)
        return product

    async def update(self, product_id: int, dto: Union[UpdateProductDto, Dict[str, Any]]) -> Product:
        _check_id(product_id)
        dto = _to_dto(UpdateProductDto, dto)
        async with self._operation("update"):
            data = await self._client.update_product(product_id, _product_payload(dto))
            product = Product.model_validate(data)
            if product.id != product_id:
                product = product.model_copy(update={"id": product_id})
            if any(p.id == product_id for p in self._products):
                logger.info("Updated product %s", product_id)
            else:
                logger.info("Product %s not in catalog, update not applied", product_id)
            updated = [product if p.id == product_id else p for p in self._products]
            self._set_products(updated, LoadingState.SUCCESS)
        return product

    async def remove(self, product_id: int) -> None:
        _check_id(product_id)
        async with self._operation("remove"):
            await self._client.delete_product(product_id)
            remaining = [p for p in self._products if p.id != product_id]
            self._set_products(remaining, LoadingState.SUCCESS)
            logger.info("Removed product %s", product_id)
