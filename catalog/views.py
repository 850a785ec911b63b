# catalog/views.py
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from .errors import CatalogError
from .models import CreateProductDto, Product
from .store import CatalogStore

logger = logging.getLogger(__name__)

FORM_FIELDS = ("title", "price", "category", "image", "description")


# ---------------------------
# List view
# ---------------------------
class ProductListView:
    """Product list with a delete confirmation slot."""

    def __init__(self, store: CatalogStore):
        self.store = store
        self.product_to_delete: Optional[Product] = None

    async def load(self):
        # failures stay visible through store.error
        try:
            await self.store.load_all()
        except CatalogError:
            pass

    def confirm_delete(self, product: Product):
        self.product_to_delete = product

    def cancel_delete(self):
        self.product_to_delete = None

    async def delete_product(self) -> bool:
        product = self.product_to_delete
        if product is None:
            return False
        try:
            await self.store.remove(product.id)
            return True
        except CatalogError as e:
            logger.error("Error deleting product %s: %s", product.id, e.message)
            return False
        finally:
            # the prompt closes even when the delete fails
            self.product_to_delete = None


# ---------------------------
# Create / edit form
# ---------------------------
class ProductFormView:
    """
    Create form, or edit form when built with a product id.

    `values` holds the raw field values; `submit()` validates them and
    calls create or update on the store. On failure the form is re-enabled
    so the user can retry.
    """

    def __init__(self, store: CatalogStore, product_id: Optional[int] = None):
        self.store = store
        self.product_id = product_id
        self.is_edit_mode = product_id is not None
        self.is_submitting = False
        self.error_message: Optional[str] = None
        self.success_message: Optional[str] = None
        self.field_errors: Dict[str, str] = {}
        self.values: Dict[str, Any] = {"title": "", "price": 0, "category": "", "image": "", "description": ""}

    async def load(self) -> bool:
        if not self.is_edit_mode:
            return False
        try:
            product = await self.store.fetch_one(self.product_id)
        except CatalogError as e:
            self.error_message = "Failed to load product"
            logger.error("Error loading product %s: %s", self.product_id, e.message)
            return False
        self.values.update({f: getattr(product, f) for f in FORM_FIELDS})
        return True

    def validate(self, values: Dict[str, Any]) -> Optional[CreateProductDto]:
        self.field_errors = {}
        try:
            return CreateProductDto.model_validate(values)
        except ValidationError as e:
            for err in e.errors():
                field = str(err["loc"][0]) if err["loc"] else "form"
                self.field_errors.setdefault(field, err["msg"])
            return None

    async def submit(self, values: Optional[Dict[str, Any]] = None) -> Optional[Product]:
        if self.is_submitting:
            return None
        if values is not None:
            self.values.update(values)
        dto = self.validate(self.values)
        if dto is None:
            return None

        self.is_submitting = True
        self.error_message = None
        self.success_message = None
        try:
            if self.is_edit_mode:
                product = await self.store.update(self.product_id, dto)
            else:
                product = await self.store.create(dto)
        except CatalogError as e:
            self.error_message = "Failed to save product. Please try again."
            self.is_submitting = False
            logger.error("Error saving product: %s", e.message)
            return None

        self.success_message = (
            "Product updated successfully!" if self.is_edit_mode else "Product created successfully!"
        )
        return product

    @property
    def invalid_fields(self) -> List[str]:
        return sorted(self.field_errors)
