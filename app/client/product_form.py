import asyncio
import logging
from typing import Any, Dict, List, Optional

from app.client.api import ApiClient, ApiError

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/150"


class ProductForm:
    """
    Form shared by "add product" and "edit product". Passing a product id
    puts it in edit mode.
    """

    def __init__(self, api: ApiClient, product_id: Optional[int] = None):
        self.api = api
        self.product_id = product_id
        self.categories: List[Dict[str, Any]] = []

        self.name = ""
        self.description = ""
        self.price = ""
        self.stock_quantity = ""
        self.measurement_unit = ""
        self.unit_details = ""
        self.category_id: Optional[int] = None
        self.image_url: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.product_id is not None

    async def load(self) -> None:
        """Fetch categories and, when editing, the product at the same time."""
        fallback = "Could not load the required data."
        if not self.is_editing:
            self.categories = await self.api.get("/categories", fallback_message=fallback)
            return

        self.categories, product = await asyncio.gather(
            self.api.get("/categories", fallback_message=fallback),
            self.api.get(f"/products/{self.product_id}", fallback_message=fallback),
        )
        self.name = product["name"]
        self.description = product.get("description") or ""
        self.price = str(product["price"])
        self.stock_quantity = str(product["stock_quantity"])
        self.measurement_unit = product["measurement_unit"]
        self.unit_details = product.get("unit_details") or ""
        self.category_id = product["categoryId"]
        self.image_url = product.get("image_url")

    def to_payload(self) -> Dict[str, Any]:
        if not (self.name and self.price and self.stock_quantity and self.measurement_unit and self.category_id):
            raise ApiError("Fill in all required fields, including the category.")
        try:
            price = float(self.price)
            stock_quantity = float(self.stock_quantity)
        except ValueError:
            raise ApiError("Price and stock quantity must be numbers.")

        return {
            "name": self.name,
            "description": self.description,
            "price": price,
            "stock_quantity": stock_quantity,
            "measurement_unit": self.measurement_unit,
            "unit_details": self.unit_details or None,
            "categoryId": self.category_id,
            "image_url": self.image_url or PLACEHOLDER_IMAGE_URL,
        }

    async def save(self) -> Dict[str, Any]:
        payload = self.to_payload()
        fallback = "An error occurred while saving the product."
        if self.is_editing:
            product = await self.api.put(f"/products/{self.product_id}", json=payload, fallback_message=fallback)
            logger.info(f"Product {self.product_id} updated")
        else:
            product = await self.api.post("/products", json=payload, fallback_message=fallback)
            logger.info(f"Product {product['id']} created")
        return product
