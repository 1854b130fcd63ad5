import logging
from typing import Any, Dict, List, Optional

from app.client.api import ApiClient
from app.client.auth_context import AuthContext

logger = logging.getLogger(__name__)


class ProductsScreen:
    """
    "My products" list. The full product list is fetched once per refresh;
    owner, category and name filters are all applied in memory.
    """

    def __init__(self, api: ApiClient, auth: AuthContext):
        self.api = api
        self.auth = auth
        self.all_products: List[Dict[str, Any]] = []
        self.search_text = ""
        self.active_category_filter: Optional[int] = None

    async def fetch_products(self) -> List[Dict[str, Any]]:
        self.all_products = await self.api.get(
            "/products", fallback_message="Could not load your products."
        )
        return self.all_products

    def set_category_filter(self, category_id: Optional[int]) -> None:
        self.active_category_filter = category_id

    @property
    def filtered_products(self) -> List[Dict[str, Any]]:
        products = self.all_products

        if self.auth.user:
            owner_id = self.auth.user["id"]
            products = [p for p in products if p.get("producerId") == owner_id]

        if self.active_category_filter:
            products = [
                p for p in products
                if (p.get("category") or {}).get("id") == self.active_category_filter
            ]

        search = self.search_text.strip().lower()
        if search:
            products = [p for p in products if search in p["name"].lower()]

        return products

    async def delete_product(self, product_id: int) -> None:
        await self.api.delete(
            f"/products/{product_id}", fallback_message="Could not delete the product."
        )
        self.all_products = [p for p in self.all_products if p["id"] != product_id]
        logger.info(f"Product {product_id} removed from the list")
