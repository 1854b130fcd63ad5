from typing import Any, Callable, Dict, List, Optional

from app.client.api import ApiClient, ApiError


class CategoryManager:
    """Create, delete and pick categories; the pick becomes the list filter."""

    def __init__(self, api: ApiClient, on_apply_filter: Optional[Callable[[Optional[int]], None]] = None):
        self.api = api
        self.on_apply_filter = on_apply_filter
        self.categories: List[Dict[str, Any]] = []

    async def fetch_categories(self) -> List[Dict[str, Any]]:
        self.categories = await self.api.get(
            "/categories", fallback_message="Could not load the categories."
        )
        return self.categories

    async def add_category(self, name: str) -> Dict[str, Any]:
        name = (name or "").strip()
        if not name:
            raise ApiError("Category name is required.")
        category = await self.api.post(
            "/categories", json={"name": name}, fallback_message="Could not add the category."
        )
        self.categories.append(category)
        return category

    async def delete_category(self, category_id: int) -> None:
        """Delete a category; the server removes its products too."""
        await self.api.delete(
            f"/categories/{category_id}", fallback_message="Could not delete the category."
        )
        self.categories = [c for c in self.categories if c["id"] != category_id]

    def apply_filter(self, category_id: Optional[int]) -> None:
        if self.on_apply_filter:
            self.on_apply_filter(category_id)
