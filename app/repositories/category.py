from typing import Optional

from app.models.category import Category
from app.repositories.base import Repository


class CategoryRepository(Repository[Category]):
    model = Category

    def find_by_name(self, name: str) -> Optional[Category]:
        return self._query().filter(Category.name == name).first()
