import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, ValidationError
from app.models.category import Category
from app.repositories.base import ConstraintViolationError
from app.repositories.category import CategoryRepository

logger = logging.getLogger(__name__)

NAME_REQUIRED_MESSAGE = "Category name is required."
DUPLICATE_MESSAGE = "A category with this name already exists."


def _clean_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError(NAME_REQUIRED_MESSAGE)
    return name


def create_category(db: Session, name: str) -> Category:
    repository = CategoryRepository(db)
    name = _clean_name(name)
    if repository.find_by_name(name):
        raise ValidationError(DUPLICATE_MESSAGE)
    try:
        category = repository.insert({"name": name})
    except ConstraintViolationError:
        raise ValidationError(DUPLICATE_MESSAGE)
    logger.info(f"Category {category.id} '{category.name}' created")
    return category


def list_categories(db: Session) -> List[Category]:
    return CategoryRepository(db).find_all()


def get_category(db: Session, category_id: int) -> Category:
    category = CategoryRepository(db).find_by_id(category_id)
    if not category:
        raise NotFoundError("Category not found.")
    return category


def update_category(db: Session, category_id: int, name: str) -> Category:
    repository = CategoryRepository(db)
    category = get_category(db, category_id)
    name = _clean_name(name)

    existing = repository.find_by_name(name)
    if existing and existing.id != category.id:
        raise ValidationError(DUPLICATE_MESSAGE)

    try:
        category = repository.update(category, {"name": name})
    except ConstraintViolationError:
        raise ValidationError(DUPLICATE_MESSAGE)
    logger.info(f"Category {category.id} renamed to '{category.name}'")
    return category


def delete_category(db: Session, category_id: int) -> None:
    """Delete a category; its products go with it."""
    category = get_category(db, category_id)
    product_count = len(category.products)
    CategoryRepository(db).delete(category)
    logger.info(f"Category {category_id} deleted along with {product_count} products")
