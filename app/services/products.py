import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from app.models.product import Product
from app.repositories.base import ConstraintViolationError
from app.repositories.category import CategoryRepository
from app.repositories.product import ProductRepository
from app.schemas.auth import TokenPayload
from app.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Product not found."
STALE_REFERENCE_MESSAGE = "The producer or category for this product no longer exists."
# columns that cannot be cleared by a patch
REQUIRED_FIELDS = ("name", "price", "stock_quantity", "measurement_unit", "image_url", "category_id")


def _ensure_category_exists(db: Session, category_id: int) -> None:
    if not CategoryRepository(db).find_by_id(category_id):
        raise ValidationError("Category not found.")


def create_product(db: Session, data: ProductCreate, identity: TokenPayload) -> Product:
    """Create a product owned by the authenticated producer."""
    _ensure_category_exists(db, data.category_id)

    values = data.model_dump()
    values["producer_id"] = identity.id
    try:
        product = ProductRepository(db).insert(values)
    except ConstraintViolationError:
        logger.warning(f"Product rejected for producer {identity.id}: producer or category is gone")
        raise ValidationError(STALE_REFERENCE_MESSAGE)

    logger.info(f"Product {product.id} created by producer {identity.id}")
    return product


def list_products(db: Session) -> List[Product]:
    return ProductRepository(db).find_all()


def get_product(db: Session, product_id: int) -> Product:
    product = ProductRepository(db).find_by_id(product_id)
    if not product:
        raise NotFoundError(NOT_FOUND_MESSAGE)
    return product


def _get_owned_product(db: Session, product_id: int, identity: TokenPayload) -> Product:
    product = get_product(db, product_id)
    if product.producer_id != identity.id:
        logger.warning(f"Producer {identity.id} denied access to product {product_id}")
        raise PermissionDeniedError("You do not have permission to change this product.")
    return product


def update_product(db: Session, product_id: int, data: ProductUpdate, identity: TokenPayload) -> Product:
    """Merge a partial patch onto a product owned by the caller."""
    product = _get_owned_product(db, product_id, identity)

    changes = data.model_dump(exclude_unset=True)
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] in (None, ""):
            raise ValidationError(f"{field} cannot be empty.")
    if "category_id" in changes:
        _ensure_category_exists(db, changes["category_id"])

    repository = ProductRepository(db)
    try:
        repository.update(product, changes)
    except ConstraintViolationError:
        raise ValidationError(STALE_REFERENCE_MESSAGE)
    logger.info(f"Product {product_id} updated fields {sorted(changes)}")

    # re-fetch so the embedded category reflects the new categoryId
    db.expire(product)
    return repository.find_by_id(product_id)


def delete_product(db: Session, product_id: int, identity: TokenPayload) -> None:
    product = _get_owned_product(db, product_id, identity)
    ProductRepository(db).delete(product)
    logger.info(f"Product {product_id} deleted by producer {identity.id}")
