from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_producer
from app.database.session import get_db
from app.schemas.auth import TokenPayload
from app.schemas.product import ProductCreate, ProductUpdate, ProductRead
from app.services import products as product_service

router = APIRouter()

@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
async def create_product(
    product: ProductCreate,
    db: Session = Depends(get_db),
    current_producer: TokenPayload = Depends(get_current_producer)
):
    """Create a new product owned by the authenticated producer."""
    return product_service.create_product(db, product, current_producer)

@router.get("", response_model=List[ProductRead])
async def get_products(db: Session = Depends(get_db)):
    """Get all products from every producer, with category and producer embedded."""
    return product_service.list_products(db)

@router.get("/{product_id}", response_model=ProductRead)
async def get_product(product_id: int, db: Session = Depends(get_db)):
    """Get a specific product by ID."""
    return product_service.get_product(db, product_id)

@router.put("/{product_id}", response_model=ProductRead)
async def update_product(
    product_id: int,
    product_update: ProductUpdate,
    db: Session = Depends(get_db),
    current_producer: TokenPayload = Depends(get_current_producer)
):
    """Update a product (owner only)."""
    return product_service.update_product(db, product_id, product_update, current_producer)

@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_producer: TokenPayload = Depends(get_current_producer)
):
    """Delete a product (owner only)."""
    product_service.delete_product(db, product_id, current_producer)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
