from typing import List
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_producer
from app.database.session import get_db
from app.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from app.services import categories as category_service

# Categories are shared by every producer, but only signed-in callers may touch them
router = APIRouter(dependencies=[Depends(get_current_producer)])

@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(category: CategoryCreate, db: Session = Depends(get_db)):
    """Create a new category."""
    return category_service.create_category(db, category.name)

@router.get("", response_model=List[CategoryRead])
async def get_categories(db: Session = Depends(get_db)):
    """Get all categories."""
    return category_service.list_categories(db)

@router.get("/{category_id}", response_model=CategoryRead)
async def get_category(category_id: int, db: Session = Depends(get_db)):
    return category_service.get_category(db, category_id)

@router.put("/{category_id}", response_model=CategoryRead)
async def update_category(category_id: int, category: CategoryUpdate, db: Session = Depends(get_db)):
    """Rename a category."""
    return category_service.update_category(db, category_id, category.name)

@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(category_id: int, db: Session = Depends(get_db)):
    """Delete a category together with all of its products."""
    category_service.delete_category(db, category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
