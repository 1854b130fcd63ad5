from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field

from app.schemas.category import CategoryRead
from app.schemas.producer import ProducerSummary

CATEGORY_ID_ALIASES = AliasChoices("categoryId", "category_id")

# Base schema for Product shared properties
class ProductBase(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    stock_quantity: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    measurement_unit: str = Field(min_length=1)
    unit_details: Optional[str] = None
    image_url: str = Field(min_length=1)

# Schema for creating a new Product; producerId comes from the token
class ProductCreate(ProductBase):
    category_id: int = Field(validation_alias=CATEGORY_ID_ALIASES)

# Schema for updating an existing Product (partial patch)
class ProductUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0, max_digits=10, decimal_places=2)
    stock_quantity: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    measurement_unit: Optional[str] = None
    unit_details: Optional[str] = None
    image_url: Optional[str] = None
    category_id: Optional[int] = Field(None, validation_alias=CATEGORY_ID_ALIASES)

# Schema for Product returned to client
class ProductRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    stock_quantity: float
    measurement_unit: str
    unit_details: Optional[str] = None
    image_url: str
    category_id: int = Field(serialization_alias="categoryId")
    producer_id: int = Field(serialization_alias="producerId")
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")
    category: Optional[CategoryRead] = None
    producer: Optional[ProducerSummary] = None

    class Config:
        from_attributes = True
