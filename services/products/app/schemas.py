"""
Pydantic schemas for request/response validation in the Products service.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import Field

from services.common.schemas import CamelModel

class ProductBase(CamelModel):
    """Base schema with common product attributes."""
    name: str = Field(..., min_length=1)
    sku: str = Field(..., min_length=1)
    description: Optional[str] = Field(default=None, max_length=1000)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    category: Optional[str] = None
    image_url: Optional[str] = None

class ProductCreate(ProductBase):
    """Schema for creating a new product."""
    pass

class Product(ProductBase):
    """Schema for product responses, includes all database fields."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
