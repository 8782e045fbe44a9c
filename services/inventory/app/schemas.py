"""
Pydantic schemas for request/response validation in the Inventory service.

These schemas define the structure of data for API requests and responses.
"""
from datetime import datetime
from typing import Optional
from pydantic import Field

from services.common.schemas import MAX_INT, CamelModel

class InventoryCreate(CamelModel):
    """Schema for adding stock for a new SKU."""
    sku: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(..., ge=0, le=MAX_INT)

class InventoryUpdate(CamelModel):
    """Schema for replacing the stock level of an existing SKU."""
    quantity: int = Field(..., ge=0, le=MAX_INT)

class Inventory(CamelModel):
    """
    Schema for inventory responses, includes all database fields.
    
    Attributes:
        id (int): Row identifier
        sku (str): Stock Keeping Unit
        quantity (int): Units in stock
        created_at (datetime): When the row was created
        updated_at (datetime): When the quantity last changed
    """
    id: int
    sku: str
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

class StockQuantity(CamelModel):
    """Schema for the stock-quantity lookup."""
    sku: str
    quantity: int
