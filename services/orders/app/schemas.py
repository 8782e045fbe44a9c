"""
Pydantic schemas for request/response validation in the Orders service.

These schemas define the structure of data for API requests and responses.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import Field

from services.common.schemas import MAX_INT, CamelModel


class OrderCreate(CamelModel):
    """Schema for placing an order. A UUID order number is generated when omitted."""
    order_number: Optional[str] = Field(default=None, min_length=1, max_length=64)
    user_id: int = Field(..., ge=1, le=MAX_INT)
    sku: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0, le=MAX_INT, description="Quantity ordered")
    price_at_order: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2, description="Unit price at the time of the order")


class Order(CamelModel):
    """
    Schema for order responses, includes all database fields.
    
    Attributes:
        id (int): Order's row identifier
        order_number (str): Public order number
        user_id (int): ID of the user who placed the order
        sku (str): Ordered SKU
        quantity (int): Units ordered
        price_at_order (Decimal): Unit price snapshot
        created_at (datetime): When the order was created
    """
    id: int
    order_number: str
    user_id: int
    sku: str
    quantity: int
    price_at_order: Decimal
    created_at: Optional[datetime] = None
