"""
SQLAlchemy ORM models for the Orders service.

Defines the database schema for order-related tables.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Numeric
from .database import Base

class Order(Base):
    """
    Order model representing a placed order. Rows are never updated.
    
    Attributes:
        id (int): Primary key, auto-incremented order ID
        order_number (str): Public order number, unique
        user_id (int): ID of the user who placed the order
        sku (str): SKU of the ordered product
        quantity (int): Units ordered
        price_at_order (Decimal): Unit price captured when the order was placed
        created_at (datetime): Timestamp when the order was created
    """
    __tablename__ = "orders"
    
    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String, unique=True, index=True, nullable=False)
    user_id = Column(Integer, nullable=False)
    sku = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price_at_order = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
