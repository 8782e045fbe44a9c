"""
SQLAlchemy ORM models for the Inventory service.

Defines the database schema for inventory-related tables.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from .database import Base

class Inventory(Base):
    """
    Stock level for a single SKU.
    
    Attributes:
        id (int): Primary key, auto-incremented row ID
        sku (str): Stock Keeping Unit, one row per SKU
        quantity (int): Units currently in stock
        created_at (datetime): Timestamp when the row was created
        updated_at (datetime): Timestamp of the last quantity change
    """
    __tablename__ = "inventory"
    
    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String, unique=True, index=True, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
