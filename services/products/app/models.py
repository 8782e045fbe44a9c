"""
SQLAlchemy ORM models for the Products service.
"""
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Numeric
from .database import Base

class Product(Base):
    """
    Catalog entry for a sellable product.
    
    Attributes:
        id (int): Primary key
        name (str): Display name
        sku (str): Stock Keeping Unit, unique across the catalog
        description (str): Optional long description
        price (Decimal): Current unit price
        category (str): Optional category label
        image_url (str): Optional image location
        created_at (datetime): When the product was created
        updated_at (datetime): When the product last changed
    """
    __tablename__ = "products"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    sku = Column(String, unique=True, index=True, nullable=False)
    description = Column(String(1000), nullable=True)
    price = Column(Numeric(12, 2), nullable=False)
    category = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
