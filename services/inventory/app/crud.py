"""
CRUD (Create, Read, Update, Delete) operations for the Inventory service.

This module is the storage port for inventory rows. Write functions commit
their own transaction; callers handle IntegrityError.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from . import models

def get_inventory_by_sku(db: Session, sku: str) -> Optional[models.Inventory]:
    """
    Retrieve an inventory row by SKU.
    
    Args:
        db: Database session
        sku: SKU to search for
        
    Returns:
        Inventory object or None if not found
    """
    return db.query(models.Inventory).filter(models.Inventory.sku == sku).first()

def get_inventories(db: Session) -> List[models.Inventory]:
    """Retrieve every inventory row ordered by ID."""
    return db.query(models.Inventory).order_by(models.Inventory.id).all()

def create_inventory(db: Session, sku: str, quantity: int) -> models.Inventory:
    """
    Insert a new inventory row.
    
    Args:
        db: Database session
        sku: SKU of the new row
        quantity: Initial stock level
        
    Returns:
        Created Inventory object

    Raises:
        sqlalchemy.exc.IntegrityError: if a row for the SKU already exists
    """
    db_item = models.Inventory(sku=sku, quantity=quantity)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item

def save_inventory(db: Session, db_item: models.Inventory) -> models.Inventory:
    """Persist changes made to an already loaded inventory row."""
    db.commit()
    db.refresh(db_item)
    return db_item

