"""
CRUD (Create, Read, Update, Delete) operations for the Products service.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from . import models, schemas

def get_product(db: Session, product_id: int) -> Optional[models.Product]:
    return db.query(models.Product).filter(models.Product.id == product_id).first()

def get_product_by_sku(db: Session, sku: str) -> Optional[models.Product]:
    return db.query(models.Product).filter(models.Product.sku == sku).first()

def get_products(db: Session) -> List[models.Product]:
    return db.query(models.Product).order_by(models.Product.id).all()

def create_product(db: Session, product: schemas.ProductCreate) -> models.Product:
    """
    Insert a new product.

    Raises:
        sqlalchemy.exc.IntegrityError: if the SKU is already in the catalog
    """
    db_product = models.Product(**product.model_dump())
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product

def delete_product(db: Session, product_id: int) -> bool:
    """
    Delete a product.

    Returns:
        True if the product was deleted, False if not found
    """
    db_product = get_product(db, product_id)
    if db_product is None:
        return False
    db.delete(db_product)
    db.commit()
    return True
