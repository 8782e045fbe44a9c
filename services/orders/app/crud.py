"""
CRUD operations for the Orders service.

Orders are only ever inserted and read.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from . import models, schemas

def get_order(db: Session, order_id: int) -> Optional[models.Order]:
    """
    Retrieve a single order by ID.
    
    Args:
        db: Database session
        order_id: ID of the order to retrieve
        
    Returns:
        Order object or None if not found
    """
    return db.query(models.Order).filter(models.Order.id == order_id).first()

def get_order_by_number(db: Session, order_number: str) -> Optional[models.Order]:
    return db.query(models.Order).filter(models.Order.order_number == order_number).first()

def get_orders(db: Session) -> List[models.Order]:
    return db.query(models.Order).order_by(models.Order.id).all()

def create_order(db: Session, order_number: str, order: schemas.OrderCreate) -> models.Order:
    """
    Insert a new order.
    
    Raises:
        sqlalchemy.exc.IntegrityError: if the order number is already taken
    """
    db_order = models.Order(
        order_number=order_number,
        user_id=order.user_id,
        sku=order.sku,
        quantity=order.quantity,
        price_at_order=order.price_at_order,
    )
    db.add(db_order)
    db.commit()
    db.refresh(db_order)
    return db_order
