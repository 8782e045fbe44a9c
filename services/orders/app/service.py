"""
Business rules for the Orders service.
"""
import logging
import uuid
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from services.common.problems import ConflictError
from . import crud, models, schemas
from .database import get_db

logger = logging.getLogger(__name__)


class OrderService:
    """Mediates between the order endpoints and the storage port."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[models.Order]:
        logger.info("Fetching all orders from the database.")
        return crud.get_orders(self.db)

    def find_by_id(self, order_id: int) -> Optional[models.Order]:
        logger.info(f"Fetching order with ID: {order_id} from the database.")
        return crud.get_order(self.db, order_id)

    def place_order(self, order: schemas.OrderCreate) -> models.Order:
        """
        Record an order with the caller's price snapshot.

        Raises:
            ConflictError: ``order_number_already_exists`` for a reused order number
        """
        order_number = order.order_number or str(uuid.uuid4())
        conflict = ConflictError(
            "order_number_already_exists", f"Order number '{order_number}' is already in use."
        )
        if crud.get_order_by_number(self.db, order_number) is not None:
            raise conflict
        try:
            db_order = crud.create_order(self.db, order_number, order)
        except IntegrityError:
            self.db.rollback()
            raise conflict
        logger.info(f"Order placed successfully! Order Number: {db_order.order_number}")
        return db_order


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    """FastAPI dependency building the service around the request's session."""
    return OrderService(db)
