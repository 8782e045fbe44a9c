"""
Business rules for the Inventory service.

Stock lookups for an unknown SKU are not errors: the SKU is reported as out
of stock with a quantity of zero.
"""
import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from services.common.problems import ConflictError
from . import crud, models
from .database import get_db

logger = logging.getLogger(__name__)


class InventoryService:
    """Mediates between the inventory endpoints and the storage port."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[models.Inventory]:
        return crud.get_inventories(self.db)

    def is_in_stock(self, sku: str) -> bool:
        item = crud.get_inventory_by_sku(self.db, sku)
        return item is not None and item.quantity > 0

    def stock_quantity(self, sku: str) -> int:
        item = crud.get_inventory_by_sku(self.db, sku)
        return item.quantity if item is not None else 0

    def add_inventory(self, sku: str, quantity: int) -> models.Inventory:
        """
        Insert a new row for ``sku``.

        Adding stock for a SKU that already has a row is not merged into the
        existing quantity; the unique constraint rejects it.

        Raises:
            ConflictError: ``sku_already_exists`` if the SKU already has a row
        """
        try:
            item = crud.create_inventory(self.db, sku, quantity)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("sku_already_exists", f"Inventory for SKU '{sku}' already exists.")
        logger.info(f"Added inventory sku={sku} quantity={quantity}")
        return item

    def update_quantity(self, sku: str, quantity: int) -> Optional[models.Inventory]:
        item = crud.get_inventory_by_sku(self.db, sku)
        if item is None:
            return None
        item.quantity = quantity
        return crud.save_inventory(self.db, item)


def get_inventory_service(db: Session = Depends(get_db)) -> InventoryService:
    """FastAPI dependency building the service around the request's session."""
    return InventoryService(db)
