"""
Business rules for the Products service.
"""
import logging
from typing import List, Optional

from fastapi import Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from services.common.problems import ConflictError
from . import crud, models, schemas
from .database import get_db

logger = logging.getLogger(__name__)


class ProductService:
    """Mediates between the product endpoints and the storage port."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[models.Product]:
        return crud.get_products(self.db)

    def find_by_sku(self, sku: str) -> Optional[models.Product]:
        return crud.get_product_by_sku(self.db, sku)

    def create(self, product: schemas.ProductCreate) -> models.Product:
        """
        Add a product to the catalog.

        Raises:
            ConflictError: ``sku_already_exists`` if the SKU is taken
        """
        try:
            db_product = crud.create_product(self.db, product)
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("sku_already_exists", f"A product with SKU '{product.sku}' already exists.")
        logger.info(f"Created product id={db_product.id} sku={db_product.sku}")
        return db_product

    def delete(self, product_id: int) -> bool:
        return crud.delete_product(self.db, product_id)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """FastAPI dependency building the service around the request's session."""
    return ProductService(db)
