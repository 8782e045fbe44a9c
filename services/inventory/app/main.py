"""
    Inventory Service API

    This module implements a FastAPI-based microservice that tracks stock
    levels per SKU, with relational database persistence.

    The service exposes:
    - GET  /api/inventory: list every inventory row
    - GET  /api/inventory/{sku}: whether the SKU is in stock (true/false)
    - GET  /api/inventory/quantity/{sku}: the SKU's stock quantity
    - POST /api/inventory: add stock for a new SKU
    - PATCH /api/inventory/{sku}: replace the quantity of an existing SKU
    - Health endpoint: Provides service health status for monitoring and orchestration
"""
import logging
from typing import List
from fastapi import FastAPI, Depends, HTTPException, status

from services.common.logging_config import configure_logging
from services.common.problems import register_error_handlers
from . import models, schemas
from .database import engine
from .service import InventoryService, get_inventory_service

configure_logging()
logger = logging.getLogger(__name__)

# Create database tables
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="inventory-service")
register_error_handlers(app)

@app.get("/healthz", response_model=dict)
def health():
    """
    Health check endpoint for the inventory service.

    Returns:
        dict: {"status": "healthy"} while the service is operational.
    """
    return {"status": "healthy"}

@app.get("/api/inventory", response_model=List[schemas.Inventory])
def list_inventories(service: InventoryService = Depends(get_inventory_service)):
    """List every inventory row."""
    logger.info("Received request to list inventory")
    return service.find_all()

@app.get("/api/inventory/quantity/{sku}", response_model=schemas.StockQuantity)
def get_stock_quantity(sku: str, service: InventoryService = Depends(get_inventory_service)):
    """
    Get the stock quantity of a SKU.

    Unknown SKUs report a quantity of 0 rather than 404.
    """
    return schemas.StockQuantity(sku=sku, quantity=service.stock_quantity(sku))

@app.get("/api/inventory/{sku}", response_model=bool)
def is_in_stock(sku: str, service: InventoryService = Depends(get_inventory_service)):
    """Return true when the SKU has a quantity greater than zero."""
    return service.is_in_stock(sku)

@app.post("/api/inventory", response_model=schemas.Inventory, status_code=status.HTTP_201_CREATED)
def add_inventory(
    payload: schemas.InventoryCreate,
    service: InventoryService = Depends(get_inventory_service)
):
    """
    Add stock for a SKU.

    Args:
        payload: SKU and initial quantity; both are required

    Returns:
        Created inventory row

    Raises:
        400 if a field is missing or invalid
        409 if the SKU already has a row
    """
    logger.info(f"Received request to add inventory sku={payload.sku}")
    return service.add_inventory(payload.sku, payload.quantity)

@app.patch("/api/inventory/{sku}", response_model=schemas.Inventory)
def update_quantity(
    sku: str,
    payload: schemas.InventoryUpdate,
    service: InventoryService = Depends(get_inventory_service)
):
    """
    Replace the stock quantity of an existing SKU.

    Raises:
        HTTPException: 404 if the SKU has no row
    """
    db_item = service.update_quantity(sku, payload.quantity)
    if db_item is None:
        raise HTTPException(status_code=404, detail="Inventory not found")
    return db_item
