"""
Orders Service API

This module implements a FastAPI-based microservice for recording orders,
with relational database persistence. Orders are immutable once placed.

Every order endpoint requires a bearer ID token.

Endpoints:
    GET /api/orders: List all orders
    GET /api/orders/{order_id}: Get a single order by ID
    POST /api/orders: Place a new order
    GET /healthz: Health check endpoint for orchestration systems

Attributes:
    app (FastAPI): The FastAPI application instance configured with the title "order-service"
"""
import logging
from typing import List
from fastapi import FastAPI, Depends, HTTPException, status

from services.common.logging_config import configure_logging
from services.common.problems import register_error_handlers
from services.common.schemas import RowId
from . import auth, models, schemas
from .database import engine
from .service import OrderService, get_order_service

configure_logging()
logger = logging.getLogger(__name__)

# Create database tables
models.Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="order-service",
    version="1.0",
    description="This API exposes endpoints to place and read orders.",
)
register_error_handlers(app)


@app.get("/healthz", response_model=dict)
def health():
    """
    Health check endpoint for the orders service.

    Returns:
        dict: {"status": "healthy"} while the service is operational.
    """
    return {"status": "healthy"}

@app.post("/api/orders", response_model=schemas.Order, status_code=status.HTTP_201_CREATED)
def place_order(
    order: schemas.OrderCreate,
    service: OrderService = Depends(get_order_service),
    current_user: auth.CurrentUser = Depends(auth.get_current_user)
):
    """
    Place a new order.

    Args:
        order: Order data; orderNumber is generated when omitted
        service: Order service (injected)
        current_user: Current authenticated caller (injected)

    Returns:
        Created order object

    Raises:
        400 if a field is missing or invalid
        409 if the order number is already in use
    """
    logger.info(f"Placing order for SKU: {order.sku} with quantity: {order.quantity} (caller {current_user.subject})")
    return service.place_order(order)

@app.get("/api/orders", response_model=List[schemas.Order])
def list_orders(
    service: OrderService = Depends(get_order_service),
    current_user: auth.CurrentUser = Depends(auth.get_current_user)
):
    """List every order."""
    logger.info("Received request to fetch all orders")
    return service.find_all()

@app.get("/api/orders/{order_id}", response_model=schemas.Order)
def get_order(
    order_id: RowId,
    service: OrderService = Depends(get_order_service),
    current_user: auth.CurrentUser = Depends(auth.get_current_user)
):
    """
    Get a single order by ID.

    Raises:
        HTTPException: 404 if order not found
    """
    logger.info(f"Received request to fetch order with ID: {order_id}")
    db_order = service.find_by_id(order_id)
    if db_order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return db_order
