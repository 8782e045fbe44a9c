"""
Products Service API

FastAPI microservice holding the product catalog.

Endpoints:
    GET /api/products: List all products
    GET /api/products/{sku}: Get a product by SKU
    POST /api/products: Create a product
    DELETE /api/products/{id}: Delete a product by ID
    GET /healthz: Health check endpoint for orchestration systems
"""
import logging
from typing import List
from fastapi import FastAPI, Depends, HTTPException, status

from services.common.logging_config import configure_logging
from services.common.problems import register_error_handlers
from services.common.schemas import RowId
from . import models, schemas
from .database import engine
from .service import ProductService, get_product_service

configure_logging()
logger = logging.getLogger(__name__)

# Create database tables
models.Base.metadata.create_all(bind=engine)

app = FastAPI(title="product-service")
register_error_handlers(app)

@app.get("/healthz", response_model=dict)
def health():
    """Health check endpoint for the products service."""
    return {"status": "healthy"}

@app.get("/api/products", response_model=List[schemas.Product])
def list_products(service: ProductService = Depends(get_product_service)):
    return service.find_all()

@app.get("/api/products/{sku}", response_model=schemas.Product)
def get_product_by_sku(sku: str, service: ProductService = Depends(get_product_service)):
    """
    Get a product by SKU.

    Raises:
        HTTPException: 404 if no product has the SKU
    """
    db_product = service.find_by_sku(sku)
    if db_product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return db_product

@app.post("/api/products", response_model=schemas.Product, status_code=status.HTTP_201_CREATED)
def create_product(product: schemas.ProductCreate, service: ProductService = Depends(get_product_service)):
    """
    Create a product.

    Raises:
        400 if a required field is missing or invalid
        409 if the SKU already exists
    """
    logger.info(f"Received request to create product sku={product.sku}")
    return service.create(product)

@app.delete("/api/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: RowId, service: ProductService = Depends(get_product_service)):
    """
    Delete a product.

    Raises:
        HTTPException: 404 if product not found
    """
    if not service.delete(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
