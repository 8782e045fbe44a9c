"""
Environment settings for the API gateway.
"""
import os

# Logical backend name -> base URL. This table is the gateway's service discovery.
SERVICE_URLS = {
    "user-backend": os.getenv("USER_BACKEND_URL", "http://user-backend:8080"),
    "product-service": os.getenv("PRODUCT_SERVICE_URL", "http://product-service:8081"),
    "inventory-service": os.getenv("INVENTORY_SERVICE_URL", "http://inventory-service:8082"),
    "order-service": os.getenv("ORDER_SERVICE_URL", "http://order-service:8083"),
}

SESSION_SECRET_KEY = os.getenv("SESSION_SECRET_KEY", "dev-session-secret-change-me")
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "gateway_session")

TIMEOUT_SECONDS = float(os.getenv("GATEWAY_TIMEOUT_SECONDS", "10"))

# Exposes GET /token, which echoes the caller's ID token. Never enable in production.
TOKEN_DEBUG = os.getenv("GATEWAY_TOKEN_DEBUG", "false").lower() in ("true", "1", "yes")
