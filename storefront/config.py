"""
Application configuration — loaded once at startup.
"""

import os
from decimal import Decimal

SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production")
TOKEN_ALGORITHM = "HS256"
TOKEN_EXPIRY_MINUTES = int(os.getenv("TOKEN_EXPIRY_MINUTES", str(24 * 60)))
PASSWORD_HASH_ITERATIONS = 120_000

ORDER_REF_PREFIX = os.getenv("ORDER_REF_PREFIX", "LWG")

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
SEED_DATA = os.getenv("SEED_DATA", "1") == "1"

# Flat delivery fee per zone, in leones
DELIVERY_FEES = {
    "freetown": Decimal("25.00"),
    "western-area": Decimal("50.00"),
    "provinces": Decimal("100.00"),
}

NOTIFY_WEBHOOK_URL = os.getenv("NOTIFY_WEBHOOK_URL", "")
NOTIFY_TIMEOUT_SECONDS = float(os.getenv("NOTIFY_TIMEOUT", "10"))

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

STORE_NAME = "LWG"
API_NAME = f"{STORE_NAME} API"
API_VERSION = "1.0.0"

DEBUG = os.getenv("DEBUG", "0") == "1"
