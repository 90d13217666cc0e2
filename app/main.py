# app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI

from app.core.config import get_settings
from app.core.email_client import is_email_configured
from app.database import create_db_and_tables

# Table models must be imported before create_all() sees the metadata
from app.models import user as _user_models  # noqa: F401
from app.models import product as _product_models  # noqa: F401
from app.models import order as _order_models  # noqa: F401
from app.models import delivery as _delivery_models  # noqa: F401

from app.routers import cart, categories, checkout, orders, products, storefront, users

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: make sure the storefront tables exist and report how order
    alerts will be delivered. Nothing to release on shutdown.
    """
    logger.info("🔄 Startup: preparing storefront database...")
    try:
        create_db_and_tables()
    except Exception as e:
        logger.error(f"❌ Startup: database unavailable: {e}")
        raise
    logger.info("✅ Startup: tables ready.")

    logger.info(f"🛒 Carts stored under {settings.CART_STORAGE_DIR}/")
    if is_email_configured() and settings.ORDER_NOTIFICATION_EMAIL:
        logger.info(f"📧 Order alerts go to {settings.ORDER_NOTIFICATION_EMAIL}")
    else:
        logger.warning("⚠️ Email API not configured: order alerts are only logged.")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "StyleCo Storefront API",
    version="0.1.0",
    lifespan=lifespan,
)


# The cart cookie is sent cross-origin, so origins are listed explicitly
# (wildcards are not allowed together with credentials).
origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:3001",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (products, categories, storefront, cart, checkout, orders, users):
    app.include_router(module.router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Liveness probe."""
    return {"status": "ok", "service": "styleco-storefront"}
