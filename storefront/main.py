"""
LWG Storefront — Backend API
FastAPI server for the product catalog, checkout, order tracking and the
admin panel.
"""

from __future__ import annotations
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront import config
from storefront.database import MemoryStore
from storefront.errors import StoreError
from storefront.routes import admin, orders, products
from storefront.seed import seed_store
from storefront.utils.logger import get_logger

_logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Error envelopes
# ---------------------------------------------------------------------------

async def _store_error(request: Request, exc: StoreError):
    return JSONResponse(exc.to_envelope(), status_code=exc.status_code)


async def _validation_error(request: Request, exc: RequestValidationError):
    details = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    return JSONResponse({"ok": False, "error": "Invalid request data", "details": details},
                        status_code=400)


async def _http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"ok": False, "error": str(exc.detail)}, status_code=exc.status_code,
                        headers=getattr(exc, "headers", None))


async def _unexpected_error(request: Request, exc: Exception):
    _logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse({"ok": False, "error": "Internal server error"}, status_code=500)


# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

def create_app(store: Optional[MemoryStore] = None, seed: Optional[bool] = None) -> FastAPI:
    """Build the API around `store` (a fresh MemoryStore if not given)."""
    if store is None:
        store = MemoryStore()
    if config.SEED_DATA if seed is None else seed:
        seed_store(store)

    app = FastAPI(title=config.API_NAME, version=config.API_VERSION)
    app.state.store = store
    app.state.started_at = time.monotonic()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreError, _store_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unexpected_error)

    app.include_router(products.router)
    app.include_router(orders.router)
    app.include_router(admin.router)

    @app.get("/")
    async def root():
        return {"ok": True, "name": config.API_NAME}

    @app.get("/api/status")
    async def status(request: Request):
        return {
            "ok": True,
            "uptime": round(time.monotonic() - request.app.state.started_at, 3),
            "version": config.API_VERSION,
            "counts": request.app.state.store.counts(),
        }

    _logger.info(f"{config.API_NAME} v{config.API_VERSION} ready")
    return app


app = create_app()


def run():
    """Console entry point — serve the API with uvicorn."""
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
