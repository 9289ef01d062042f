import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, settings as default_settings
from core.errors import InventoryError, NotFoundError, ValidationError, field_errors
from core.logging_setup import setup_logging
from db.store import InventoryStore
from routers.items import router as items_router
from routers.movements import router as movements_router
from schemas.inventory import ServiceIndex

logger = logging.getLogger("inventory.api")

ENDPOINTS = [
    "GET /items",
    "GET /items/{id}",
    "POST /items",
    "PUT /items/{id}",
    "POST /items/{id}/adjust",
    "GET /movements",
]
BAD_BODY = "Request body must be valid JSON object."


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.store = InventoryStore(app.state.settings.storage_file)
    yield


def _request_validation_details(exc: RequestValidationError) -> dict:
    errors = exc.errors()
    # Unparseable JSON, a missing body or a non-object body
    if any(e.get("type") == "json_invalid" or tuple(e.get("loc", ())) == ("body",) for e in errors):
        return {"body": BAD_BODY}
    return field_errors(errors)


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": "Validation failed", "details": _request_validation_details(exc)},
        )

    @app.exception_handler(ValidationError)
    async def _validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=422,
            content={"error": str(exc), "details": exc.errors},
        )

    @app.exception_handler(NotFoundError)
    async def _not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})

    @app.exception_handler(InventoryError)
    async def _inventory_error_handler(request: Request, exc: InventoryError):
        return _unexpected_error(request, exc)

    # Registered before CORSMiddleware so it sits inside it and 500s keep CORS headers.
    @app.middleware("http")
    async def _catch_unexpected(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return _unexpected_error(request, exc)


def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("[inventory] %s %s failed", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Unexpected error", "message": str(exc)},
    )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.log_level)

    app = FastAPI(
        title="Warehouse Inventory API",
        description="API for tracking warehouse items and stock movements",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    _register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.get("/", response_model=ServiceIndex)
    async def index():
        return ServiceIndex(service="Warehouse inventory API", endpoints=ENDPOINTS)

    app.include_router(items_router, prefix="/items", tags=["items"])
    app.include_router(movements_router, prefix="/movements", tags=["movements"])
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host=default_settings.host, port=default_settings.port, reload=True)
