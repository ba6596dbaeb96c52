# pos_app/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from pos_app.core.config import get_settings
from pos_app.core.errors import (
    PartialSubmissionError,
    StoreError,
    SubmissionError,
    ValidationError,
)
from pos_app.models.cart import CartSessions

# Routers
from pos_app.routers.auth import router as auth_router
from pos_app.routers.products import router as products_router
from pos_app.routers.pos import router as pos_router
from pos_app.routers.dashboard import router as dashboard_router
from pos_app.routers.reports import router as reports_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Create the per-session cart registry.

    Shutdown:
      - Carts are in memory only; anything not checked out is dropped.
    """
    app.state.carts = CartSessions()
    logger.info("Startup: cart registry ready")
    yield
    logger.info("Shutdown: discarding open carts")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)


# --- Domain error mapping ---


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": exc.message},
    )


@app.exception_handler(PartialSubmissionError)
async def partial_submission_handler(request: Request, exc: PartialSubmissionError):
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": exc.message, "order_id": exc.order_id},
    )


@app.exception_handler(SubmissionError)
@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: SubmissionError | StoreError):
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": exc.message},
    )


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(auth_router, prefix=settings.API_V1_STR)
app.include_router(products_router, prefix=settings.API_V1_STR)
app.include_router(pos_router, prefix=settings.API_V1_STR)
app.include_router(dashboard_router, prefix=settings.API_V1_STR)
app.include_router(reports_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "pos-backoffice"}
