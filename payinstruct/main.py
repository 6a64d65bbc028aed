"""Payment Instructions API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PaymentInstructionError -> structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event
    - No database: every request carries its own account snapshot
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from payinstruct.api.error_handlers import register_error_handlers
from payinstruct.api.routes import health, payment_instructions
from payinstruct.config import get_settings
from payinstruct.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(
        f"Payment Instructions API started "
        f"(currencies: {', '.join(settings.supported_currencies)})",
    )
    yield
    logger.info("Payment Instructions API shutting down")


settings = get_settings()
app = FastAPI(
    title="Payment Instructions API",
    version=settings.service_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(payment_instructions.router)

register_error_handlers(app)
