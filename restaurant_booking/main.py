"""
Restaurant Booking - Main Application Entry Point
Table reservations with double-booking prevention
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import structlog

from restaurant_booking.api import reservations, tables
from restaurant_booking.core.config import get_settings
from restaurant_booking.core.database import init_db
from restaurant_booking.core.errors import BookingError
from restaurant_booking.core.events import event_bus
from restaurant_booking.services.notifications import register_notification_relay

settings = get_settings()

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if settings.LOG_JSON else structlog.dev.ConsoleRenderer(),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info(f"Initializing {settings.APP_NAME} backend")
    init_db()
    register_notification_relay(event_bus)

    yield

    # Shutdown
    event_bus.clear_subscribers()
    logger.info(f"Shutting down {settings.APP_NAME} backend")


# Create FastAPI application
app = FastAPI(
    title="Restaurant Booking API",
    description="Table reservations with double-booking prevention and table status sync",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure middleware stack
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    """Render booking errors with their stable code"""
    logger.info(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


# Include routers
app.include_router(reservations.router, prefix=f"{settings.API_V1_PREFIX}/reservations", tags=["reservations"])
app.include_router(tables.router, prefix=f"{settings.API_V1_PREFIX}/tables", tags=["tables"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "restaurant-booking-api"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Restaurant Booking API",
        "version": "1.0.0",
        "docs": "/docs",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "restaurant_booking.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )
