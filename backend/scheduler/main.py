"""
FastAPI application entry point
Facility Scheduler - rooms, bookings and staff appointments
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import init_db
from .routes.appointments import router as appointments_router
from .routes.rooms import router as rooms_router
from .routes.staff import router as staff_router

settings = get_settings()

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready (%s)", settings.ENVIRONMENT)
    yield


# FastAPI application
app = FastAPI(
    lifespan=lifespan,
    title="Facility Scheduler API",
    description="Room bookings and staff appointment requests",
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.DEBUG else [settings.SITE_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(rooms_router)
app.include_router(staff_router)
app.include_router(appointments_router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "environment": settings.ENVIRONMENT}
