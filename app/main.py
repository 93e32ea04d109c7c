"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import database
from app.routers import analytics, auth, progress, vision_boards

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect to MongoDB for the lifetime of the app."""
    await database.connect()
    logger.info("%s started", settings.app_name)
    yield
    await database.disconnect()


app = FastAPI(
    title=settings.app_name,
    description="Backend API for vision boards, strategy sheets and progress tracking",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(vision_boards.router)
app.include_router(progress.router)
app.include_router(analytics.router)


@app.get("/")
async def root():
    return {"status": "ok", "message": settings.app_name}


@app.get("/health")
async def health():
    """Liveness plus a MongoDB round trip."""
    database_ok = await database.ping()
    return {
        "status": "healthy" if database_ok else "degraded",
        "database": "ok" if database_ok else "unreachable",
    }
