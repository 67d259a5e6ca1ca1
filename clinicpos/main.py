from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from clinicpos.api.v1.api import api_router
from clinicpos.core.config import settings
from clinicpos.core.exceptions import register_exception_handlers
from clinicpos.core.logging_config import setup_logging
from clinicpos.infrastructure.database import AsyncSessionLocal, close_db, init_db
from clinicpos.seed import seed_demo_data


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await init_db()
    if settings.SEED_DEMO_DATA:
        async with AsyncSessionLocal() as session:
            await seed_demo_data(session)
    logger.info(f"{settings.PROJECT_NAME} started")
    yield
    await close_db()


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get(f"{settings.API_PREFIX}/health")
async def health_check():
    return {"status": "ok", "timestamp": datetime.now().isoformat()}
