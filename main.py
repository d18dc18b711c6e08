import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from jobly.core.config import settings
from jobly.core.database import init_db
from jobly.core.exceptions import register_exception_handlers
from jobly.core.logging_config import setup_logging
from jobly.api.endpoints import auth, companies, jobs, users

setup_logging(settings.LOG_LEVEL, json_logs=settings.JSON_LOGS)
logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables before serving."""
    init_db()
    logger.info(f"{settings.PROJECT_NAME} {VERSION} ready")
    yield
    logger.info(f"{settings.PROJECT_NAME} stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=VERSION,
    description="Companies, jobs and job applications",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

for router in (auth.router, companies.router, jobs.router, users.router):
    app.include_router(router, prefix=settings.API_V1_STR)


@app.get("/")
async def root():
    return {"message": settings.PROJECT_NAME, "version": VERSION, "status": "healthy"}


@app.get("/health")
async def health_check():
    """Liveness check; does not touch the database."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, log_level=settings.LOG_LEVEL.lower())
