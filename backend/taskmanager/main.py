# taskmanager/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from taskmanager.config import settings
from taskmanager.core.db import init_db, close_db
from taskmanager.core.errors import AppError, app_error_handler, request_validation_handler
from taskmanager.api.v1.routers import auth, tasks

logger = logging.getLogger("uvicorn.error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.setLevel(settings.log_level.upper())
    await init_db()
    yield
    await close_db()


app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

# CORS for the single-page frontend (token travels in the Authorization header)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Service errors -> status code + {"detail": {...}}
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)

# REST
app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(tasks.router, prefix=settings.api_prefix)


@app.get("/healthz")
def healthz():
    return {"ok": True}


def run():
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("taskmanager.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
