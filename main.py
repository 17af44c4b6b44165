# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import routers
from app.core.config import APP_ENV, APP_VERSION, CORS_ORIGINS, STUDIO_NAME
from app.core.db import init_models
from app.core.error_handlers import register_exception_handlers
from app.core.logging import setup_logging
from app.middleware.request_logging import request_logging_middleware

setup_logging()
logger = logging.getLogger(__name__)

APP_NAME = f"{STUDIO_NAME.title()} Studio API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s", APP_NAME, extra={"environment": APP_ENV})

    # schema is managed outside the app in staging and production
    if APP_ENV == "development":
        await init_models()
    else:
        logger.info("%s mode: init_models() skipped", APP_ENV)

    yield

    logger.info("Shutting down application")


app = FastAPI(
    title=APP_NAME,
    description="Customers, quotations, orders, ledgers and reports for the studio",
    version=APP_VERSION,
    docs_url="/docs" if APP_ENV != "production" else None,
    redoc_url=None,
    lifespan=lifespan,
)

register_exception_handlers(app)

app.middleware("http")(request_logging_middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Health"])
async def health_check():
    return {
        "status": "ok",
        "service": "studio-api",
        "environment": APP_ENV,
        "version": APP_VERSION,
    }


for name in routers.__all__:
    app.include_router(getattr(routers, name))
