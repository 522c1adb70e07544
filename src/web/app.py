"""FastAPI application entry point."""

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from observability import log_run_summary, metrics
from web.deps import build_engine, build_feed, get_config
from web.routes import sicbo

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    app.state.engine = build_engine(config)
    app.state.feed = build_feed(config)
    logger.info("web.startup", feed=config.feed.base_url)
    yield
    await app.state.feed.close()
    log_run_summary()
    logger.info("web.shutdown")


app = FastAPI(
    title="Sicbo Oracle",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "*").split(","),
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(sicbo.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}


@app.get("/api/metrics")
async def metrics_summary():
    return metrics.summary()
