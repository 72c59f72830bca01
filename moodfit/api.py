# -*- coding: utf-8 -*-
"""
MoodFit API

心情驱动的锻炼推荐、连续打卡与进度统计。
"""

from __future__ import annotations

import logging
from datetime import datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .app_db import init_app_db
from .catalog.api import recommendations_router, router as catalog_router
from .config import configure_logging, settings
from .progress.api import progress_router, sessions_router, user_router
from .quotes.api import router as quotes_router

configure_logging()
logger = logging.getLogger(__name__)

# 创建应用
app = FastAPI(
    title="MoodFit",
    description="Mood-based workout recommendations, streaks and progress",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def _startup_init_db() -> None:
    init_app_db(settings.db_path)
    logger.info("State store at %s", settings.db_path)


# Ensure the state DB exists even when lifespan events are not triggered (e.g. some test clients).
init_app_db(settings.db_path)


app.include_router(catalog_router)
app.include_router(recommendations_router)
app.include_router(user_router)
app.include_router(progress_router)
app.include_router(sessions_router)
app.include_router(quotes_router)


# ==================== API 端点 ====================

@app.get("/api/health")
def health_check():
    """健康检查"""
    return {
        "status": "ok",
        "version": __version__,
        "timestamp": datetime.now().isoformat(),
        "timezone": settings.timezone_name or "local",
    }


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    try:
        port = int(settings.port_raw)
    except ValueError:
        port = 8000

    uvicorn.run("moodfit.api:app", host=settings.host, port=port, reload=False)
