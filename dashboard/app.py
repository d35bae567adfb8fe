#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MoodGrid - FastAPI Application
Import/export service for the monthly mood tracker

Version: 1.0.0
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dashboard.api import days
from dashboard.config import DashboardSettings
from database.manager import DayStore, FileDayStore
from shared.models import HealthCheck

logger = logging.getLogger(__name__)


def create_app(settings: DashboardSettings, store: Optional[DayStore] = None) -> FastAPI:
    """Build the application around a day store (a file store in DATA_DIR by default)"""
    day_store = store if store is not None else FileDayStore(settings.DATA_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"🚀 Starting {settings.APP_NAME} {settings.VERSION}...")
        await app.state.day_store.initialize()
        logger.info(f"🌐 Listening on {settings.DASHBOARD_HOST}:{settings.DASHBOARD_PORT}")
        yield
        logger.info("🛑 Stopping MoodGrid")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Stores one month of day records per (year, month)",
        version=settings.VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.day_store = day_store
    app.state.start_time = time.time()

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log every request with its status and processing time"""
        start_time = time.time()
        client_ip = request.headers.get("X-Forwarded-For", request.client.host if request.client else "-")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.exception(f"❌ {request.method} {request.url.path} failed: {e} ({process_time:.3f}s)")
            return JSONResponse(status_code=500, content={"detail": "Internal server error"})

        process_time = time.time() - start_time
        logger.info(
            f"{request.method} {request.url.path} "
            f"- {response.status_code} "
            f"- {process_time:.3f}s "
            f"- {client_ip}"
        )
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response

    # ===== ROUTES =====

    app.include_router(days.router)

    @app.get("/health", response_model=HealthCheck)
    async def health_check():
        return HealthCheck(
            status="healthy",
            service=settings.APP_NAME,
            version=settings.VERSION,
            timestamp=time.time()
        )

    return app
