"""
User service application.

Run with::

    uvicorn shopapi.user_app:app --port 8081
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST

from shopapi.core.config import get_settings
from shopapi.core.logging import setup_logging
from shopapi.core.metrics import USER_METRICS, ServiceMetrics
from shopapi.db.create_tables import create_all
from shopapi.repositories.sql_repository import UserRepository
from shopapi.routers import users as users_router
from shopapi.services.user_service import UserService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    create_all()
    logger.info("%s ready", app.state.service_name)
    yield


def create_user_app(
    repository: Optional[UserRepository] = None,
    metrics: ServiceMetrics = USER_METRICS,
) -> FastAPI:
    """Build the user API with its store and counters wired in."""
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="User Service", lifespan=_lifespan)
    app.state.service_name = settings.user_service_name
    app.state.user_service = UserService(repository or UserRepository(), metrics)
    app.include_router(users_router.router)

    @app.get("/metrics", include_in_schema=False)
    def scrape_metrics():
        return Response(metrics.render(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_user_app()
