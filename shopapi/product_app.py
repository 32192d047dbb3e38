"""
Product service application.

Run with::

    uvicorn shopapi.product_app:app --port 8082
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Response
from prometheus_client import CONTENT_TYPE_LATEST

from shopapi.core.config import get_settings
from shopapi.core.logging import setup_logging
from shopapi.core.metrics import PRODUCT_METRICS, ServiceMetrics
from shopapi.db.create_tables import create_all
from shopapi.repositories.sql_repository import ProductRepository
from shopapi.routers import products as products_router
from shopapi.services.product_service import ProductService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    create_all()
    logger.info("%s ready", app.state.service_name)
    yield


def create_product_app(
    repository: Optional[ProductRepository] = None,
    metrics: ServiceMetrics = PRODUCT_METRICS,
) -> FastAPI:
    """Build the product API with its store and counters wired in."""
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Product Service", lifespan=_lifespan)
    app.state.service_name = settings.product_service_name
    app.state.product_service = ProductService(repository or ProductRepository(), metrics)
    app.include_router(products_router.router)

    @app.get("/metrics", include_in_schema=False)
    def scrape_metrics():
        return Response(metrics.render(), media_type=CONTENT_TYPE_LATEST)

    return app


app = create_product_app()
