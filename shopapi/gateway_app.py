"""
API gateway in front of the user and product services.

Requests under ``/api`` are forwarded to the owning service with httpx.
Upstream error statuses are passed through with a JSON error body; an
unreachable service answers 503. Every request is counted and timed in
the gateway's own Prometheus registry.

Run with::

    uvicorn shopapi.gateway_app:app --port 3000
"""
from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
from fastapi import Body, FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, Histogram, generate_latest
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from shopapi.core.config import get_settings
from shopapi.core.logging import setup_logging

logger = logging.getLogger(__name__)

USER_SERVICE = "User Service"
PRODUCT_SERVICE = "Product Service"


class UpstreamError(Exception):
    """Base class for failures talking to a backing service."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message


class UpstreamStatusError(UpstreamError):
    """The service answered with an error status."""

    def __init__(self, service: str, response: httpx.Response):
        super().__init__(service, _upstream_message(response))
        self.status_code = response.status_code


class UpstreamUnavailableError(UpstreamError):
    """The service could not be reached or timed out."""


def _upstream_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get("message") or data.get("detail")
        if message:
            return str(message)
    return f"Request failed with status code {response.status_code}"


class GatewayMetricsMiddleware(BaseHTTPMiddleware):
    """Count and time every request, labelled by method, matched route and status."""

    def __init__(self, app, *, requests: Counter, duration: Histogram) -> None:
        super().__init__(app)
        self._requests = requests
        self._duration = duration

    async def dispatch(self, request, call_next):
        start = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            route = request.scope.get("route")
            labels = {
                "method": request.method,
                "route": getattr(route, "path", None) or request.url.path,
                "status": str(status_code),
            }
            self._requests.labels(**labels).inc()
            self._duration.labels(**labels).observe(time.perf_counter() - start)


def create_gateway_app(client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """Build the gateway; pass ``client`` to route upstream calls through a custom transport."""
    settings = get_settings()
    setup_logging(settings.log_level)

    http = client or httpx.AsyncClient(
        timeout=settings.gateway_timeout_seconds,
        headers={"Content-Type": "application/json"},
    )
    users_url = f"{settings.user_service_url}/api/users"
    products_url = f"{settings.product_service_url}/api/products"

    registry = CollectorRegistry()
    requests_total = Counter(
        "gateway_http_requests_total",
        "Total number of HTTP requests",
        ["method", "route", "status"],
        registry=registry,
    )
    request_duration = Histogram(
        "gateway_http_request_duration_seconds",
        "Duration of HTTP requests in seconds",
        ["method", "route", "status"],
        registry=registry,
    )

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("API gateway ready (users=%s, products=%s)", users_url, products_url)
        yield
        if client is None:
            await http.aclose()

    app = FastAPI(title="API Gateway", lifespan=lifespan)
    app.state.registry = registry
    app.add_middleware(GatewayMetricsMiddleware, requests=requests_total, duration=request_duration)

    async def forward(service: str, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await http.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            logger.error("%s error: %s", service, exc)
            raise UpstreamUnavailableError(service, "Service is not responding") from exc
        if response.is_error:
            logger.error("%s error: status %s", service, response.status_code)
            raise UpstreamStatusError(service, response)
        return response

    # ---------------------- error mapping ----------------------
    @app.exception_handler(UpstreamStatusError)
    async def _upstream_status(_request: Request, exc: UpstreamStatusError):
        return JSONResponse(
            {"error": f"{exc.service} error", "message": exc.message, "status": exc.status_code},
            status_code=exc.status_code,
        )

    @app.exception_handler(UpstreamUnavailableError)
    async def _upstream_unavailable(_request: Request, exc: UpstreamUnavailableError):
        return JSONResponse(
            {"error": f"{exc.service} unavailable", "message": exc.message},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(_request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            return JSONResponse({"error": "Route not found"}, status_code=exc.status_code)
        return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def _unhandled(_request: Request, exc: Exception):
        logger.exception("Unhandled gateway error")
        return JSONResponse(
            {"error": "Internal server error", "message": str(exc)},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    # ---------------------- gateway endpoints ----------------------
    @app.get("/health")
    def health():
        return {
            "status": "UP",
            "service": "api-gateway",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/metrics", include_in_schema=False)
    def scrape_metrics():
        return Response(generate_latest(registry), media_type=CONTENT_TYPE_LATEST)

    # ---------------------- users ----------------------
    @app.get("/api/users")
    async def list_users():
        return (await forward(USER_SERVICE, "GET", users_url)).json()

    @app.get("/api/users/{user_id}/dashboard")
    async def user_dashboard(user_id: str):
        results = await asyncio.gather(
            forward(USER_SERVICE, "GET", f"{users_url}/{user_id}"),
            forward(PRODUCT_SERVICE, "GET", products_url),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        user_response, products_response = results
        return {
            "user": user_response.json(),
            "totalProducts": len(products_response.json()),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/api/users/{user_id}")
    async def get_user(user_id: str):
        return (await forward(USER_SERVICE, "GET", f"{users_url}/{user_id}")).json()

    @app.post("/api/users", status_code=status.HTTP_201_CREATED)
    async def create_user(payload: dict = Body(...)):
        return (await forward(USER_SERVICE, "POST", users_url, json=payload)).json()

    @app.put("/api/users/{user_id}")
    async def update_user(user_id: str, payload: dict = Body(...)):
        return (await forward(USER_SERVICE, "PUT", f"{users_url}/{user_id}", json=payload)).json()

    @app.delete("/api/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_user(user_id: str):
        await forward(USER_SERVICE, "DELETE", f"{users_url}/{user_id}")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    # ---------------------- products ----------------------
    @app.get("/api/products")
    async def list_products():
        return (await forward(PRODUCT_SERVICE, "GET", products_url)).json()

    @app.get("/api/products/search")
    async def search_products(request: Request):
        params = dict(request.query_params)
        return (await forward(PRODUCT_SERVICE, "GET", f"{products_url}/search", params=params)).json()

    @app.get("/api/products/{product_id}")
    async def get_product(product_id: str):
        return (await forward(PRODUCT_SERVICE, "GET", f"{products_url}/{product_id}")).json()

    @app.post("/api/products", status_code=status.HTTP_201_CREATED)
    async def create_product(payload: dict = Body(...)):
        return (await forward(PRODUCT_SERVICE, "POST", products_url, json=payload)).json()

    @app.put("/api/products/{product_id}")
    async def update_product(product_id: str, payload: dict = Body(...)):
        return (await forward(PRODUCT_SERVICE, "PUT", f"{products_url}/{product_id}", json=payload)).json()

    @app.delete("/api/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_product(product_id: str):
        await forward(PRODUCT_SERVICE, "DELETE", f"{products_url}/{product_id}")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return app


app = create_gateway_app()
