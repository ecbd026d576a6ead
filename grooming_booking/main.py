import logging
import time
from contextlib import asynccontextmanager
from uuid import uuid4

import uvicorn
from fastapi import FastAPI
from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from grooming_booking.api.v1.bookings import router as bookings_router
from grooming_booking.core.config import settings
from grooming_booking.core.exceptions import (
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from grooming_booking.core.logging import setup_logging
from grooming_booking.core.metrics import REQUEST_COUNT, REQUEST_LATENCY, render_metrics
from grooming_booking.core.request_context import request_id_ctx_var
from grooming_booking.db.base import Base
from grooming_booking.db.session import engine

SERVICE_BANNER = "Pet grooming booking service is running"

setup_logging()
logger = logging.getLogger("grooming_booking.request")


@asynccontextmanager
async def lifespan(_: FastAPI):
    if settings.db_auto_create_schema and settings.booking_store_backend == "sql":
        Base.metadata.create_all(bind=engine)
        logger.info("schema_ready tables=%s", ",".join(sorted(Base.metadata.tables)))
    logger.info("service_started env=%s store=%s", settings.app_env, settings.booking_store_backend)
    yield
    engine.dispose()


app = FastAPI(title="Grooming Booking API", version="0.1.0", lifespan=lifespan)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(bookings_router)


def _route_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


def _record_request(method: str, path: str, status_code: int, started: float) -> float:
    elapsed = time.perf_counter() - started
    REQUEST_COUNT.labels(method=method, path=path, status_code=status_code).inc()
    REQUEST_LATENCY.labels(method=method, path=path).observe(elapsed)
    return elapsed * 1000


@app.middleware("http")
async def observability_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid4())
    token = request_id_ctx_var.set(request_id)
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        duration_ms = _record_request(request.method, _route_label(request), 500, started)
        logger.exception(
            "request_failed method=%s path=%s status=500 duration_ms=%.2f",
            request.method,
            request.url.path,
            duration_ms,
        )
        raise
    else:
        duration_ms = _record_request(request.method, _route_label(request), response.status_code, started)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request_completed method=%s path=%s status=%s duration_ms=%.2f",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response
    finally:
        request_id_ctx_var.reset(token)


@app.get("/", response_class=PlainTextResponse, tags=["health"])
def banner() -> str:
    return SERVICE_BANNER


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["observability"])
def metrics() -> Response:
    payload, content_type = render_metrics()
    return Response(content=payload, media_type=content_type)


def run() -> None:
    uvicorn.run(app, host=settings.app_host, port=settings.app_port)


if __name__ == "__main__":
    run()
