"""
Video schedule service: lets a contact-center agent book a future video meeting
with a customer and the matching Amazon Connect task.
"""

import time
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from app.config import settings
from app.infrastructure.observability.logging import get_logger, log_request, setup_logging
from app.routes import health, schedule

# Setup logging before creating the app
setup_logging(log_level=settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own one pooled HTTP client for VideoEngager calls for the app's lifetime."""
    logger.info("Application starting", environment=settings.environment, debug=settings.debug)

    app.state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(settings.VE_REQUEST_TIMEOUT),
        limits=httpx.Limits(max_keepalive_connections=20, max_connections=50),
    )

    yield

    logger.info("Application shutting down")
    try:
        await app.state.http_client.aclose()
    except Exception as e:
        logger.error("Error closing HTTP client", error=str(e))
    app.state.http_client = None


app = FastAPI(
    title="Video Schedule Service",
    description="Schedules VideoEngager meetings with matching Amazon Connect tasks",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(schedule.router)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.time()
    response = await call_next(request)
    process_time = (time.time() - start_time) * 1000

    log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=round(process_time, 2),
        request_id=request.headers.get("x-request-id"),
    )
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
