"""FastAPI application entry - draw.io to Commbox bot builder."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from . import config
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.routes import router
from .logger import configure_logging, get_logger
from .models import ErrorResponse, HealthResponse

SERVICE_NAME = "Commbox Bot Builder API"

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(config.LOG_LEVEL)
    logger.info("%s starting (allowed origins: %s)", SERVICE_NAME, ", ".join(config.FRONTEND_URLS))
    yield
    logger.info("%s shutting down", SERVICE_NAME)


app = FastAPI(
    title=SERVICE_NAME,
    description="Convert draw.io flowcharts into Commbox bot scripts",
    version="0.1.0",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.FRONTEND_URLS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump(by_alias=True))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _error(404, "Route not found")
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # drawioFile sent as a plain form field instead of a file part
    logger.warning("Rejected request to %s: %s", request.url.path, exc.errors())
    return _error(400, "לא הועלה קובץ")


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Server error on %s %s", request.method, request.url.path)
    return _error(500, str(exc) or "שגיאת שרת")


@app.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(
        timestamp=datetime.now(timezone.utc).isoformat(),
        service=SERVICE_NAME,
    )


def serve() -> None:
    """Run the API with uvicorn on HOST:PORT."""
    import uvicorn

    configure_logging(config.LOG_LEVEL)
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    serve()
