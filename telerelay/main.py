# telerelay/main.py
from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from telerelay.config import Settings, get_settings
from telerelay.errors import BatchDispatchError, TelerelayError
from telerelay.logging_config import configure_logging, get_logger
from telerelay.routers import calls, lookups, messaging
from telerelay.schemas import ErrorBody, ErrorResponse

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


def init_error_tracking(settings: Settings) -> bool:
    """Turn on Sentry when a DSN is configured. Returns whether it did."""
    if not settings.SENTRY_DSN:
        return False
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.ENV,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        profiles_sample_rate=settings.SENTRY_PROFILES_SAMPLE_RATE,
    )
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.twilio_missing:
        logger.warning(
            "Twilio settings incomplete; provider routes will answer 503",
            extra={"missing": settings.twilio_missing},
        )
    logger.info("%s started", settings.APP_NAME, extra={"env": settings.ENV})
    yield


init_error_tracking(settings)

app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

_HTTP_ERROR_KINDS = {404: "not_found", 405: "method_not_allowed"}

# Routers
app.include_router(lookups.router)
app.include_router(messaging.router)
app.include_router(calls.router)


def _error_response(status_code: int, body: ErrorBody, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        headers=headers,
        content=ErrorResponse(error=body).model_dump(by_alias=True, exclude_none=True),
    )


@app.exception_handler(TelerelayError)
async def telerelay_error_handler(request: Request, exc: TelerelayError):
    index = exc.index if isinstance(exc, BatchDispatchError) else None
    logger.warning(
        "%s %s failed: %s", request.method, request.url.path, exc.message,
        extra={"kind": exc.kind},
    )
    return _error_response(
        exc.status_code,
        ErrorBody(kind=exc.kind, message=exc.message, index=index),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return _error_response(
        422,
        ErrorBody(
            kind="validation_error",
            message="Request body is invalid",
            details=jsonable_encoder(exc.errors()),
        ),
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    kind = _HTTP_ERROR_KINDS.get(exc.status_code, "http_error")
    message = exc.detail if isinstance(exc.detail, str) else "HTTP error"
    return _error_response(
        exc.status_code,
        ErrorBody(kind=kind, message=message),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    # None when Sentry is off
    event_id = sentry_sdk.capture_exception(exc)
    return _error_response(
        500,
        ErrorBody(kind="internal_error", message="Internal server error", event_id=event_id),
    )


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Hello world!"


@app.get("/debug-sentry")
def debug_sentry(settings: Settings = Depends(get_settings)):
    """Raise on purpose to check error tracking end to end. Hidden in prod."""
    if settings.ENV == "prod":
        raise HTTPException(status_code=404, detail="Not Found")
    raise RuntimeError("My first Sentry error!")


@app.get("/health")
def health_check(settings: Settings = Depends(get_settings)):
    twilio_status = "ok" if not settings.twilio_missing else "missing"

    return {
        "status": "ok" if twilio_status == "ok" else "degraded",
        "app": settings.APP_NAME,
        "env": settings.ENV,
        "twilio": twilio_status,
    }
