# User value: This file serves artwork preflight so customers learn about print problems before they order a proof.
# app.py
import os
import logging
import time

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from utils.json_logging import configure_json_logging
from utils.metrics import incr, observe_ms

# Load env before importing route modules that read os.getenv at import time.
load_dotenv(os.path.join(os.path.dirname(__file__), ".env"))


# User value: prepares structured logs so every preflight decision can be traced.
def configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    configure_json_logging(service="artwork-preflight-api", level=level)


configure_logging()
logger = logging.getLogger("api.error")
from startup_env import validate_startup_env
from utils.request_id import (
    REQUEST_ID_HEADER,
    clear_request_context,
    get_file_id,
    get_request_id,
    normalize_request_id,
    set_request_id,
)

validate_startup_env()

from routes.health import router as health_router
from routes.contract import router as contract_router
from routes.preflight import router as preflight_router
from routes.preflight_workflow import router as preflight_workflow_router

app = FastAPI(title="Artwork Preflight API")


# User value: normalizes comma-separated settings so CORS origins are applied exactly once.
def _parse_csv_env(name: str) -> list[str]:
    raw = os.getenv(name, "")
    values = [x.strip() for x in raw.split(",") if x.strip()]
    seen = set()
    ordered = []
    for item in values:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered


@app.middleware("http")
# User value: tags every request with an id so support can match a customer report to its logs.
async def request_id_middleware(request: Request, call_next):
    request_id = normalize_request_id(request.headers.get(REQUEST_ID_HEADER))
    set_request_id(request_id)
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = int(getattr(response, "status_code", 500))
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
    finally:
        duration_ms = (time.perf_counter() - started) * 1000.0
        method = request.method.upper()
        path = request.url.path
        status_class = f"{status_code // 100}xx"
        incr("api_http_requests_total", method=method, path=path, status_class=status_class, status_code=status_code)
        observe_ms("api_http_request_latency_ms", duration_ms, method=method, path=path, status_class=status_class)
        clear_request_context()


# User value: supports _extract_error_message so clients get one predictable error shape.
def _extract_error_message(detail) -> str:
    if isinstance(detail, dict):
        return str(detail.get("error_message") or detail.get("message") or detail.get("detail") or detail)
    if isinstance(detail, list):
        return "; ".join(str(x) for x in detail)
    return str(detail)


_STATUS_ERROR_CODES = {
    400: "INVALID_REQUEST",
    401: "AUTH_UNAUTHORIZED",
    403: "AUTH_FORBIDDEN",
    404: "RESOURCE_NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "STATE_CONFLICT",
    503: "SERVICE_UNAVAILABLE",
}


# User value: supports _to_error_code so clients get one predictable error shape.
def _to_error_code(status_code: int, detail) -> str:
    if isinstance(detail, dict) and detail.get("error_code"):
        return str(detail.get("error_code")).strip().upper()

    return _STATUS_ERROR_CODES.get(status_code, f"HTTP_{status_code}")


# User value: supports _error_body so clients get one predictable error shape.
def _error_body(*, request: Request, status_code: int, detail, error_message: str | None = None) -> dict:
    request_id = get_request_id() or normalize_request_id(request.headers.get(REQUEST_ID_HEADER))
    body = {
        "error_code": _to_error_code(status_code, detail),
        "error_message": error_message or _extract_error_message(detail),
        "detail": detail,
        "path": request.url.path,
        "request_id": request_id,
    }
    file_id = get_file_id()
    if file_id:
        body["file_id"] = file_id
    return body


@app.exception_handler(RequestValidationError)
# User value: supports validation_exception_handler so clients get one predictable error shape.
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    detail = exc.errors()
    body = _error_body(
        request=request,
        status_code=422,
        detail=detail,
        error_message="Request validation failed",
    )
    body["error_code"] = "VALIDATION_ERROR"
    logger.warning(
        "request_failed_validation status=422 path=%s request_id=%s error_code=%s",
        request.url.path,
        body["request_id"],
        body["error_code"],
    )
    return JSONResponse(status_code=422, content=body)


@app.exception_handler(StarletteHTTPException)
# User value: supports http_exception_handler so clients get one predictable error shape.
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    body = _error_body(request=request, status_code=exc.status_code, detail=exc.detail)
    logger.warning(
        "request_failed status=%s path=%s request_id=%s error_code=%s error_message=%s",
        exc.status_code,
        request.url.path,
        body["request_id"],
        body["error_code"],
        body["error_message"],
    )
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(Exception)
# User value: supports unhandled_exception_handler so clients get one predictable error shape.
async def unhandled_exception_handler(request: Request, exc: Exception):
    request_id = get_request_id() or normalize_request_id(request.headers.get(REQUEST_ID_HEADER))
    logger.exception(
        "request_failed_unhandled path=%s request_id=%s error=%s: %s",
        request.url.path,
        request_id,
        exc.__class__.__name__,
        exc,
    )
    body = _error_body(
        request=request,
        status_code=500,
        detail="Unhandled server exception",
        error_message="Internal server error",
    )
    body["error_code"] = "INTERNAL_SERVER_ERROR"
    return JSONResponse(status_code=500, content=body)


CORS_ALLOW_ORIGINS = _parse_csv_env("CORS_ALLOW_ORIGINS")
CORS_ALLOW_ORIGIN_REGEX = (os.getenv("CORS_ALLOW_ORIGIN_REGEX") or "").strip() or None
logger.info(
    "cors_configured allow_origins=%s allow_origin_regex=%s",
    CORS_ALLOW_ORIGINS,
    CORS_ALLOW_ORIGIN_REGEX or "",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_origin_regex=CORS_ALLOW_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)

app.include_router(health_router)
app.include_router(contract_router)
app.include_router(preflight_router)
app.include_router(preflight_workflow_router)
