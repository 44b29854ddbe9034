import logging
import os
from typing import List

from services.feature_flags import BOOL_FALSE, BOOL_TRUE, FLAG_NAMES
from services.print_specs import (
    DEFAULT_MAX_ARTWORK_FILE_SIZE_MB,
    DEFAULT_RECOMMENDED_ARTWORK_FILE_SIZE_MB,
    PRODUCT_TYPES,
    env_positive_int,
)

logger = logging.getLogger("api.startup")


def _is_blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def _validate_redis_url(value: str | None, key: str, errors: List[str]) -> None:
    if _is_blank(value):
        errors.append(f"{key} is required")
        return
    if not (value.startswith("redis://") or value.startswith("rediss://")):
        errors.append(f"{key} must start with redis:// or rediss://")


def _validate_cors_allow_origins(value: str | None, errors: List[str]) -> None:
    if _is_blank(value):
        return

    origins = [x.strip() for x in str(value).split(",") if x.strip()]
    for origin in origins:
        if origin == "*":
            errors.append("CORS_ALLOW_ORIGINS must not contain '*' in strict allowlist mode")
            continue
        if not (origin.startswith("http://") or origin.startswith("https://")):
            errors.append(f"CORS origin must start with http:// or https://: {origin}")


def _validate_bool_flag_env(key: str, errors: List[str]) -> None:
    raw = os.getenv(key)
    if raw is None:
        return
    value = str(raw).strip().lower()
    if value not in BOOL_TRUE and value not in BOOL_FALSE:
        errors.append(f"{key} must be one of {sorted(BOOL_TRUE | BOOL_FALSE)}, got {raw!r}")


def _validate_positive_int(key: str, errors: List[str]) -> None:
    raw = os.getenv(key)
    if raw is None:
        return
    try:
        if int(raw) <= 0:
            errors.append(f"{key} must be a positive integer")
    except ValueError:
        errors.append(f"{key} must be a positive integer, got {raw!r}")


def _validate_product_type(value: str | None, errors: List[str]) -> None:
    if _is_blank(value):
        return
    if str(value).strip().lower() not in PRODUCT_TYPES:
        errors.append(f"DEFAULT_PRODUCT_TYPE must be one of {list(PRODUCT_TYPES)}, got {value!r}")


def _validate_size_limits(errors: List[str]) -> None:
    max_mb = env_positive_int("MAX_ARTWORK_FILE_SIZE_MB", DEFAULT_MAX_ARTWORK_FILE_SIZE_MB)
    recommended_mb = env_positive_int("RECOMMENDED_ARTWORK_FILE_SIZE_MB", DEFAULT_RECOMMENDED_ARTWORK_FILE_SIZE_MB)
    if recommended_mb > max_mb:
        errors.append(
            f"RECOMMENDED_ARTWORK_FILE_SIZE_MB ({recommended_mb}) must not exceed MAX_ARTWORK_FILE_SIZE_MB ({max_mb})"
        )


def validate_startup_env() -> None:
    errors: List[str] = []
    warnings: List[str] = []

    for key in FLAG_NAMES:
        _validate_bool_flag_env(key, errors)

    for key in ("WORKFLOW_TTL_SEC", "MAX_ARTWORK_FILE_SIZE_MB", "RECOMMENDED_ARTWORK_FILE_SIZE_MB"):
        _validate_positive_int(key, errors)
    _validate_size_limits(errors)

    _validate_product_type(os.getenv("DEFAULT_PRODUCT_TYPE"), errors)
    _validate_cors_allow_origins(os.getenv("CORS_ALLOW_ORIGINS"), errors)

    workflow_raw = str(os.getenv("FEATURE_PREFLIGHT_WORKFLOW", "0")).strip().lower()
    if workflow_raw in BOOL_TRUE:
        _validate_redis_url(os.getenv("REDIS_URL"), "REDIS_URL", errors)
    elif not _is_blank(os.getenv("REDIS_URL")):
        warnings.append("REDIS_URL is set but FEATURE_PREFLIGHT_WORKFLOW is disabled; workflow tracking is off")

    if _is_blank(os.getenv("CORS_ALLOW_ORIGINS")):
        warnings.append("CORS_ALLOW_ORIGINS is not set; browser clients on other origins will be rejected")

    if errors:
        for err in errors:
            logger.error("startup_env_invalid %s", err)
        raise RuntimeError("Startup env validation failed: " + "; ".join(errors))

    for warning in warnings:
        logger.warning("startup_env_warning %s", warning)

    logger.info(
        "startup_env_validated keys=%s",
        ["DEFAULT_PRODUCT_TYPE", "REDIS_URL", "CORS_ALLOW_ORIGINS", *FLAG_NAMES],
    )
