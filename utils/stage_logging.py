# User value: This file writes one structured line per preflight decision so support can replay what a customer saw.
import json
import logging
from datetime import datetime, timezone
from typing import Any

from utils.request_id import get_file_id, get_request_id, set_file_id

logger = logging.getLogger("api.stage")

_WARNING_EVENTS = {"BLOCKED", "CONFLICT", "DEGRADED"}


def _norm(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple)):
        return [_norm(v) for v in value]
    return str(value)


def stage_payload(
    *,
    stage: str,
    event: str,
    file_id: str | None = None,
    product_type: str | None = None,
    strategy: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> dict:
    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "file_id": file_id or get_file_id() or "",
        "stage": stage.upper(),
        "event": event.upper(),
    }
    request_id = extra.pop("request_id", None) or get_request_id()
    if request_id:
        payload["request_id"] = request_id

    for key, value in (("product_type", product_type), ("strategy", strategy), ("error", error)):
        if value:
            payload[key] = value

    for key, value in extra.items():
        norm = _norm(value)
        if norm is not None:
            payload[key] = norm
    return payload


# User value: logs a preflight stage and binds the file to the request so later log lines carry it too.
def log_stage(*, stage: str, event: str, file_id: str | None = None, **fields: Any) -> dict:
    if file_id:
        set_file_id(file_id)
    payload = stage_payload(stage=stage, event=event, file_id=file_id, **fields)

    msg = json.dumps(payload, ensure_ascii=False)
    if payload.get("error") or payload["event"] == "FAILED":
        logger.error("stage_event %s", msg)
    elif payload["event"] in _WARNING_EVENTS:
        logger.warning("stage_event %s", msg)
    else:
        logger.info("stage_event %s", msg)
    return payload
