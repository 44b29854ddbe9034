# User value: This file keeps preflight workflow states consistent so an approved file cannot be silently reopened.
import logging
from typing import Optional

from schemas.preflight_contract import (
    TERMINAL_WORKFLOW_STATUSES,
    WORKFLOW_STATUS_APPROVED,
    WORKFLOW_STATUS_FAIL,
    WORKFLOW_STATUS_PASS,
    WORKFLOW_STATUS_PENDING,
    WORKFLOW_STATUS_WARNING,
)

logger = logging.getLogger("api.status_machine")

_TERMINAL = set(TERMINAL_WORKFLOW_STATUSES)

_RESULT_STATES = {
    WORKFLOW_STATUS_PENDING,
    WORKFLOW_STATUS_PASS,
    WORKFLOW_STATUS_WARNING,
    WORKFLOW_STATUS_FAIL,
}

_ALLOWED = {
    None: {WORKFLOW_STATUS_PENDING},
    WORKFLOW_STATUS_PENDING: set(_RESULT_STATES),
    WORKFLOW_STATUS_PASS: _RESULT_STATES | {WORKFLOW_STATUS_APPROVED},
    WORKFLOW_STATUS_WARNING: _RESULT_STATES | {WORKFLOW_STATUS_APPROVED},
    WORKFLOW_STATUS_FAIL: set(_RESULT_STATES),
    WORKFLOW_STATUS_APPROVED: {WORKFLOW_STATUS_APPROVED},
}


# User value: treats stored statuses case-insensitively so older records still match.
def _norm(status: Optional[str]) -> Optional[str]:
    if status is None:
        return None
    s = str(status).strip().upper()
    return s or None


# User value: decides whether a status move is legal before anything is written.
def is_allowed_transition(current: Optional[str], target: Optional[str]) -> bool:
    target_n = _norm(target)
    if not target_n:
        return True
    current_n = _norm(current)
    allowed = _ALLOWED.get(current_n, _ALLOWED[None])
    return target_n in allowed


# User value: writes a workflow update only when the status move is legal, so records never jump states.
def transition_hset(r, *, key: str, mapping: dict, context: str, request_id: str = "") -> tuple[bool, Optional[str], Optional[str]]:
    target = _norm(mapping.get("status"))
    if not target:
        r.hset(key, mapping=mapping)
        return True, None, None

    current_data = r.hgetall(key) or {}
    current = _norm(current_data.get("status"))

    if not is_allowed_transition(current, target):
        logger.warning(
            "status_transition_blocked context=%s key=%s current=%s target=%s request_id=%s",
            context,
            key,
            current,
            target,
            request_id,
        )
        return False, current, target

    r.hset(key, mapping=mapping)

    if current and current in _TERMINAL and current == target:
        logger.info(
            "status_transition_idempotent_terminal context=%s key=%s status=%s request_id=%s",
            context,
            key,
            target,
            request_id,
        )

    return True, current, target
