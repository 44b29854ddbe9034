# User value: This file tracks each artwork file across re-uploads and admin approval so nobody loses where a proof stands.
import logging
import re
from datetime import datetime, timezone

from config import WORKFLOW_TTL_SEC
from schemas.preflight import PreflightReport
from schemas.preflight_contract import (
    OVERALL_TO_WORKFLOW_STATUS,
    WORKFLOW_STATUS_APPROVED,
    WORKFLOW_STATUS_PENDING,
)
from utils.status_machine import transition_hset

logger = logging.getLogger("api.workflow")

_BOOL_FIELDS = ("customer_notified", "customer_ready_to_proceed", "admin_approved")
_INT_FIELDS = ("retries", "last_score")
_FILE_ID_STRIP_RE = re.compile(r"[^A-Za-z0-9_.:-]")


# User value: keeps caller upload ids safe to use as store keys so one upload slot maps to one record.
def normalize_file_id(raw: str | None) -> str:
    return _FILE_ID_STRIP_RE.sub("", str(raw or "").strip())[:128]


def workflow_key(file_id: str) -> str:
    return f"preflight_workflow:{file_id}"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _flag(value: bool) -> str:
    return "1" if value else "0"


# User value: converts stored strings back to typed values so API responses stay consistent.
def _decode(data: dict) -> dict:
    out = dict(data)
    for name in _BOOL_FIELDS:
        out[name] = str(out.get(name) or "0") == "1"
    for name in _INT_FIELDS:
        raw = out.get(name)
        out[name] = int(raw) if raw not in (None, "") else None
    out["admin_notes"] = out.get("admin_notes") or ""
    return out


def get_workflow(r, file_id: str) -> dict | None:
    data = r.hgetall(workflow_key(file_id)) or {}
    if not data:
        return None
    return _decode(data)


# User value: records each upload into the caller's slot and counts re-uploads so support can see how many attempts a customer needed.
def record_preflight_result(
    r,
    *,
    file_id: str,
    report: PreflightReport,
    product_type: str,
    user: str = "",
    request_id: str = "",
    ttl_sec: int = WORKFLOW_TTL_SEC,
) -> tuple[bool, dict | None]:
    key = workflow_key(file_id)
    existing = r.hgetall(key) or {}
    now = _now()

    if not existing:
        transition_hset(
            r,
            key=key,
            mapping={
                "file_id": file_id,
                "filename": report.filename,
                "product_type": product_type,
                "user": user,
                "status": WORKFLOW_STATUS_PENDING,
                "retries": "0",
                "customer_notified": _flag(False),
                "customer_ready_to_proceed": _flag(False),
                "admin_approved": _flag(False),
                "admin_notes": "",
                "created_at": now,
                "updated_at": now,
            },
            context="workflow_open",
            request_id=request_id,
        )
        retries = 0
    else:
        retries = int(existing.get("retries") or 0)
        if existing.get("last_score") not in (None, ""):
            retries += 1

    target = OVERALL_TO_WORKFLOW_STATUS[report.overall_status]
    ok, current, _ = transition_hset(
        r,
        key=key,
        mapping={
            "status": target,
            "artwork_id": report.file_id,
            "filename": report.filename,
            "product_type": product_type,
            "retries": str(retries),
            "last_score": str(report.print_ready_score),
            "customer_notified": _flag(True),
            "customer_ready_to_proceed": _flag(report.can_proceed_to_proof),
            "updated_at": now,
        },
        context="workflow_result",
        request_id=request_id,
    )
    if ok:
        r.expire(key, ttl_sec)
        logger.info(
            "workflow_result_recorded file_id=%s artwork_id=%s status=%s previous=%s retries=%s request_id=%s",
            file_id,
            report.file_id,
            target,
            current,
            retries,
            request_id,
        )
    return ok, get_workflow(r, file_id)


# User value: lets an admin sign off on a passing file; failing or unknown files cannot be approved.
def approve_workflow(
    r,
    *,
    file_id: str,
    admin_notes: str = "",
    request_id: str = "",
) -> tuple[bool, dict | None]:
    key = workflow_key(file_id)
    if not (r.hgetall(key) or {}):
        return False, None

    ok, current, _ = transition_hset(
        r,
        key=key,
        mapping={
            "status": WORKFLOW_STATUS_APPROVED,
            "admin_approved": _flag(True),
            "admin_notes": str(admin_notes or "").strip(),
            "updated_at": _now(),
        },
        context="workflow_approve",
        request_id=request_id,
    )
    if ok:
        logger.info("workflow_approved file_id=%s previous=%s request_id=%s", file_id, current, request_id)
    return ok, get_workflow(r, file_id)
