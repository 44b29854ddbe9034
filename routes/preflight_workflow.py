# User value: These endpoints track artwork through re-uploads and admin sign-off so customers and staff share one status.
import redis
from fastapi import APIRouter, Depends, Header, HTTPException

from auth import verify_token
from config import REDIS_URL
from schemas.requests import PreflightRequest, WorkflowApprovalRequest
from schemas.responses import WorkflowRecord, WorkflowResponse
from services.feature_flags import is_workflow_enabled
from services.preflight_workflow import approve_workflow, get_workflow, normalize_file_id, record_preflight_result
from services.print_ready import generate_preflight_result, generate_print_ready_feedback
from services.print_specs import resolve_product_type
from utils.metrics import incr
from utils.request_id import get_request_id, set_file_id
from utils.stage_logging import log_stage

router = APIRouter(prefix="/preflight/workflows", tags=["preflight-workflow"])

r = redis.Redis.from_url(REDIS_URL, decode_responses=True)


def _require_enabled() -> None:
    if not is_workflow_enabled():
        raise HTTPException(
            status_code=404,
            detail={
                "error_code": "FEATURE_DISABLED",
                "error_message": "Preflight workflow tracking is disabled",
            },
        )


def _store_unavailable(exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=503,
        detail={
            "error_code": "INFRA_REDIS",
            "error_message": f"Workflow store unavailable: {exc.__class__.__name__}",
        },
    )


# User value: rejects upload ids that would be empty once made safe, so records never collide on a blank key.
def _resolve_file_id(raw: str) -> str:
    file_id = normalize_file_id(raw)
    if not file_id:
        raise HTTPException(
            status_code=400,
            detail={
                "error_code": "INVALID_FILE_ID",
                "error_message": "file_id must contain letters, digits, or . _ : -",
            },
        )
    set_file_id(file_id)
    return file_id


def _not_found(file_id: str) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={
            "error_code": "WORKFLOW_NOT_FOUND",
            "error_message": f"No preflight workflow for {file_id}",
        },
    )


@router.post("/{file_id}/results", response_model=WorkflowResponse)
# User value: validates each upload into the customer's file slot so corrected re-uploads are counted on one record.
async def submit_artwork(
    file_id: str,
    payload: PreflightRequest,
    token: str = Depends(verify_token),
    x_customer_id: str | None = Header(default=None),
):
    _require_enabled()
    file_id = _resolve_file_id(file_id)
    request_id = get_request_id() or ""
    product_type = resolve_product_type(payload.product_type)

    report = generate_preflight_result(payload.metadata)
    feedback = generate_print_ready_feedback(report)

    try:
        ok, record = record_preflight_result(
            r,
            file_id=file_id,
            report=report,
            product_type=product_type,
            user=str(x_customer_id or "").strip(),
            request_id=request_id,
        )
    except redis.RedisError as exc:
        raise _store_unavailable(exc)

    if not ok:
        raise HTTPException(
            status_code=409,
            detail={
                "error_code": "WORKFLOW_STATE_CONFLICT",
                "error_message": "This file was already approved; start a new upload instead",
            },
        )

    log_stage(
        file_id=file_id,
        stage="PREFLIGHT_WORKFLOW",
        event="RECORDED",
        artwork_id=report.file_id,
        product_type=product_type,
        strategy="print_ready",
        request_id=request_id,
        status=record.get("status"),
        retries=record.get("retries"),
        score=report.print_ready_score,
    )
    incr("preflight.workflow_results_total", status=record.get("status", ""), product_type=product_type)

    return WorkflowResponse(workflow=WorkflowRecord(**record), feedback=feedback)


@router.get("/{file_id}", response_model=WorkflowResponse)
# User value: shows the current preflight status of a file for the order and proof pages.
async def workflow_status(file_id: str, token: str = Depends(verify_token)):
    _require_enabled()
    file_id = _resolve_file_id(file_id)
    try:
        record = get_workflow(r, file_id)
    except redis.RedisError as exc:
        raise _store_unavailable(exc)
    if record is None:
        raise _not_found(file_id)
    return WorkflowResponse(workflow=WorkflowRecord(**record))


@router.post("/{file_id}/approve", response_model=WorkflowResponse)
# User value: lets staff approve passing artwork; failing files stay blocked until the customer re-uploads.
async def approve_artwork(file_id: str, payload: WorkflowApprovalRequest, token: str = Depends(verify_token)):
    _require_enabled()
    file_id = _resolve_file_id(file_id)
    request_id = get_request_id() or ""
    try:
        ok, record = approve_workflow(r, file_id=file_id, admin_notes=payload.admin_notes, request_id=request_id)
    except redis.RedisError as exc:
        raise _store_unavailable(exc)

    if record is None:
        raise _not_found(file_id)
    if not ok:
        raise HTTPException(
            status_code=409,
            detail={
                "error_code": "WORKFLOW_STATE_CONFLICT",
                "error_message": f"Cannot approve a file in status {record.get('status')}",
            },
        )

    log_stage(
        file_id=file_id,
        stage="PREFLIGHT_WORKFLOW",
        event="APPROVED",
        request_id=request_id,
        status=record.get("status"),
    )
    incr("preflight.workflow_approvals_total")
    return WorkflowResponse(workflow=WorkflowRecord(**record))
