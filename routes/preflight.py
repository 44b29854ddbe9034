# User value: These endpoints give the upload flow instant preflight results so customers can fix artwork before proofing.
import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Query

from schemas.preflight import PrintSpecification, ScoreSummary
from schemas.requests import PreflightRequest
from schemas.responses import PreflightValidationResponse, PrintReadyResponse
from services.feature_flags import is_detailed_score_enabled
from services.preflight import run_preflight_validation
from services.print_ready import generate_preflight_result, generate_print_ready_feedback, report_from_preflight
from services.print_specs import get_specification, resolve_product_type
from services.score_calculator import calculate_detailed_score, get_score_grade, get_score_tips
from services.scoring import STRATEGY_NAMES, get_scorer
from utils.metrics import incr, observe_ms
from utils.request_id import get_request_id
from utils.stage_logging import log_stage

router = APIRouter(prefix="/preflight", tags=["preflight"])
logger = logging.getLogger("api.preflight")


def _checked_at() -> str:
    return datetime.now(timezone.utc).isoformat()


# User value: resolves the product and notes when an unknown product falls back to custom rules.
def _resolve(product_type: str | None) -> str:
    resolved = resolve_product_type(product_type)
    requested = str(product_type or "").strip().lower()
    if requested and requested != resolved:
        logger.warning("preflight_product_type_fallback requested=%s resolved=%s", requested, resolved)
    return resolved


# User value: groups scores into stable buckets so operators can track artwork quality trends.
def _score_bucket(score: int) -> str:
    if score >= 90:
        return "gte_90"
    if score >= 75:
        return "75_89"
    if score >= 50:
        return "50_74"
    return "lt_50"


@router.get("/specs/{product_type}", response_model=PrintSpecification)
# User value: shows the exact print requirements a customer's artwork will be checked against.
def print_specification(product_type: str):
    return get_specification(product_type)


@router.post("/validate", response_model=PreflightValidationResponse)
# User value: runs pass/fail preflight plus the weighted breakdown so customers see both the verdict and the why.
async def validate_artwork(payload: PreflightRequest):
    started = time.perf_counter()
    request_id = get_request_id() or ""
    product_type = _resolve(payload.product_type)
    spec = get_specification(product_type)

    result = run_preflight_validation(payload.metadata, product_type)
    detailed = calculate_detailed_score(result, spec) if is_detailed_score_enabled() else None
    display_score = detailed.overall_score if detailed is not None else result.score

    report = report_from_preflight(result)
    feedback = generate_print_ready_feedback(report)

    log_stage(
        file_id=report.file_id,
        stage="PREFLIGHT_VALIDATE",
        event="COMPLETED",
        product_type=product_type,
        strategy="deduction",
        request_id=request_id,
        is_valid=result.is_valid,
        score=result.score,
        detailed_score=detailed.overall_score if detailed is not None else None,
        critical_count=len(result.errors),
        warning_count=len(result.warnings),
        info_count=len(result.notices),
    )
    outcome = "valid" if result.is_valid else "invalid"
    incr("preflight.validations_total", product_type=product_type, outcome=outcome)
    incr("preflight.issues_total", amount=len(result.errors) + len(result.warnings), product_type=product_type)
    incr("preflight.score_bucket_total", bucket=_score_bucket(display_score), product_type=product_type)
    observe_ms("preflight.validation_latency_ms", (time.perf_counter() - started) * 1000.0, product_type=product_type)

    return PreflightValidationResponse(
        product_type=product_type,
        specification=spec,
        preflight=result,
        detailed_score=detailed,
        grade=get_score_grade(display_score),
        tips=get_score_tips(display_score),
        feedback=feedback,
        checked_at=_checked_at(),
    )


@router.post("/print-ready", response_model=PrintReadyResponse)
# User value: lists every named check with customer copy so the proofing page can show what passed and what to fix.
async def print_ready_report(payload: PreflightRequest):
    request_id = get_request_id() or ""
    product_type = _resolve(payload.product_type)

    report = generate_preflight_result(payload.metadata)
    feedback = generate_print_ready_feedback(report)

    log_stage(
        file_id=report.file_id,
        stage="PREFLIGHT_PRINT_READY",
        event="COMPLETED",
        product_type=product_type,
        strategy="print_ready",
        request_id=request_id,
        score=report.print_ready_score,
        overall_status=report.overall_status,
        can_proceed=report.can_proceed_to_proof,
        check_count=len(report.checks),
    )
    incr("preflight.print_ready_total", status=feedback.status, product_type=product_type)

    return PrintReadyResponse(
        report=report,
        feedback=feedback,
        grade=get_score_grade(report.print_ready_score),
        checked_at=_checked_at(),
    )


@router.post("/score", response_model=ScoreSummary)
# User value: lets callers pick a scoring model explicitly and still get one consistent summary shape.
async def score_artwork(payload: PreflightRequest, strategy: str = Query(default="deduction")):
    try:
        scorer = get_scorer(strategy)
    except ValueError:
        raise HTTPException(
            status_code=400,
            detail={
                "error_code": "UNKNOWN_STRATEGY",
                "error_message": f"Unknown scoring strategy '{strategy}'. Use one of: {', '.join(STRATEGY_NAMES)}",
            },
        )

    product_type = _resolve(payload.product_type)
    summary = scorer.evaluate(payload.metadata, product_type)
    incr("preflight.strategy_scores_total", strategy=scorer.name, product_type=product_type)
    return summary
