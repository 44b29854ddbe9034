# User value: This file publishes the preflight vocabulary so client views stay in step with the API.
from fastapi import APIRouter

from schemas.preflight_contract import (
    APPROVABLE_WORKFLOW_STATUSES,
    CHECK_SEVERITIES,
    CONTRACT_VERSION,
    DETAILED_SCORE_FIELDS,
    DISPLAY_SEVERITIES,
    FEEDBACK_FIELDS,
    FEEDBACK_STATUSES,
    ISSUE_LEVELS,
    PREFLIGHT_RESULT_FIELDS,
    TERMINAL_WORKFLOW_STATUSES,
    WORKFLOW_FIELDS,
    WORKFLOW_STATUSES,
)
from services.feature_flags import is_detailed_score_enabled, is_workflow_enabled
from services.print_specs import DEFAULT_PRODUCT_TYPE, PRODUCT_TYPES
from services.scoring import STRATEGY_NAMES

router = APIRouter()


@router.get("/contract/preflight")
# User value: keeps severity names, statuses, and field sets consistent across storefront and admin views.
def preflight_contract():
    return {
        "contract_version": CONTRACT_VERSION,
        "product_types": list(PRODUCT_TYPES),
        "fallback_product_type": DEFAULT_PRODUCT_TYPE,
        "scoring_strategies": list(STRATEGY_NAMES),
        "issue_levels": list(ISSUE_LEVELS),
        "check_severities": list(CHECK_SEVERITIES),
        "display_severities": list(DISPLAY_SEVERITIES),
        "feedback_statuses": list(FEEDBACK_STATUSES),
        "workflow_statuses": list(WORKFLOW_STATUSES),
        "terminal_workflow_statuses": list(TERMINAL_WORKFLOW_STATUSES),
        "approvable_workflow_statuses": list(APPROVABLE_WORKFLOW_STATUSES),
        "fields": {
            "preflight_result": list(PREFLIGHT_RESULT_FIELDS),
            "detailed_score": list(DETAILED_SCORE_FIELDS),
            "feedback": list(FEEDBACK_FIELDS),
            "workflow": list(WORKFLOW_FIELDS),
        },
        "capabilities": {
            "workflow_enabled": is_workflow_enabled(),
            "detailed_score_enabled": is_detailed_score_enabled(),
        },
    }
