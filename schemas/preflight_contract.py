# User value: This file pins the preflight vocabulary so storefront and admin views never drift from the API.
CONTRACT_VERSION = "2026-10-19-preflight-1"

ISSUE_LEVELS = ("critical", "warning", "info")
CHECK_SEVERITIES = ("pass", "warning", "error")
DISPLAY_SEVERITIES = ("blocking", "advisory", "informational", "passed")
FEEDBACK_STATUSES = ("ready", "review", "needs_work", "not_ready")

WORKFLOW_STATUS_PENDING = "PENDING"
WORKFLOW_STATUS_PASS = "PASS"
WORKFLOW_STATUS_WARNING = "WARNING"
WORKFLOW_STATUS_FAIL = "FAIL"
WORKFLOW_STATUS_APPROVED = "APPROVED"

WORKFLOW_STATUSES = (
    WORKFLOW_STATUS_PENDING,
    WORKFLOW_STATUS_PASS,
    WORKFLOW_STATUS_WARNING,
    WORKFLOW_STATUS_FAIL,
    WORKFLOW_STATUS_APPROVED,
)

TERMINAL_WORKFLOW_STATUSES = (WORKFLOW_STATUS_APPROVED,)

APPROVABLE_WORKFLOW_STATUSES = (WORKFLOW_STATUS_PASS, WORKFLOW_STATUS_WARNING)

# Report overall_status -> workflow status.
OVERALL_TO_WORKFLOW_STATUS = {
    "pass": WORKFLOW_STATUS_PASS,
    "warning": WORKFLOW_STATUS_WARNING,
    "error": WORKFLOW_STATUS_FAIL,
}

WORKFLOW_FIELDS = (
    "file_id",
    "artwork_id",
    "filename",
    "product_type",
    "user",
    "status",
    "retries",
    "last_score",
    "customer_notified",
    "customer_ready_to_proceed",
    "admin_approved",
    "admin_notes",
    "created_at",
    "updated_at",
)

PREFLIGHT_RESULT_FIELDS = (
    "is_valid",
    "score",
    "errors",
    "warnings",
    "notices",
    "metadata",
    "product_type",
)

DETAILED_SCORE_FIELDS = (
    "overall_score",
    "factors",
    "factor_breakdown",
    "recommendation",
    "ready_to_print",
    "critical_issues",
    "warnings",
    "estimated_correction_time",
)

FEEDBACK_FIELDS = (
    "score",
    "score_label",
    "status",
    "summary",
    "issues",
    "next_steps",
    "estimated_time_to_fix",
)
