# User value: This file lets operators roll preflight features out safely without a redeploy.
import os

BOOL_TRUE = {"1", "true", "yes", "on"}
BOOL_FALSE = {"0", "false", "no", "off"}


# User value: supports _flag so preflight behavior stays predictable across environments.
def _flag(name: str, default: bool = False) -> bool:
    raw = str(os.getenv(name, "1" if default else "0")).strip().lower()
    return raw in BOOL_TRUE


FEATURE_PREFLIGHT_WORKFLOW = _flag("FEATURE_PREFLIGHT_WORKFLOW", False)
FEATURE_DETAILED_SCORE = _flag("FEATURE_DETAILED_SCORE", True)

FLAG_NAMES = ("FEATURE_PREFLIGHT_WORKFLOW", "FEATURE_DETAILED_SCORE")


# User value: supports is_workflow_enabled so users only see tracked re-uploads and approvals when storage is configured.
def is_workflow_enabled() -> bool:
    return FEATURE_PREFLIGHT_WORKFLOW


# User value: supports is_detailed_score_enabled so the factor breakdown can be switched off if it confuses customers.
def is_detailed_score_enabled() -> bool:
    return FEATURE_DETAILED_SCORE
