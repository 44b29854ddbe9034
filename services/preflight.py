# User value: This file gives every upload a simple pass/fail preflight score so users know at once if artwork can proceed.
from typing import List

from schemas.preflight import FileMetadata, PreflightResult, ValidationIssue
from services.preflight_rules import run_all_rules
from services.print_specs import DEFAULT_PRODUCT_TYPE, get_specification, resolve_product_type

CRITICAL_PENALTY = 20
WARNING_PENALTY = 10


# User value: turns issue counts into a bounded 0-100 score that only drops as problems are added.
def deduction_score(critical_count: int, warning_count: int) -> int:
    raw = 100 - CRITICAL_PENALTY * max(0, critical_count) - WARNING_PENALTY * max(0, warning_count)
    return max(0, min(100, raw))


# User value: validates artwork against the product's print spec; invalid files are reported, never raised.
def run_preflight_validation(metadata: FileMetadata, product_type: str | None = DEFAULT_PRODUCT_TYPE) -> PreflightResult:
    resolved = resolve_product_type(product_type)
    spec = get_specification(resolved)
    issues = run_all_rules(metadata, spec)

    errors: List[ValidationIssue] = [i for i in issues if i.level == "critical"]
    warnings: List[ValidationIssue] = [i for i in issues if i.level == "warning"]
    notices: List[ValidationIssue] = [i for i in issues if i.level == "info"]

    return PreflightResult(
        is_valid=not errors,
        score=deduction_score(len(errors), len(warnings)),
        errors=errors,
        warnings=warnings,
        notices=notices,
        metadata=metadata,
        product_type=resolved,
    )
