"""
services/scoring.py

Named scoring strategies behind one interface.

Three independent models score the same artwork:

- ``deduction``: 100 minus fixed penalties per critical issue and warning.
- ``weighted``: six weighted factor scores, capped at 40 when any critical
  issue exists.
- ``print_ready``: fixed points per bucket over global print rules, including
  a fonts factor the other two do not consider.

Callers pick one explicitly with ``get_scorer(name)``; all of them return a
``ScoreSummary`` whose findings use the unified ``Severity`` enumeration.
"""

from abc import ABC, abstractmethod
from typing import Dict, List

from schemas.preflight import FileMetadata, Finding, PreflightResult, ScoreSummary, Severity
from services.preflight import run_preflight_validation
from services.print_ready import generate_preflight_result
from services.print_specs import DEFAULT_PRODUCT_TYPE, get_specification, resolve_product_type
from services.score_calculator import calculate_detailed_score


def _findings_from_preflight(result: PreflightResult) -> List[Finding]:
    return [
        Finding(
            code=issue.id,
            severity=issue.severity,
            message=issue.message,
            field=issue.field,
            suggestion=issue.suggestion,
        )
        for issue in [*result.errors, *result.warnings, *result.notices]
    ]


def _count(findings: List[Finding], severity: Severity) -> int:
    return sum(1 for f in findings if f.severity == severity)


class BaseScorer(ABC):
    """Abstract base class for artwork scoring strategies.

    Implementations must be stateless: the same metadata and product type
    always produce the same summary.
    """

    name: str = ""

    @abstractmethod
    def evaluate(self, metadata: FileMetadata, product_type: str | None = DEFAULT_PRODUCT_TYPE) -> ScoreSummary:
        """Score one artwork file.

        Args:
            metadata: Extracted file metadata.
            product_type: Product key; unknown keys fall back to "custom".

        Returns:
            A ScoreSummary with a 0-100 score and unified findings.
        """
        raise NotImplementedError("Subclasses must implement evaluate()")


class DeductionStrategy(BaseScorer):
    """Pass/fail preflight with a deduction-based score."""

    name = "deduction"

    def evaluate(self, metadata: FileMetadata, product_type: str | None = DEFAULT_PRODUCT_TYPE) -> ScoreSummary:
        result = run_preflight_validation(metadata, product_type)
        findings = _findings_from_preflight(result)
        if result.is_valid:
            recommendation = "No blocking issues found"
        else:
            recommendation = f"Fix {len(result.errors)} critical issue(s) before printing"
        return ScoreSummary(
            strategy=self.name,
            product_type=result.product_type,
            score=result.score,
            ready_to_print=result.is_valid,
            blocking=len(result.errors),
            advisory=len(result.warnings),
            informational=len(result.notices),
            recommendation=recommendation,
            findings=findings,
        )


class WeightedFactorStrategy(BaseScorer):
    """Six-factor weighted score over the preflight issues."""

    name = "weighted"

    def evaluate(self, metadata: FileMetadata, product_type: str | None = DEFAULT_PRODUCT_TYPE) -> ScoreSummary:
        result = run_preflight_validation(metadata, product_type)
        detailed = calculate_detailed_score(result, get_specification(result.product_type))
        findings = _findings_from_preflight(result)
        return ScoreSummary(
            strategy=self.name,
            product_type=result.product_type,
            score=detailed.overall_score,
            ready_to_print=detailed.ready_to_print,
            blocking=detailed.critical_issues,
            advisory=detailed.warnings,
            informational=len(result.notices),
            recommendation=detailed.recommendation,
            findings=findings,
        )


class PrintReadyStrategy(BaseScorer):
    """Discrete per-bucket score over global print rules.

    The product type does not change the score; it is echoed back so the
    summary shape matches the other strategies.
    """

    name = "print_ready"

    def evaluate(self, metadata: FileMetadata, product_type: str | None = DEFAULT_PRODUCT_TYPE) -> ScoreSummary:
        report = generate_preflight_result(metadata)
        findings = [
            Finding(
                code=check.id,
                severity=check.display_severity,
                message=check.message,
                field=check.category,
                suggestion=check.suggestion,
            )
            for check in report.checks
        ]
        if report.can_proceed_to_proof:
            recommendation = "Ready to proceed to proof"
        else:
            recommendation = "Fix blocking issues before proofing"
        return ScoreSummary(
            strategy=self.name,
            product_type=resolve_product_type(product_type),
            score=report.print_ready_score,
            ready_to_print=report.can_proceed_to_proof,
            blocking=_count(findings, Severity.BLOCKING),
            advisory=_count(findings, Severity.ADVISORY),
            informational=_count(findings, Severity.INFORMATIONAL),
            recommendation=recommendation,
            findings=findings,
        )


SCORERS: Dict[str, BaseScorer] = {
    DeductionStrategy.name: DeductionStrategy(),
    WeightedFactorStrategy.name: WeightedFactorStrategy(),
    PrintReadyStrategy.name: PrintReadyStrategy(),
}

STRATEGY_NAMES = tuple(SCORERS.keys())


def get_scorer(name: str) -> BaseScorer:
    """Return the named strategy.

    Raises:
        ValueError: If ``name`` is not a registered strategy.
    """
    key = str(name or "").strip().lower()
    if key not in SCORERS:
        raise ValueError(f"Unknown scoring strategy: {name!r}. Expected one of {', '.join(STRATEGY_NAMES)}")
    return SCORERS[key]
