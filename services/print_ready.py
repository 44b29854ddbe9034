# User value: This file turns artwork checks into a print-ready score and plain-language feedback customers can act on.
import hashlib
from typing import List

from schemas.preflight import (
    CheckCategory,
    CheckSeverity,
    FeedbackIssues,
    FileMetadata,
    PreflightCheck,
    PreflightReport,
    PreflightResult,
    PrintReadyFeedback,
    ScoreBreakdown,
    ValidationIssue,
)
from services.print_specs import RECOMMENDED_ARTWORK_FILE_SIZE_MB, MAX_ARTWORK_FILE_SIZE_MB, VALIDATION_RULES

MB = 1024 * 1024

PREFERRED_FORMATS = ("pdf", "ai", "png")
ACCEPTABLE_FORMATS = ("psd", "eps", "svg", "tiff")
PROBLEMATIC_FORMATS = ("jpg",)
FONT_EMBEDDING_FORMATS = ("pdf", "ai", "psd", "eps")
RASTER_FORMATS = ("png", "jpg", "tiff")
TRANSPARENCY_FORMATS = ("png", "pdf", "svg")

SCORE_THRESHOLDS = {
    "excellent": 90,
    "good": 75,
    "fair": 50,
    "poor": 0,
}

SCORE_LABELS = {
    "ready": "✅ Print-Ready",
    "review": "⚠️ Review Needed",
    "needs_work": "🔧 Needs Work",
    "not_ready": "❌ Not Ready",
}

SUMMARIES = {
    "ready": "Your artwork is ready for proofing!",
    "review": "Your artwork is mostly ready, but has a few minor issues to review.",
    "needs_work": "Your artwork needs some adjustments before we can proceed.",
    "not_ready": "Your artwork has issues that must be fixed before proofing.",
}

NEXT_STEPS_PROCEED = ["Review the recommendations above", 'Click "Proceed to Proof" when ready']
NEXT_STEPS_FIX = ["Fix the errors listed above", "Upload a corrected version", "We will validate it automatically"]

FIX_MINUTES_PER_ERROR = 30
FIX_MINUTES_PER_WARNING = 15

_FIELD_CATEGORIES: dict[str, CheckCategory] = {
    "file_format": "format",
    "dpi": "resolution",
    "color_space": "color",
    "dimensions": "content",
    "bleed_present": "content",
    "has_alpha": "safety",
    "file_size": "safety",
}

_LEVEL_TO_CHECK_SEVERITY: dict[str, CheckSeverity] = {
    "critical": "error",
    "warning": "warning",
    "info": "pass",
}


# User value: gives the same upload the same id so re-validations are traceable without storing anything.
def derive_file_id(metadata: FileMetadata) -> str:
    digest = hashlib.sha256(metadata.model_dump_json().encode("utf-8")).hexdigest()
    return f"file-{digest[:16]}"


def _resolution_points(dpi: float | None) -> int:
    if dpi is None:
        return 5
    if dpi >= VALIDATION_RULES["min_dpi"]:
        return 20
    if dpi >= VALIDATION_RULES["min_dpi_warning"]:
        return 15
    if dpi >= 150:
        return 8
    return 0


def _color_mode_points(color_space: str) -> int:
    return {"cmyk": 20, "rgb": 18, "grayscale": 15, "indexed": 8}.get(color_space, 0)


def _format_points(file_format: str) -> int:
    if file_format in PREFERRED_FORMATS:
        return 15
    if file_format in ACCEPTABLE_FORMATS:
        return 12
    if file_format in PROBLEMATIC_FORMATS:
        return 8
    return 0


def _bleed_and_safe_zone_points(bleed_present: bool, has_guides: bool) -> int:
    bleed = 15 if bleed_present else 5
    if has_guides:
        safe_zone = 15
    elif bleed_present:
        safe_zone = 10
    else:
        safe_zone = 5
    return int((bleed + safe_zone) / 2 + 0.5)


def _font_points(fonts, file_format: str) -> int:
    if not fonts:
        return 15
    if file_format in FONT_EMBEDDING_FORMATS:
        return 12
    if file_format in RASTER_FORMATS:
        return 8
    return 10


def _transparency_points(has_transparency: bool, file_format: str) -> int:
    if not has_transparency:
        return 10
    if file_format in TRANSPARENCY_FORMATS:
        return 9
    return 6


# User value: scores each print concern in fixed buckets so customers get a stable, explainable total.
def calculate_print_ready_score(metadata: FileMetadata) -> ScoreBreakdown:
    resolution = _resolution_points(metadata.dpi)
    color_mode = _color_mode_points(metadata.color_space)
    file_format = _format_points(metadata.file_format)
    bleed_and_safe_zone = _bleed_and_safe_zone_points(metadata.bleed_present, metadata.has_safe_zone_guides)
    fonts = _font_points(metadata.fonts, metadata.file_format)
    transparency = _transparency_points(metadata.has_transparency, metadata.file_format)

    total = resolution + color_mode + file_format + bleed_and_safe_zone + fonts + transparency
    return ScoreBreakdown(
        resolution=resolution,
        color_mode=color_mode,
        file_format=file_format,
        bleed_and_safe_zone=bleed_and_safe_zone,
        fonts=fonts,
        transparency=transparency,
        total=min(100, total),
    )


class _CheckBuilder:
    def __init__(self) -> None:
        self.checks: List[PreflightCheck] = []

    def add(
        self,
        name: str,
        category: CheckCategory,
        severity: CheckSeverity,
        message: str,
        suggestion: str | None = None,
    ) -> None:
        self.checks.append(
            PreflightCheck(
                id=f"check-{len(self.checks) + 1}",
                name=name,
                category=category,
                severity=severity,
                message=message,
                suggestion=suggestion,
                is_blocking=severity == "error",
            )
        )


# User value: lists every check, passed or not, so customers see what is already right about their file.
def generate_preflight_checks(metadata: FileMetadata) -> List[PreflightCheck]:
    b = _CheckBuilder()
    min_dpi = VALIDATION_RULES["min_dpi"]
    fmt = metadata.file_format.upper()

    dpi = metadata.dpi
    if dpi is None:
        b.add(
            "Resolution Unknown",
            "resolution",
            "warning",
            "Unable to determine image resolution",
            f"Ensure your artwork is at least {min_dpi} DPI",
        )
    elif dpi < VALIDATION_RULES["min_dpi_warning"]:
        b.add(
            "Low Resolution",
            "resolution",
            "error",
            f"Resolution is {dpi:g} DPI (minimum required: {min_dpi} DPI)",
            f"Use high-resolution artwork ({min_dpi} DPI minimum)",
        )
    elif dpi < min_dpi:
        b.add(
            "Resolution Below Optimal",
            "resolution",
            "warning",
            f"Resolution is {dpi:g} DPI (recommended: {min_dpi} DPI)",
            f"Ideally use {min_dpi}+ DPI for best results",
        )
    else:
        b.add("Resolution OK", "resolution", "pass", f"Resolution is {dpi:g} DPI - excellent for printing")

    if metadata.color_space == "rgb":
        b.add(
            "RGB Color Mode",
            "color",
            "warning",
            "File is in RGB mode (will be converted to CMYK for printing)",
            "Consider converting to CMYK for accurate color matching",
        )
    elif metadata.color_space == "cmyk":
        b.add("Color Mode OK", "color", "pass", "File is in CMYK - perfect for printing")
    elif metadata.color_space == "unknown":
        b.add(
            "Color Mode Unknown",
            "color",
            "warning",
            "Unable to determine color mode",
            "Ensure colors will print accurately",
        )

    if metadata.file_format not in VALIDATION_RULES["acceptable_formats"]:
        b.add(
            "Unsupported Format",
            "format",
            "error",
            f"Format .{metadata.file_format} is not supported",
            "Use PDF, PNG, JPG, AI, PSD, EPS, SVG, or TIFF",
        )
    elif metadata.file_format == "jpg":
        b.add(
            "JPG Format",
            "format",
            "warning",
            "JPG files may lose quality. PNG or PDF preferred",
            "Use PNG or PDF for better quality",
        )
    else:
        b.add("Format OK", "format", "pass", f"{fmt} format is suitable for printing")

    if not metadata.bleed_present:
        b.add(
            "No Bleed",
            "content",
            "error",
            "File does not have bleed area (content extends to edge)",
            f'Add 1/8" ({VALIDATION_RULES["recommended_bleed_inches"]}") bleed on all edges',
        )
    else:
        b.add("Bleed OK", "content", "pass", "File has proper bleed area")

    if not metadata.has_safe_zone_guides:
        b.add(
            "No Safe Zone Markers",
            "content",
            "warning",
            "File does not have visible safe zone guidelines",
            'Keep important content 1/4" away from edges',
        )
    else:
        b.add("Safe Zone OK", "content", "pass", "File has safe zone guidelines")

    if metadata.fonts:
        if metadata.file_format in RASTER_FORMATS:
            b.add(
                "Text is Rasterized",
                "fonts",
                "warning",
                "Text has been converted to pixels and cannot be edited",
                "This is OK for printing, but ensure spelling is correct",
            )
        elif metadata.file_format in FONT_EMBEDDING_FORMATS:
            b.add(
                "Fonts OK",
                "fonts",
                "pass",
                f"{len(metadata.fonts)} font(s) detected - ensure they are embedded or outlined",
            )
    else:
        b.add("No Fonts Detected", "fonts", "pass", "No fonts detected - all text is vectorized or rasterized")

    if metadata.has_transparency:
        if metadata.file_format in TRANSPARENCY_FORMATS:
            b.add(
                "Transparency Detected",
                "safety",
                "warning",
                "File contains transparency - this is supported for this product",
                "Ensure transparency is intentional",
            )
        else:
            b.add(
                "Transparency Issue",
                "safety",
                "error",
                f"{fmt} format does not properly support transparency",
                "Remove transparency or convert to PNG/PDF",
            )

    size_mb = metadata.file_size / MB
    if metadata.file_size > VALIDATION_RULES["max_file_size"]:
        b.add(
            "File Size Too Large",
            "safety",
            "error",
            f"File size is {size_mb:.1f} MB (maximum: {MAX_ARTWORK_FILE_SIZE_MB} MB)",
            "Compress images or split into multiple files",
        )
    elif metadata.file_size > VALIDATION_RULES["recommended_max_size"]:
        b.add(
            "Large File Size",
            "safety",
            "warning",
            f"File size is {size_mb:.1f} MB (recommended max: {RECOMMENDED_ARTWORK_FILE_SIZE_MB} MB)",
            "Consider compressing images to reduce file size",
        )

    return b.checks


def _assemble_report(
    *,
    metadata: FileMetadata,
    checks: List[PreflightCheck],
    score: int,
    breakdown: ScoreBreakdown | None,
) -> PreflightReport:
    blocking = [c for c in checks if c.is_blocking and c.severity == "error"]
    warnings = [c for c in checks if c.severity == "warning"]
    if blocking:
        overall_status = "error"
    elif warnings:
        overall_status = "warning"
    else:
        overall_status = "pass"

    return PreflightReport(
        file_id=derive_file_id(metadata),
        filename=metadata.filename,
        checks=checks,
        print_ready_score=score,
        score_breakdown=breakdown,
        overall_status=overall_status,
        can_proceed_to_proof=not blocking,
        estimated_issues=[c.message for c in blocking] + [c.message for c in warnings],
    )


# User value: bundles score, checks, and proceed/block decision into one result for the upload flow.
def generate_preflight_result(metadata: FileMetadata) -> PreflightReport:
    breakdown = calculate_print_ready_score(metadata)
    checks = generate_preflight_checks(metadata)
    return _assemble_report(metadata=metadata, checks=checks, score=breakdown.total, breakdown=breakdown)


def _issue_to_check(index: int, issue: ValidationIssue) -> PreflightCheck:
    return PreflightCheck(
        id=f"check-{index}",
        name=issue.id.replace("-", " ").title(),
        category=_FIELD_CATEGORIES.get(issue.field, "content"),
        severity=_LEVEL_TO_CHECK_SEVERITY[issue.level],
        message=issue.message,
        suggestion=issue.suggestion,
        is_blocking=issue.blocking,
        informational=issue.level == "info",
    )


# User value: lets deduction-model results reuse the same customer feedback as the print-ready score.
def report_from_preflight(result: PreflightResult) -> PreflightReport:
    issues = [*result.errors, *result.warnings, *result.notices]
    checks = [_issue_to_check(n, issue) for n, issue in enumerate(issues, start=1)]
    return _assemble_report(metadata=result.metadata, checks=checks, score=result.score, breakdown=None)


def _feedback_status(score: int) -> str:
    if score >= SCORE_THRESHOLDS["excellent"]:
        return "ready"
    if score >= SCORE_THRESHOLDS["good"]:
        return "review"
    if score >= SCORE_THRESHOLDS["fair"]:
        return "needs_work"
    return "not_ready"


def _estimated_time_to_fix(error_count: int, warning_count: int) -> str | None:
    minutes = error_count * FIX_MINUTES_PER_ERROR + warning_count * FIX_MINUTES_PER_WARNING
    if minutes <= 0:
        return None
    return f"about {minutes} minutes"


# User value: writes customer-facing copy so users know their status and exactly what to do next.
def generate_print_ready_feedback(report: PreflightReport) -> PrintReadyFeedback:
    score = report.print_ready_score
    status = _feedback_status(score)

    errors = [c for c in report.checks if c.severity == "error"]
    warnings = [c for c in report.checks if c.severity == "warning"]
    tips: List[str] = []
    for check in report.checks:
        if check.severity != "pass":
            continue
        tips.append(f"ℹ {check.message}" if check.informational else f"✓ {check.message}")

    return PrintReadyFeedback(
        score=score,
        score_label=SCORE_LABELS[status],
        status=status,
        summary=SUMMARIES[status],
        issues=FeedbackIssues(
            errors=[f"{c.name}: {c.message}" for c in errors],
            warnings=[f"{c.name}: {c.message}" for c in warnings],
            tips=tips,
        ),
        next_steps=list(NEXT_STEPS_PROCEED if report.can_proceed_to_proof else NEXT_STEPS_FIX),
        estimated_time_to_fix=_estimated_time_to_fix(len(errors), len(warnings)),
    )
