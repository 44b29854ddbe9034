# User value: This file explains artwork quality factor by factor so users see which fix improves their score most.
import math
from typing import List

from schemas.preflight import DetailedScore, PreflightResult, PrintSpecification, ScoreFactor, ScoreGrade
from services.print_specs import PIXELS_PER_INCH

# Weights must sum to 1.0.
SCORE_WEIGHTS = {
    "resolution": 0.25,
    "color_space": 0.15,
    "dimensions": 0.20,
    "bleed": 0.15,
    "format": 0.15,
    "transparency": 0.10,
}

FACTOR_NAMES = {
    "resolution": "Resolution (DPI)",
    "color_space": "Color Space",
    "dimensions": "Dimensions",
    "bleed": "Bleed",
    "format": "File Format",
    "transparency": "Transparency",
}

CRITICAL_SCORE_CAP = 40
UNKNOWN_RESOLUTION_SCORE = 25.0

MINUTES_PER_CRITICAL = 30
MINUTES_PER_WARNING = 15
MINUTES_PER_ISSUE = 20
ACCEPTABLE_BASE_MINUTES = 60


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# User value: rewards artwork at or near the recommended DPI and scales down smoothly below it.
def calculate_resolution_score(dpi: float | None, spec: PrintSpecification) -> float:
    if dpi is None:
        return UNKNOWN_RESOLUTION_SCORE
    if dpi >= spec.recommended_dpi:
        return max(0.0, min(100.0, 100.0 - (dpi - spec.recommended_dpi) * 0.01))
    if dpi >= spec.min_dpi:
        span = spec.recommended_dpi - spec.min_dpi
        if span <= 0:
            return 100.0
        return (dpi - spec.min_dpi) / span * 100.0
    return dpi / spec.min_dpi * 50.0


def calculate_color_space_score(color_space: str, spec: PrintSpecification, has_errors: bool) -> float:
    if has_errors:
        return 0.0
    if color_space == spec.preferred_color_space:
        return 100.0
    if color_space == "rgb" and spec.preferred_color_space == "cmyk":
        return 70.0
    if color_space == "grayscale":
        return 50.0
    return 30.0


# User value: scores how close the artwork is to the ordered size so near-misses are not punished like bad files.
def calculate_dimension_score(width: int, height: int, spec: PrintSpecification) -> float:
    width_ratio = abs(width / PIXELS_PER_INCH - spec.width) / spec.width
    height_ratio = abs(height / PIXELS_PER_INCH - spec.height) / spec.height
    avg_ratio = (width_ratio + height_ratio) / 2

    if avg_ratio < 0.05:
        return 100.0
    if avg_ratio < 0.10:
        return 90.0
    if avg_ratio < 0.20:
        return 70.0
    if avg_ratio < 0.50:
        return 40.0
    return max(0.0, 50.0 - avg_ratio * 50.0)


def calculate_bleed_score(bleed_present: bool) -> float:
    return 100.0 if bleed_present else 50.0


def calculate_format_score(file_format: str, allowed_formats) -> float:
    if file_format not in allowed_formats:
        return 0.0
    if file_format in ("pdf", "ai", "psd"):
        return 100.0
    if file_format in ("png", "jpg"):
        return 80.0
    if file_format == "svg":
        return 60.0
    return 40.0


def calculate_transparency_score(has_alpha: bool, file_format: str) -> float:
    if not has_alpha:
        return 100.0
    if file_format == "png":
        return 90.0
    if file_format == "pdf":
        return 70.0
    if file_format == "jpg":
        return 0.0
    if file_format in ("ai", "psd"):
        return 85.0
    return 50.0


# User value: picks advice and a fix-time estimate from the score band so users can plan their next step.
def _recommendation(score: int, critical: int, warnings: int) -> tuple[str, bool, int]:
    if critical > 0:
        return (f"Fix {critical} critical issue(s) before printing", False, critical * MINUTES_PER_CRITICAL)
    if score >= 90:
        return ("Ready to print with minimal adjustments needed", True, 0)
    if score >= 75:
        return ("Good quality, but addressing warnings will improve results", True, warnings * MINUTES_PER_WARNING)
    if score >= 60:
        return (
            "Acceptable for print, but significant improvements recommended",
            True,
            warnings * MINUTES_PER_WARNING + ACCEPTABLE_BASE_MINUTES,
        )
    return ("Multiple issues should be corrected before printing", False, (critical + warnings) * MINUTES_PER_ISSUE)


def calculate_detailed_score(preflight_result: PreflightResult, spec: PrintSpecification) -> DetailedScore:
    """Combine six weighted factor scores into one 0-100 print-readiness score.

    Any critical issue in ``preflight_result`` caps the overall score at 40,
    whatever the weighted sum says.
    """
    metadata = preflight_result.metadata
    errors = preflight_result.errors
    warnings = preflight_result.warnings

    color_space_error = any(e.field == "color_space" for e in errors)
    sub_scores = {
        "resolution": calculate_resolution_score(metadata.dpi, spec),
        "color_space": calculate_color_space_score(metadata.color_space, spec, color_space_error),
        "dimensions": calculate_dimension_score(metadata.width, metadata.height, spec),
        "bleed": calculate_bleed_score(metadata.bleed_present),
        "format": calculate_format_score(metadata.file_format, spec.allowed_formats),
        "transparency": calculate_transparency_score(metadata.has_alpha, metadata.file_format),
    }

    factors: List[ScoreFactor] = [
        ScoreFactor(
            key=key,
            name=FACTOR_NAMES[key],
            weight=weight,
            score=sub_scores[key],
            impact=weight * sub_scores[key] / 100.0,
        )
        for key, weight in SCORE_WEIGHTS.items()
    ]

    overall = _round_half_up(sum(f.impact for f in factors) * 100.0)
    overall = max(0, min(100, overall))
    if errors:
        overall = min(overall, CRITICAL_SCORE_CAP)

    recommendation, ready, minutes = _recommendation(overall, len(errors), len(warnings))

    return DetailedScore(
        overall_score=overall,
        factors=factors,
        factor_breakdown=sub_scores,
        recommendation=recommendation,
        ready_to_print=ready,
        critical_issues=len(errors),
        warnings=len(warnings),
        estimated_correction_time=minutes,
    )


# User value: turns a score into a familiar letter grade for dashboards.
def get_score_grade(score: float) -> ScoreGrade:
    if score >= 95:
        return ScoreGrade(grade="A+", label="Excellent", color="emerald")
    if score >= 90:
        return ScoreGrade(grade="A", label="Very Good", color="green")
    if score >= 80:
        return ScoreGrade(grade="B", label="Good", color="blue")
    if score >= 70:
        return ScoreGrade(grade="C", label="Fair", color="yellow")
    if score >= 60:
        return ScoreGrade(grade="D", label="Poor", color="orange")
    return ScoreGrade(grade="F", label="Unacceptable", color="red")


# User value: suggests next actions that match how far the file is from print-ready.
def get_score_tips(score: float) -> List[str]:
    tips: List[str] = []
    if score < 60:
        tips.append("Consider starting over with a new file at proper specifications")
    if score < 75:
        tips.append("Use design software to make corrections rather than online tools")
    if score < 85:
        tips.append("Double-check your file against the print requirements checklist")
    if score < 90:
        tips.append("Review the warnings and implement suggestions")
    else:
        tips.append("Your file is excellent! Ready for print production")
    return tips
