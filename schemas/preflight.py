# User value: This file defines the artwork metadata and result shapes so every preflight check speaks the same language.
from enum import Enum
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

FileFormat = Literal["pdf", "png", "jpg", "svg", "ai", "psd"]
ColorSpace = Literal["rgb", "cmyk", "grayscale", "lab", "indexed", "unknown"]
IssueLevel = Literal["critical", "warning", "info"]
CheckSeverity = Literal["pass", "warning", "error"]
CheckCategory = Literal["resolution", "color", "format", "content", "fonts", "safety"]
OverallStatus = Literal["pass", "warning", "error"]
FeedbackStatus = Literal["ready", "review", "needs_work", "not_ready"]

FILE_FORMATS: Tuple[str, ...] = ("pdf", "png", "jpg", "svg", "ai", "psd")
COLOR_SPACES: Tuple[str, ...] = ("rgb", "cmyk", "grayscale", "lab", "indexed", "unknown")

_FORMAT_ALIASES = {"jpeg": "jpg"}


class Severity(str, Enum):
    """Display severity shared by every scoring strategy."""

    BLOCKING = "blocking"
    ADVISORY = "advisory"
    INFORMATIONAL = "informational"
    PASSED = "passed"


_LEVEL_TO_SEVERITY = {
    "critical": Severity.BLOCKING,
    "error": Severity.BLOCKING,
    "warning": Severity.ADVISORY,
    "info": Severity.INFORMATIONAL,
    "pass": Severity.PASSED,
}


# User value: maps either severity vocabulary onto one set so the UI renders issues consistently.
def to_severity(level: str) -> Severity:
    return _LEVEL_TO_SEVERITY[str(level).strip().lower()]


class FileMetadata(BaseModel):
    # User value: captures what was extracted from an upload so checks never need to re-read the file.
    model_config = ConfigDict(frozen=True)

    filename: str = Field(..., min_length=1)
    file_format: FileFormat
    file_size: int = Field(..., ge=0)
    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    dpi: Optional[float] = Field(default=None, gt=0)
    color_space: ColorSpace = "unknown"
    has_alpha: bool = False
    bleed_present: bool = False
    has_safe_zone_guides: bool = False
    fonts: Tuple[str, ...] = ()
    has_transparency: bool = False

    @field_validator("file_format", mode="before")
    @classmethod
    def _normalize_format(cls, value):
        fmt = str(value or "").strip().lower().lstrip(".")
        return _FORMAT_ALIASES.get(fmt, fmt)

    @field_validator("color_space", mode="before")
    @classmethod
    def _normalize_color_space(cls, value):
        if value is None:
            return "unknown"
        return str(value).strip().lower() or "unknown"


class BleedRequirements(BaseModel):
    model_config = ConfigDict(frozen=True)

    top: float = Field(default=0.125, ge=0)
    right: float = Field(default=0.125, ge=0)
    bottom: float = Field(default=0.125, ge=0)
    left: float = Field(default=0.125, ge=0)


class PrintSpecification(BaseModel):
    # User value: describes what a product needs so artwork is judged against the right target.
    model_config = ConfigDict(frozen=True)

    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    min_dpi: float = Field(..., gt=0)
    max_dpi: float = Field(..., gt=0)
    recommended_dpi: float = Field(..., gt=0)
    bleed: BleedRequirements = Field(default_factory=BleedRequirements)
    allowed_formats: Tuple[FileFormat, ...]
    preferred_color_space: ColorSpace = "cmyk"
    requires_cmyk: bool = False

    @model_validator(mode="after")
    def _check_dpi_order(self):
        if not (self.min_dpi <= self.recommended_dpi <= self.max_dpi):
            raise ValueError("min_dpi <= recommended_dpi <= max_dpi must hold")
        return self


class ValidationIssue(BaseModel):
    # User value: one actionable finding so users know exactly what to fix and whether it blocks printing.
    model_config = ConfigDict(frozen=True)

    id: str
    level: IssueLevel
    message: str
    field: str
    suggestion: Optional[str] = None

    @computed_field
    @property
    def blocking(self) -> bool:
        return self.level == "critical"

    @computed_field
    @property
    def severity(self) -> Severity:
        return to_severity(self.level)


class PreflightResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    score: int = Field(..., ge=0, le=100)
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)
    notices: List[ValidationIssue] = Field(default_factory=list)
    metadata: FileMetadata
    product_type: str


class ScoreFactor(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    weight: float
    score: float
    impact: float


class DetailedScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(..., ge=0, le=100)
    factors: List[ScoreFactor]
    factor_breakdown: Dict[str, float]
    recommendation: str
    ready_to_print: bool
    critical_issues: int = Field(..., ge=0)
    warnings: int = Field(..., ge=0)
    estimated_correction_time: int = Field(..., ge=0)


class ScoreGrade(BaseModel):
    model_config = ConfigDict(frozen=True)

    grade: str
    label: str
    color: str


class ScoreBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    resolution: int = Field(..., ge=0, le=20)
    color_mode: int = Field(..., ge=0, le=20)
    file_format: int = Field(..., ge=0, le=15)
    bleed_and_safe_zone: int = Field(..., ge=0, le=20)
    fonts: int = Field(..., ge=0, le=15)
    transparency: int = Field(..., ge=0, le=10)
    total: int = Field(..., ge=0, le=100)


class PreflightCheck(BaseModel):
    # User value: a named pass/warning/error check so customers see what passed as well as what failed.
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: CheckCategory
    severity: CheckSeverity
    message: str
    suggestion: Optional[str] = None
    is_blocking: bool = False
    informational: bool = False

    @property
    def display_severity(self) -> Severity:
        if self.informational:
            return Severity.INFORMATIONAL
        return to_severity(self.severity)


class PreflightReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_id: str
    filename: str
    checks: List[PreflightCheck]
    print_ready_score: int = Field(..., ge=0, le=100)
    score_breakdown: Optional[ScoreBreakdown] = None
    overall_status: OverallStatus
    can_proceed_to_proof: bool
    estimated_issues: List[str] = Field(default_factory=list)


class FeedbackIssues(BaseModel):
    model_config = ConfigDict(frozen=True)

    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)


class PrintReadyFeedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100)
    score_label: str
    status: FeedbackStatus
    summary: str
    issues: FeedbackIssues
    next_steps: List[str]
    estimated_time_to_fix: Optional[str] = None


class Finding(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    severity: Severity
    message: str
    field: Optional[str] = None
    suggestion: Optional[str] = None


class ScoreSummary(BaseModel):
    # User value: one strategy-neutral answer so callers can swap scoring models without changing the UI.
    model_config = ConfigDict(frozen=True)

    strategy: str
    product_type: str
    score: int = Field(..., ge=0, le=100)
    ready_to_print: bool
    blocking: int = Field(default=0, ge=0)
    advisory: int = Field(default=0, ge=0)
    informational: int = Field(default=0, ge=0)
    recommendation: str = ""
    findings: List[Finding] = Field(default_factory=list)
