# User value: This file shapes API responses so the storefront can render preflight results without guessing.
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from schemas.preflight import (
    DetailedScore,
    PreflightReport,
    PreflightResult,
    PrintReadyFeedback,
    PrintSpecification,
    ScoreGrade,
)


class PreflightValidationResponse(BaseModel):
    # User value: returns pass/fail, factor breakdown, grade, and customer copy in one round trip.
    product_type: str
    specification: PrintSpecification
    preflight: PreflightResult
    detailed_score: Optional[DetailedScore] = None
    grade: ScoreGrade
    tips: List[str] = Field(default_factory=list)
    feedback: PrintReadyFeedback
    checked_at: str


class PrintReadyResponse(BaseModel):
    # User value: returns every named check plus customer-ready feedback for the proofing step.
    report: PreflightReport
    feedback: PrintReadyFeedback
    grade: ScoreGrade
    checked_at: str


class WorkflowRecord(BaseModel):
    # User value: shows where a file stands between upload, re-upload, and admin approval.
    file_id: str
    artwork_id: str = ""
    filename: str = ""
    product_type: str = ""
    user: str = ""
    status: Literal["PENDING", "PASS", "WARNING", "FAIL", "APPROVED"]
    retries: int = Field(default=0, ge=0)
    last_score: Optional[int] = Field(default=None, ge=0, le=100)
    customer_notified: bool = False
    customer_ready_to_proceed: bool = False
    admin_approved: bool = False
    admin_notes: str = ""
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class WorkflowResponse(BaseModel):
    workflow: WorkflowRecord
    feedback: Optional[PrintReadyFeedback] = None
