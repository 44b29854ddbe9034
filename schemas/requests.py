# User value: This file validates incoming preflight requests so malformed metadata is rejected before scoring.
from pydantic import BaseModel, Field

from config import DEFAULT_PRODUCT_TYPE
from schemas.preflight import FileMetadata


class PreflightRequest(BaseModel):
    # User value: pairs extracted file metadata with the product it will be printed as.
    metadata: FileMetadata
    product_type: str = Field(default=DEFAULT_PRODUCT_TYPE, max_length=64)


class WorkflowApprovalRequest(BaseModel):
    # User value: lets admins leave a note that travels with the approval.
    admin_notes: str = Field(default="", max_length=2000)
