"""
Data Transfer Objects for ODS instance settings endpoints.
Defines request and response schemas for bulk load and learning standards.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class CredentialsRequest(BaseModel):
    """API key and secret submitted from a settings form."""
    api_key: str = Field(..., min_length=1, max_length=200, description="API key")
    api_secret: str = Field(..., min_length=1, max_length=200, description="API secret")

    @field_validator('api_key', 'api_secret')
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        if not v or v.strip() == "":
            raise ValueError("Field cannot be empty")
        return v.strip()


class SaveBulkUploadCredentialsRequest(CredentialsRequest):
    """Request schema for storing bulk load credentials."""
    pass


class LearningStandardsRequest(CredentialsRequest):
    """Request schema for starting a learning standards sync."""
    pass


class MessageResponse(BaseModel):
    """Confirmation message."""
    message: str


class BulkFileUploadModel(BaseModel):
    """Bulk load form and upload status, rebuilt per request."""
    cloud_ods_environment: str
    api_key: str = ""
    api_secret: str = ""
    credentials_saved: bool = False
    max_file_size_bytes: int
    bulk_file_type: Optional[str] = None
    is_job_running: bool = False
    is_same_ods_instance: bool = False
    job_id: Optional[str] = None


class LearningStandardsSyncResponse(BaseModel):
    """Response schema for a learning standards sync request."""
    enqueued: bool
    is_job_running: bool
    job_id: Optional[str] = None


class JobStatusResponse(BaseModel):
    """Response schema for job status polling."""
    job_type: str
    is_job_running: bool
    is_same_ods_instance: bool
    job_id: Optional[str] = None
    status: Optional[str] = None
    ods_instance_id: Optional[int] = None
    started_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    error_message: Optional[str] = None
    expires_at: Optional[datetime] = None
