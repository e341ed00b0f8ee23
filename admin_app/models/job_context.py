"""
Units of work submitted to the background job runner.
Contexts are immutable once constructed.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class JobType(str, Enum):
    """Background job families. Each type runs one job at a time."""
    BULK_UPLOAD = "BulkUploadJob"
    LEARNING_STANDARDS = "LearningStandardsJob"


class JobContext(BaseModel):
    """Fields shared by every job context."""
    model_config = ConfigDict(frozen=True)

    environment: str
    ods_instance_id: int

    @property
    def job_type(self) -> JobType:
        raise NotImplementedError


class BulkUploadJobContext(JobContext):
    """Everything the bulk load worker needs to import one data directory."""
    data_directory_full_path: str
    api_base_url: str
    oauth_url: str
    metadata_url: str
    dependencies_url: str
    client_key: str
    client_secret: str
    schema_path: str
    max_simultaneous_requests: int = Field(..., ge=1)

    @property
    def job_type(self) -> JobType:
        return JobType.BULK_UPLOAD


class LearningStandardsJobContext(JobContext):
    """Learning standards sync against one ODS API."""
    api_url: str
    school_year: Optional[int] = None

    @property
    def job_type(self) -> JobType:
        return JobType.LEARNING_STANDARDS
