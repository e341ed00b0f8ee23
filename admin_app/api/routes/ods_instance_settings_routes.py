"""
ODS instance settings routes.
Handles bulk load, bulk load credentials and learning standards sync.
"""
from fastapi import APIRouter, Depends, Form, Request, Response, status
from starlette.datastructures import UploadFile
from typing import List, Optional
from admin_app.core.dependencies import get_bulk_upload_service, get_job_runner, get_learning_standards_service
from admin_app.core.instance_context import get_instance_context
from admin_app.models.dto.ods_instance_settings_dto import (
    BulkFileUploadModel,
    JobStatusResponse,
    LearningStandardsRequest,
    LearningStandardsSyncResponse,
    MessageResponse,
    SaveBulkUploadCredentialsRequest
)
from admin_app.models.file_upload import BulkFile
from admin_app.models.instance_context import InstanceContext
from admin_app.models.job_context import JobType
from admin_app.services.bulk_upload_service import BulkUploadService
from admin_app.services.job_runner import JobRunner
from admin_app.services.learning_standards_service import LearningStandardsService

router = APIRouter(prefix="/v1/api/ods-instance-settings")


def _to_bulk_file(upload: UploadFile) -> BulkFile:
    length = upload.size
    if length is None:
        upload.file.seek(0, 2)
        length = upload.file.tell()
        upload.file.seek(0)
    return BulkFile(filename=upload.filename, length=length, stream=upload.file)


async def get_bulk_files(request: Request) -> List[BulkFile]:
    """
    Collect the files posted as bulk_files.

    A file input left blank still posts a part with no name and no content.
    Such parts, and parts that arrive as plain text, are skipped.
    """
    form = await request.form()
    bulk_files = []
    for value in form.getlist("bulk_files"):
        if not isinstance(value, UploadFile):
            continue
        bulk_file = _to_bulk_file(value)
        if not bulk_file.filename and bulk_file.length == 0:
            continue
        bulk_files.append(bulk_file)
    return bulk_files


def _job_status(job_runner: JobRunner, job_type: JobType, instance: InstanceContext) -> JobStatusResponse:
    job_status = job_runner.get_status(job_type)
    if job_status is None:
        return JobStatusResponse(job_type=job_type.value, is_job_running=False, is_same_ods_instance=False)

    return JobStatusResponse(
        job_type=job_type.value,
        is_job_running=job_status.is_running,
        is_same_ods_instance=job_status.ods_instance_id == instance.id,
        job_id=job_status.job_id,
        status=job_status.status,
        ods_instance_id=job_status.ods_instance_id,
        started_at=job_status.started_at,
        updated_at=job_status.updated_at,
        error_message=job_status.error_message,
        expires_at=job_status.expires_at
    )


@router.get("/bulk-load", tags=["Bulk Load"], response_model=BulkFileUploadModel)
async def bulk_load(
    instance: InstanceContext = Depends(get_instance_context),
    bulk_upload_service: BulkUploadService = Depends(get_bulk_upload_service)
):
    """
    Get the bulk load form for the current ODS instance.
    """
    return bulk_upload_service.get_bulk_load_form(instance)


@router.post(
    "/bulk-file-upload",
    tags=["Bulk Load"],
    response_model=BulkFileUploadModel,
    responses={204: {"description": "No file was uploaded"}}
)
async def bulk_file_upload(
    bulk_file_type: Optional[str] = Form(None, description="Interchange type of the file, e.g. Student"),
    files: List[BulkFile] = Depends(get_bulk_files),
    instance: InstanceContext = Depends(get_instance_context),
    bulk_upload_service: BulkUploadService = Depends(get_bulk_upload_service)
):
    """
    Upload a bulk data file and start a bulk load job.

    - **bulk_files**: single XML interchange file (multipart)
    - **bulk_file_type**: interchange type used to name the stored file

    The file is imported asynchronously. If a bulk load is already running
    no new job is started and the response reports the running job.
    """
    result = bulk_upload_service.bulk_file_upload(instance, files, bulk_file_type)
    if result is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return result


@router.get("/bulk-load/status", tags=["Bulk Load"], response_model=JobStatusResponse)
async def bulk_load_status(
    instance: InstanceContext = Depends(get_instance_context),
    job_runner: JobRunner = Depends(get_job_runner)
):
    """
    Get the state of the latest bulk load job.
    """
    return _job_status(job_runner, JobType.BULK_UPLOAD, instance)


@router.post("/bulk-load-credentials", tags=["Bulk Load"], response_model=MessageResponse)
async def save_bulk_load_credentials(
    request: SaveBulkUploadCredentialsRequest,
    instance: InstanceContext = Depends(get_instance_context),
    bulk_upload_service: BulkUploadService = Depends(get_bulk_upload_service)
):
    """
    Store the API key and secret the bulk load job authenticates with.
    """
    return bulk_upload_service.save_bulk_load_credentials(instance, request.api_key, request.api_secret)


@router.post("/bulk-load-credentials/reset", tags=["Bulk Load"], response_model=MessageResponse)
async def reset_credentials(
    instance: InstanceContext = Depends(get_instance_context),
    bulk_upload_service: BulkUploadService = Depends(get_bulk_upload_service)
):
    """
    Remove the stored bulk load credentials.
    """
    return bulk_upload_service.reset_credentials(instance)


@router.post("/learning-standards", tags=["Learning Standards"], response_model=LearningStandardsSyncResponse)
async def learning_standards(
    request: LearningStandardsRequest,
    instance: InstanceContext = Depends(get_instance_context),
    learning_standards_service: LearningStandardsService = Depends(get_learning_standards_service)
):
    """
    Store Academic Benchmarks credentials and start a learning standards sync.

    - **api_key**: Academic Benchmarks API key
    - **api_secret**: Academic Benchmarks API secret
    """
    return learning_standards_service.sync(instance, request.api_key, request.api_secret)


@router.get("/learning-standards/status", tags=["Learning Standards"], response_model=JobStatusResponse)
async def learning_standards_status(
    instance: InstanceContext = Depends(get_instance_context),
    job_runner: JobRunner = Depends(get_job_runner)
):
    """
    Get the state of the latest learning standards sync.
    """
    return _job_status(job_runner, JobType.LEARNING_STANDARDS, instance)
