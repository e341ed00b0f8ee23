"""
Dependency injection container for FastAPI.
Provides singleton-like behavior for services and repositories.
"""
from functools import lru_cache
from admin_app.repositories.secret_configuration_repository import SecretConfigurationRepository
from admin_app.repositories.job_status_repository import JobStatusRepository
from admin_app.repositories.job_queue_repository import JobQueueRepository
from admin_app.services.connection_information_service import ApiConnectionInformationProvider
from admin_app.services.file_service import FileService
from admin_app.services.ods_version_service import InferOdsApiVersion
from admin_app.services.job_runner import JobRunner
from admin_app.services.bulk_upload_service import BulkUploadService
from admin_app.services.learning_standards_service import LearningStandardsService, LearningStandardsSetupCommand


@lru_cache()
def get_secret_configuration_repository() -> SecretConfigurationRepository:
    """Get SecretConfigurationRepository singleton instance."""
    return SecretConfigurationRepository()


@lru_cache()
def get_job_status_repository() -> JobStatusRepository:
    """Get JobStatusRepository singleton instance."""
    return JobStatusRepository()


@lru_cache()
def get_job_queue_repository() -> JobQueueRepository:
    """Get JobQueueRepository singleton instance."""
    return JobQueueRepository()


@lru_cache()
def get_file_service() -> FileService:
    """Get FileService singleton instance."""
    return FileService()


@lru_cache()
def get_infer_ods_api_version() -> InferOdsApiVersion:
    """Get InferOdsApiVersion singleton instance; it caches versions per URL."""
    return InferOdsApiVersion()


@lru_cache()
def get_connection_information_provider() -> ApiConnectionInformationProvider:
    """Get ApiConnectionInformationProvider singleton instance."""
    return ApiConnectionInformationProvider(
        secret_configuration_repository=get_secret_configuration_repository()
    )


@lru_cache()
def get_job_runner() -> JobRunner:
    """Get JobRunner singleton instance with injected dependencies."""
    return JobRunner(
        job_status_repository=get_job_status_repository(),
        job_queue_repository=get_job_queue_repository()
    )


@lru_cache()
def get_bulk_upload_service() -> BulkUploadService:
    """Get BulkUploadService singleton instance with injected dependencies."""
    return BulkUploadService(
        secret_configuration_repository=get_secret_configuration_repository(),
        file_service=get_file_service(),
        connection_information_provider=get_connection_information_provider(),
        infer_ods_api_version=get_infer_ods_api_version(),
        job_runner=get_job_runner()
    )


@lru_cache()
def get_learning_standards_service() -> LearningStandardsService:
    """Get LearningStandardsService singleton instance with injected dependencies."""
    return LearningStandardsService(
        setup_command=LearningStandardsSetupCommand(get_secret_configuration_repository()),
        connection_information_provider=get_connection_information_provider(),
        job_runner=get_job_runner()
    )


def clear_dependency_cache() -> None:
    """Drop cached singletons so the next request picks up fresh settings."""
    for provider in (
        get_secret_configuration_repository,
        get_job_status_repository,
        get_job_queue_repository,
        get_file_service,
        get_infer_ods_api_version,
        get_connection_information_provider,
        get_job_runner,
        get_bulk_upload_service,
        get_learning_standards_service
    ):
        provider.cache_clear()
