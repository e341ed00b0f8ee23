"""
Core configuration for the ODS Admin App service.
Manages environment variables and AWS service settings.
"""
import os
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # AWS Configuration
    aws_region: str = os.getenv("AWS_REGION", "us-east-1")
    job_status_table_name: str = os.getenv("JOB_STATUS_TABLE_NAME", "")
    job_queue_url: str = os.getenv("JOB_QUEUE_URL", "")
    secret_parameter_prefix: str = os.getenv("SECRET_PARAMETER_PREFIX", "/ods-admin-app")

    # API Configuration
    api_title: str = os.getenv("API_TITLE", "ODS Admin App API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # ODS API
    ods_api_server_url: str = os.getenv("ODS_API_SERVER_URL", "http://localhost:54746")
    api_mode: str = os.getenv("API_MODE", "sandbox")
    ods_api_timeout_seconds: float = float(os.getenv("ODS_API_TIMEOUT_SECONDS", "10"))
    ods_api_version_cache_seconds: int = int(os.getenv("ODS_API_VERSION_CACHE_SECONDS", "300"))
    cloud_ods_environment: str = os.getenv("CLOUD_ODS_ENVIRONMENT", "Production")

    # Current ODS instance when the request does not name one
    default_ods_instance_id: int = int(os.getenv("DEFAULT_ODS_INSTANCE_ID", "1"))
    default_ods_instance_name: str = os.getenv("DEFAULT_ODS_INSTANCE_NAME", "EdFi_Ods")

    # Bulk Upload
    upload_directory: str = os.getenv("UPLOAD_DIRECTORY", "/tmp/ods-admin-app/uploads")
    xsd_folder: str = os.getenv("XSD_FOLDER", "Schema")
    max_bulk_upload_size_bytes: int = int(os.getenv("MAX_BULK_UPLOAD_SIZE_BYTES", "20000000"))
    bulk_upload_max_simultaneous_requests: int = int(os.getenv("BULK_UPLOAD_MAX_SIMULTANEOUS_REQUESTS", "20"))
    legacy_bulk_upload_max_simultaneous_requests: int = int(os.getenv("LEGACY_BULK_UPLOAD_MAX_SIMULTANEOUS_REQUESTS", "1"))

    # Background jobs
    job_lock_timeout_seconds: int = int(os.getenv("JOB_LOCK_TIMEOUT_SECONDS", "14400"))

    # Environment
    environment: str = os.getenv("ENVIRONMENT", "dev")

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
