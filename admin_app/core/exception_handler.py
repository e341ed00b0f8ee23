"""
Global exception handler for the ODS Admin App service.
Provides centralized error handling for all API exceptions.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from .exceptions import (
    ValidationException,
    FileTooLargeException,
    MissingCredentialsException,
    SecretConfigurationNotFoundException,
    ConfigurationException,
    OdsApiVersionException,
    FileUploadException,
    SecretStoreException,
    DynamoDBException,
    JobQueueException
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "header", "form"))
            errors.setdefault(field or "request", []).append(error["msg"])
        return JSONResponse(
            status_code=400,
            content={"error": "Validation Error", "message": "Request validation failed", "errors": errors}
        )

    @app.exception_handler(FileTooLargeException)
    async def handle_file_too_large(request: Request, exc: FileTooLargeException):
        return JSONResponse(
            status_code=413,
            content={"error": "File Too Large", "message": exc.message}
        )

    @app.exception_handler(ValidationException)
    async def handle_validation_error(request: Request, exc: ValidationException):
        return JSONResponse(
            status_code=400,
            content={"error": "Validation Error", "message": exc.message}
        )

    @app.exception_handler(MissingCredentialsException)
    async def handle_missing_credentials(request: Request, exc: MissingCredentialsException):
        return JSONResponse(
            status_code=400,
            content={"error": "Missing Credentials", "message": exc.message}
        )

    @app.exception_handler(SecretConfigurationNotFoundException)
    async def handle_missing_secret_configuration(request: Request, exc: SecretConfigurationNotFoundException):
        return JSONResponse(
            status_code=400,
            content={"error": "Secret Configuration Error", "message": exc.message}
        )

    @app.exception_handler(OdsApiVersionException)
    async def handle_version_error(request: Request, exc: OdsApiVersionException):
        return JSONResponse(
            status_code=502,
            content={"error": "ODS API Unavailable", "message": exc.message}
        )

    @app.exception_handler(ConfigurationException)
    async def handle_configuration_error(request: Request, exc: ConfigurationException):
        logger.error("Configuration error: %s", exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": "Configuration Error", "message": exc.message}
        )

    @app.exception_handler(FileUploadException)
    async def handle_file_upload_error(request: Request, exc: FileUploadException):
        logger.error("File upload error: %s", exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": "File Upload Failed", "message": exc.message}
        )

    @app.exception_handler(SecretStoreException)
    async def handle_secret_store_error(request: Request, exc: SecretStoreException):
        logger.error("Secret store error: %s", exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": "Secret Store Error", "message": exc.message}
        )

    @app.exception_handler(DynamoDBException)
    async def handle_dynamodb_error(request: Request, exc: DynamoDBException):
        logger.error("DynamoDB error: %s", exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": "Database Error", "message": exc.message}
        )

    @app.exception_handler(JobQueueException)
    async def handle_job_queue_error(request: Request, exc: JobQueueException):
        logger.error("Job queue error: %s", exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": "Job Submission Failed", "message": exc.message}
        )

    @app.exception_handler(Exception)
    async def handle_generic_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", "message": "An unexpected error occurred"}
        )
