"""
Custom exceptions for the ODS Admin App service.
Provides specific error types for different failure scenarios.
"""


class AdminAppException(Exception):
    """Base exception for all application errors."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationException(AdminAppException):
    """Raised when request data validation fails."""
    pass


class MultipleFilesNotSupportedException(ValidationException):
    """Raised when more than one bulk file is uploaded at once."""
    pass


class FileTooLargeException(ValidationException):
    """Raised when a bulk file exceeds the configured size limit."""
    pass


class MissingCredentialsException(AdminAppException):
    """Raised when bulk load credentials are required but not stored."""
    pass


class SecretConfigurationNotFoundException(AdminAppException):
    """Raised when an ODS instance has no secret configuration."""
    pass


class ConfigurationException(AdminAppException):
    """Raised when application settings hold an unusable value."""
    pass


class OdsApiVersionException(AdminAppException):
    """Raised when the ODS API version cannot be determined."""
    pass


class FileUploadException(AdminAppException):
    """Raised when uploaded files cannot be written to disk."""
    pass


class SecretStoreException(AdminAppException):
    """Raised when Parameter Store operation fails."""
    pass


class DynamoDBException(AdminAppException):
    """Raised when DynamoDB operation fails."""
    pass


class JobQueueException(AdminAppException):
    """Raised when a job cannot be submitted to the queue."""
    pass
