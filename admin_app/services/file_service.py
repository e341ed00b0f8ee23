"""
File Service for bulk upload files.
Handles upload validation and writing files to the working directory.
"""
import logging
import os
import re
import shutil
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Sequence
from admin_app.core import config
from admin_app.core.exceptions import (
    FileTooLargeException,
    FileUploadException,
    MultipleFilesNotSupportedException,
    ValidationException
)
from admin_app.models.file_upload import BulkFile, FileUploadResult

logger = logging.getLogger(__name__)

# Interchange names (Student, StudentEnrollment, ...) are letters and digits
_INTERCHANGE_TYPE = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")


def import_file_name(bulk_file_type: Optional[str]) -> Callable[[str], str]:
    """
    Build the naming function for stored import files.

    Format: Interchange-{bulk_file_type}-{original name}, or the original name
    when no interchange type was chosen.

    Raises:
        ValidationException: If bulk_file_type is not an interchange name
    """
    if bulk_file_type and not _INTERCHANGE_TYPE.match(bulk_file_type):
        raise ValidationException(f"Invalid bulk file type '{bulk_file_type}'")

    def name(original: str) -> str:
        if not bulk_file_type:
            return original
        return f"Interchange-{bulk_file_type}-{original}"
    return name


class FileService:
    """Service for bulk file operations."""

    def __init__(self, upload_directory: str = None, max_file_size_bytes: int = None):
        self.upload_directory = upload_directory if upload_directory is not None else config.settings.upload_directory
        self.max_file_size_bytes = (
            max_file_size_bytes if max_file_size_bytes is not None else config.settings.max_bulk_upload_size_bytes
        )

    def validate_bulk_files(self, files: Sequence[BulkFile]) -> bool:
        """
        Validate the uploaded file list before any job is built.

        Args:
            files: Uploaded files in request order

        Returns:
            True if there is a file to process, False if the list is empty

        Raises:
            MultipleFilesNotSupportedException: If more than one file was uploaded
            FileTooLargeException: If the file is larger than the maximum size
        """
        if not files:
            return False

        if len(files) > 1:
            raise MultipleFilesNotSupportedException(
                "Currently, the bulk import process only supports a single file at a time."
            )

        if files[0].length > self.max_file_size_bytes:
            raise FileTooLargeException(
                f"Upload exceeds maximum limit of {self.max_file_size_bytes} bytes "
                f"({files[0].length} bytes received)"
            )

        return True

    def save_files_to_upload_directory(
        self,
        files: Sequence[BulkFile],
        naming_fn: Callable[[str], str]
    ) -> FileUploadResult:
        """
        Write files into a new directory beneath the upload directory.

        Args:
            files: Files to store
            naming_fn: Maps an original file name to the stored file name

        Returns:
            FileUploadResult with the directory and stored file names

        Raises:
            FileUploadException: If a file cannot be written
        """
        directory = os.path.join(self.upload_directory, self._generate_directory_name())
        file_names: List[str] = []

        try:
            os.makedirs(directory, exist_ok=False)
        except OSError as e:
            raise FileUploadException(f"Failed to save uploaded file: {str(e)}") from e

        try:
            for file in files:
                stored_name = naming_fn(os.path.basename(file.filename or "upload"))
                with open(os.path.join(directory, stored_name), 'wb') as destination:
                    shutil.copyfileobj(file.stream, destination)
                file_names.append(stored_name)

        except OSError as e:
            shutil.rmtree(directory, ignore_errors=True)
            raise FileUploadException(f"Failed to save uploaded file: {str(e)}") from e

        logger.info("Saved %d file(s) to %s", len(file_names), directory)
        return FileUploadResult(directory=directory, file_names=file_names)

    def remove_upload_directory(self, upload_result: FileUploadResult) -> bool:
        """
        Delete a directory written by save_files_to_upload_directory.
        Directories outside the upload directory are left alone.

        Returns:
            True if the directory was removed
        """
        directory = os.path.abspath(upload_result.directory)
        if os.path.dirname(directory) != os.path.abspath(self.upload_directory):
            logger.warning("Not removing %s: outside of %s", directory, self.upload_directory)
            return False

        shutil.rmtree(directory, ignore_errors=True)
        logger.info("Removed upload directory %s", directory)
        return True

    def _generate_directory_name(self) -> str:
        """
        Generate unique directory name for an upload.

        Format: YYYYMMDDHHMMSS_{uuid}
        """
        now = datetime.utcnow()
        return f"{now:%Y%m%d%H%M%S}_{uuid.uuid4().hex[:8]}"
