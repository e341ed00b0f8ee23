"""
Framework-neutral file handles and upload results.
"""
from typing import BinaryIO, List


class BulkFile:
    """An uploaded file: name, byte length and readable stream."""

    def __init__(self, filename: str, length: int, stream: BinaryIO = None):
        self.filename = filename
        self.length = length
        self.stream = stream

    def __repr__(self):
        return f"BulkFile(filename={self.filename}, length={self.length})"


class FileUploadResult:
    """Directory the files were written to and the names they were stored under."""

    def __init__(self, directory: str, file_names: List[str]):
        self.directory = directory
        self.file_names = file_names

    def __repr__(self):
        return f"FileUploadResult(directory={self.directory}, file_names={self.file_names})"
