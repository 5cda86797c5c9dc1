from enum import Enum
from typing import Optional


# Error Kinds
class ErrorKind(str, Enum):
    FILE_NOT_FOUND = "file_not_found"
    CONFLICT = "conflict"
    GENERIC = "generic"


# Base Exception
class ContentError(Exception):
    # Raised when the contents API answers with an unexpected status

    kind = ErrorKind.GENERIC

    def __init__(self, message: str = "Request failed", status: Optional[int] = None):
        self.status = status
        super().__init__(message)


# Specific Exceptions
class FileNotFound(ContentError):
    # Raised when a file cannot be read because it does not exist at the ref

    kind = ErrorKind.FILE_NOT_FOUND

    def __init__(self, message: str = "This file does not exist.", status: Optional[int] = 404):
        super().__init__(message, status)


class Conflict(ContentError):
    # Raised when a save or delete loses against a newer version of the file,
    # or the file already exists and no sha was supplied

    kind = ErrorKind.CONFLICT

    def __init__(
        self,
        message: str = "Cannot save file because it conflicts with another file.",
        status: Optional[int] = 409,
    ):
        super().__init__(message, status)
