# Imports
from gitfs.config import Config, FileEntry, FileContent
from gitfs.github_client import GitHubContentClient, sanitize_log
from gitfs.exceptions import (
    ErrorKind,
    ContentError,
    FileNotFound,
    Conflict,
)
from gitfs.interfaces import ContentStoreInterface
from gitfs.results import Ok, Err, Result, capture


# Exports
__all__ = [
    "Config",
    "FileEntry",
    "FileContent",
    "GitHubContentClient",
    "ErrorKind",
    "ContentError",
    "FileNotFound",
    "Conflict",
    "ContentStoreInterface",
    "Ok",
    "Err",
    "Result",
    "capture",
    "sanitize_log",
]
