from typing import Protocol, List, Optional, runtime_checkable

from gitfs.config import FileContent, FileEntry


# Interfaces
@runtime_checkable
class ContentStoreInterface(Protocol):
    # Protocol for a store that keeps documents in a hosted repository

    async def list(self, credentials: str, repo: str, ref: Optional[str] = None) -> List[FileEntry]:
        # Entries at the repository root
        ...

    async def read(
        self, credentials: str, repo: str, filename: str, ref: Optional[str] = None
    ) -> FileContent:
        # Decoded text of a file together with its sha
        ...

    async def write(
        self,
        credentials: str,
        repo: str,
        filename: str,
        base64_content: str,
        sha: Optional[str] = None,
        ref: Optional[str] = None,
    ) -> None:
        # Create the file, or update it when sha is given
        ...

    async def rm(
        self, credentials: str, repo: str, filename: str, sha: str, ref: Optional[str] = None
    ) -> None:
        # Delete the file at its current sha
        ...

    async def aclose(self) -> None:
        # Close any open connections
        ...
