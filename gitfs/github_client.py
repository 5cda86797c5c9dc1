import base64
import logging
import re
import time
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from gitfs.config import Config, FileContent, FileEntry
from gitfs.constants import (
    MAX_LOG_LENGTH,
    STATUS_CONFLICT,
    STATUS_CREATED,
    STATUS_NOT_FOUND,
    STATUS_OK,
    TOKEN_PATTERNS,
)
from gitfs.exceptions import Conflict, ContentError, FileNotFound
from gitfs.interfaces import ContentStoreInterface

logger = logging.getLogger(__name__)


# Utilities
def sanitize_log(data) -> str:
    """Extract useful fields from a GitHub error, hide tokens."""
    if isinstance(data, dict):
        useful = {k: data[k] for k in ("message", "documentation_url") if k in data}
        text = str(useful) if useful else str(data)
    else:
        text = str(data)

    for pattern in TOKEN_PATTERNS:
        text = re.sub(pattern, "***", text, flags=re.IGNORECASE)
    return text[:MAX_LOG_LENGTH]


def cache_bust() -> int:
    # The API ignores no-cache directives, so every GET gets a fresh query string
    return int(time.time() * 1000)


# Client Implementation
class GitHubContentClient(ContentStoreInterface):
    """Async client for the GitHub repository contents API.

    Each operation is a single request. Credentials are passed on every call
    and never kept. The sha returned by list/read must be handed back to
    write/rm by the caller.
    """

    def __init__(self, config: Config, http_client: Optional[httpx.AsyncClient] = None):
        self._config = config
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=config.request_timeout,
            headers={"User-Agent": config.user_agent},
        )

    @property
    def config(self) -> Config:
        return self._config

    async def list(self, credentials: str, repo: str, ref: Optional[str] = None) -> List[FileEntry]:
        """List the repository root at ref, keeping only path and sha."""
        ref = ref or self._config.default_ref
        response = await self._send(
            "GET",
            self._contents_url(repo),
            credentials,
            params={"ref": ref, "cache_bust": cache_bust()},
        )

        if response.status_code != STATUS_OK:
            raise self._generic_error(response, f"list {repo}@{ref}")

        records = self._json(response, f"list {repo}@{ref}")
        if not isinstance(records, list):
            raise ContentError(f"Not a directory listing: {repo}@{ref}", response.status_code)

        try:
            return [FileEntry(path=record["path"], sha=record["sha"]) for record in records]
        except (KeyError, TypeError) as e:
            raise ContentError(f"Malformed directory listing: {repo}@{ref}", response.status_code) from e

    async def read(
        self, credentials: str, repo: str, filename: str, ref: Optional[str] = None
    ) -> FileContent:
        """Read a file and decode its base64 body to text."""
        ref = ref or self._config.default_ref
        response = await self._send(
            "GET",
            self._contents_url(repo, filename),
            credentials,
            params={"ref": ref, "cache_bust": cache_bust()},
        )

        if response.status_code == STATUS_NOT_FOUND:
            logger.debug(f"File not found: {repo}/{filename}@{ref}")
            raise FileNotFound()

        if response.status_code != STATUS_OK:
            raise self._generic_error(response, f"read {repo}/{filename}@{ref}")

        obj = self._json(response, f"read {repo}/{filename}@{ref}")
        if not isinstance(obj, dict):
            raise ContentError(f"Not a file: {repo}/{filename}@{ref}", response.status_code)

        # Files over 1 MB come back with an empty body and encoding "none"
        encoding = obj.get("encoding", "base64")
        if encoding != "base64":
            raise ContentError(
                f"Unsupported content encoding '{encoding}': {repo}/{filename}@{ref}",
                response.status_code,
            )

        try:
            return FileContent(
                content=base64.b64decode(obj["content"]).decode("utf-8"),
                sha=obj["sha"],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ContentError(f"Not a text file: {repo}/{filename}@{ref}", response.status_code) from e

    async def write(
        self,
        credentials: str,
        repo: str,
        filename: str,
        base64_content: str,
        sha: Optional[str] = None,
        ref: Optional[str] = None,
    ) -> None:
        """Create a file, or update it when sha is given."""
        body: Dict[str, Any] = {
            "branch": ref or self._config.default_ref,
            "content": base64_content,
            "message": self._config.commit_message,
        }
        if sha:
            body["sha"] = sha

        response = await self._send(
            "PUT", self._contents_url(repo, filename), credentials, json=body
        )

        if response.status_code == STATUS_CONFLICT:
            logger.warning(f"Conflict saving {repo}/{filename}")
            raise Conflict()

        if response.status_code not in (STATUS_OK, STATUS_CREATED):
            raise self._generic_error(response, f"write {repo}/{filename}")

        logger.info(f"Saved {repo}/{filename} ({response.status_code})")

    async def rm(
        self, credentials: str, repo: str, filename: str, sha: str, ref: Optional[str] = None
    ) -> None:
        """Delete a file at its current sha."""
        if not sha:
            raise ValueError(f"A sha is required to delete {filename}")

        body = {
            "branch": ref or self._config.default_ref,
            "message": self._config.commit_message,
            "sha": sha,
        }
        response = await self._send(
            "DELETE", self._contents_url(repo, filename), credentials, json=body
        )

        if response.status_code == STATUS_CONFLICT:
            logger.warning(f"Conflict deleting {repo}/{filename}")
            raise Conflict()

        if response.status_code != STATUS_OK:
            raise self._generic_error(response, f"delete {repo}/{filename}")

        logger.info(f"Deleted {repo}/{filename}")

    def _contents_url(self, repo: str, filename: Optional[str] = None) -> str:
        url = f"{self._config.api_url}/repos/{repo}/contents"
        if filename:
            url = f"{url}/{quote(filename.lstrip('/'), safe='/')}"
        return url

    async def _send(
        self,
        method: str,
        url: str,
        credentials: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        headers = {"Authorization": f"token {credentials}"}
        if json is not None:
            headers["Accept"] = "application/json"
            headers["Content-Type"] = "application/json"

        logger.debug(f"{method} {url}")
        response = await self._http.request(method, url, params=params, json=json, headers=headers)
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    def _json(self, response: httpx.Response, action: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Unreadable response to {action}: {sanitize_log(response.text)}")
            raise ContentError(f"Unreadable response to {action}", response.status_code) from e

    def _generic_error(self, response: httpx.Response, action: str) -> ContentError:
        try:
            detail = sanitize_log(response.json())
        except ValueError:
            detail = sanitize_log(response.text)
        logger.warning(f"Failed to {action}: {response.status_code} {detail}")
        return ContentError(f"Status: {response.reason_phrase}", response.status_code)

    async def aclose(self) -> None:
        if self._owns_client and not self._http.is_closed:
            await self._http.aclose()
            logger.debug("HTTP client closed")

    async def __aenter__(self) -> "GitHubContentClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
