from typing import Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from gitfs.constants import (
    COMMIT_MESSAGE_TEMPLATE,
    DEFAULT_REF,
    FALLBACK_IDENTIFIER,
    GITHUB_API_URL,
    USER_AGENT,
    VALID_URL_SCHEMES,
)


# Configuration
class Config(BaseSettings):
    """Client settings."""

    api_url: str = GITHUB_API_URL
    default_ref: str = DEFAULT_REF
    homepage: Optional[str] = None
    product_name: str = FALLBACK_IDENTIFIER
    request_timeout: Optional[float] = Field(default=None, gt=0)
    user_agent: str = USER_AGENT

    model_config = {"env_file": ".env", "extra": "ignore"}

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in VALID_URL_SCHEMES or not parsed.netloc:
            raise ValueError(f"Invalid API URL: {v}")
        return v.rstrip("/")

    @field_validator("default_ref")
    @classmethod
    def validate_default_ref(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Default ref must not be empty")
        return v

    @property
    def commit_message(self) -> str:
        return COMMIT_MESSAGE_TEMPLATE.format(identifier=self.homepage or self.product_name)


# Models
class FileEntry(BaseModel):
    path: str
    sha: str


class FileContent(BaseModel):
    content: str
    sha: str
