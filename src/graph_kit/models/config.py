"""Configuration models for graph-kit.

Settings can be passed explicitly or loaded from ``GRAPH_*`` environment
variables and ``.env`` files via pydantic-settings.
"""

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GraphConfig(BaseSettings):
    """Configuration for a Graph API client.

    Example:
        >>> config = GraphConfig(access_token="EAAB...")
        >>> config.get_base_url()
        'https://graph.facebook.com'
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(
        default="https://graph.facebook.com",
        description="Base URL of the Graph API",
    )
    video_base_url: str = Field(
        default="https://graph-video.facebook.com",
        description="Base URL used for video uploads",
    )
    api_version: str | None = Field(
        default=None,
        description="Optional version path prefix (e.g. 'v2.0')",
    )
    access_token: SecretStr | None = Field(
        default=None,
        description="OAuth access token used for every request",
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    max_connections: int = Field(default=10, ge=1, description="Connection pool size")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")
    legacy_paging: bool = Field(
        default=True,
        description="Fall back to top-level next/previous links when no paging block exists",
    )
    max_batch_size: int = Field(
        default=50,
        ge=1,
        description="Maximum number of calls in a single batch request",
    )

    @field_validator("base_url", "video_base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("api_version")
    @classmethod
    def normalize_api_version(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip("/")
        return value or None

    def get_base_url(self, video: bool = False) -> str:
        """Get the base URL for a request.

        Args:
            video: Whether the request is a video upload

        Returns:
            Base URL including the version prefix, if configured
        """
        base = self.video_base_url if video else self.base_url
        if self.api_version:
            return f"{base}/{self.api_version}"
        return base

    def get_access_token(self) -> str | None:
        """Get the access token value, or None if unset."""
        if self.access_token is None:
            return None
        return self.access_token.get_secret_value() or None
