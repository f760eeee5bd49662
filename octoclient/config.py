"""Client configuration: environment settings and explicit per-call configurations.

``TokenConfiguration`` and ``OAuthConfiguration`` are plain immutable values
passed to every operation.  ``Settings`` only exists to build them from
environment variables or a ``.env`` file.
"""

from __future__ import annotations

import base64
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

GITHUB_BASE_URL = "https://api.github.com"
GITHUB_WEB_URL = "https://github.com"


def _preview_accept(accept: str | None, preview_headers: list[str]) -> dict[str, str]:
    """Merge an explicit Accept value with API preview media types."""
    values = ([accept] if accept else []) + list(preview_headers)
    if not values:
        return {}
    return {"Accept": ", ".join(values)}


class TokenConfiguration(BaseModel):
    """Authenticated API access with a personal, installation or OAuth token."""

    model_config = ConfigDict(frozen=True)

    api_endpoint: str = GITHUB_BASE_URL
    access_token: str | None = None
    authorization_header: str = "Basic"
    accept: str | None = None
    preview_headers: list[str] = Field(default_factory=list)

    @classmethod
    def basic(
        cls,
        token: str | None = None,
        url: str = GITHUB_BASE_URL,
        preview_headers: list[str] | None = None,
    ) -> TokenConfiguration:
        """Build a ``Basic`` configuration; the token is stored base64 encoded."""
        encoded = base64.b64encode(token.encode("utf-8")).decode("ascii") if token else None
        return cls(
            api_endpoint=url,
            access_token=encoded,
            authorization_header="Basic",
            preview_headers=preview_headers or [],
        )

    @classmethod
    def bearer(
        cls,
        token: str,
        url: str = GITHUB_BASE_URL,
        preview_headers: list[str] | None = None,
    ) -> TokenConfiguration:
        """Build a ``Bearer`` configuration; the token is sent as-is."""
        return cls(
            api_endpoint=url,
            access_token=token,
            authorization_header="Bearer",
            preview_headers=preview_headers or [],
        )

    def headers(self) -> dict[str, str]:
        """Headers attached to every request made with this configuration."""
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"{self.authorization_header} {self.access_token}"
        headers.update(_preview_accept(self.accept, self.preview_headers))
        return headers


class OAuthConfiguration(BaseModel):
    """OAuth application credentials used to obtain a ``TokenConfiguration``."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: str
    scopes: list[str] = Field(default_factory=list)
    api_endpoint: str = GITHUB_BASE_URL
    web_endpoint: str = GITHUB_WEB_URL
    preview_headers: list[str] = Field(default_factory=list)

    def headers(self) -> dict[str, str]:
        """Only preview headers; OAuth requests carry no Authorization."""
        return _preview_accept(None, self.preview_headers)


class Settings(BaseSettings):
    """Client settings with environment variable loading and sensible defaults.

    ``GITHUB_*`` and ``OAUTH_*`` variables are read under their own names;
    the remaining client knobs are namespaced as ``OCTOCLIENT_*`` so generic
    variables such as ``DEBUG`` in the host process are never picked up.
    Nothing is read until a ``Settings`` instance is created.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="OCTOCLIENT_",
        case_sensitive=False,
        extra="ignore",
    )

    github_api_url: str = Field(GITHUB_BASE_URL, validation_alias="github_api_url")
    github_web_url: str = Field(GITHUB_WEB_URL, validation_alias="github_web_url")
    github_token: str = Field("", validation_alias="github_token")
    github_token_type: Literal["basic", "bearer"] = Field(
        "bearer", validation_alias="github_token_type"
    )
    request_timeout: float = 30.0
    log_level: str = "INFO"
    debug: bool = False

    # OAuth application
    oauth_client_id: str = Field("", validation_alias="oauth_client_id")
    oauth_client_secret: str = Field("", validation_alias="oauth_client_secret")
    oauth_scopes: str = Field("", validation_alias="oauth_scopes")

    @field_validator("github_token_type", mode="before")
    @classmethod
    def _normalise_token_type(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value

    def token_configuration(self) -> TokenConfiguration:
        """Build the token configuration described by these settings."""
        if self.github_token_type == "basic":
            return TokenConfiguration.basic(self.github_token or None, url=self.github_api_url)
        if not self.github_token:
            return TokenConfiguration(api_endpoint=self.github_api_url)
        return TokenConfiguration.bearer(self.github_token, url=self.github_api_url)

    def oauth_configuration(self) -> OAuthConfiguration:
        """Build the OAuth configuration described by these settings."""
        scopes = [s.strip() for s in self.oauth_scopes.split(",") if s.strip()]
        return OAuthConfiguration(
            client_id=self.oauth_client_id,
            client_secret=self.oauth_client_secret,
            scopes=scopes,
            api_endpoint=self.github_api_url,
            web_endpoint=self.github_web_url,
        )
