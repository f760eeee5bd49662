"""Async client for the GitHub REST API: repositories, git objects and OAuth."""

from octoclient.client import GitHubClient
from octoclient.config import (
    GITHUB_BASE_URL,
    GITHUB_WEB_URL,
    OAuthConfiguration,
    Settings,
    TokenConfiguration,
)
from octoclient.errors import AccessTokenMissingError, OctoClientError, RefUpdateShaMismatchError
from octoclient.logging_config import configure_logging
from octoclient.schemas.git import BlobContent

__all__ = [
    "GITHUB_BASE_URL",
    "GITHUB_WEB_URL",
    "AccessTokenMissingError",
    "BlobContent",
    "GitHubClient",
    "OAuthConfiguration",
    "OctoClientError",
    "RefUpdateShaMismatchError",
    "Settings",
    "TokenConfiguration",
    "configure_logging",
]
