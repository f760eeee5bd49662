"""Tests for token/OAuth configurations and environment settings."""

import base64
import os
import subprocess
import sys

import pytest
from pydantic import ValidationError

from octoclient.config import (
    GITHUB_BASE_URL,
    GITHUB_WEB_URL,
    OAuthConfiguration,
    Settings,
    TokenConfiguration,
)

# ---------------------------------------------------------------------------
# TokenConfiguration
# ---------------------------------------------------------------------------


def test_basic_configuration_base64_encodes_token() -> None:
    """The basic constructor stores the token base64 encoded."""
    config = TokenConfiguration.basic("octocat:ghp_token")
    expected = base64.b64encode(b"octocat:ghp_token").decode("ascii")

    assert config.access_token == expected
    assert config.headers()["Authorization"] == f"Basic {expected}"
    assert config.api_endpoint == GITHUB_BASE_URL


def test_bearer_configuration_sends_token_verbatim() -> None:
    config = TokenConfiguration.bearer("ghp_secret", url="https://ghe.example.com/api/v3")

    assert config.headers() == {"Authorization": "Bearer ghp_secret"}
    assert config.api_endpoint == "https://ghe.example.com/api/v3"


def test_configuration_without_token_sends_no_authorization() -> None:
    """An anonymous configuration only sends non-auth headers."""
    assert TokenConfiguration().headers() == {}
    assert TokenConfiguration.basic(None).headers() == {}


def test_accept_and_preview_headers_are_joined() -> None:
    """An explicit Accept and preview media types share one header."""
    config = TokenConfiguration(
        accept="application/vnd.github+json",
        preview_headers=["application/vnd.github.squirrel-girl-preview"],
    )

    assert config.headers() == {
        "Accept": "application/vnd.github+json, application/vnd.github.squirrel-girl-preview"
    }


def test_token_configuration_is_immutable() -> None:
    config = TokenConfiguration.bearer("ghp_secret")

    with pytest.raises(ValidationError):
        config.access_token = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# OAuthConfiguration
# ---------------------------------------------------------------------------


def test_oauth_configuration_defaults() -> None:
    config = OAuthConfiguration(client_id="id", client_secret="secret")

    assert config.web_endpoint == GITHUB_WEB_URL
    assert config.api_endpoint == GITHUB_BASE_URL
    assert config.scopes == []
    assert config.headers() == {}


def test_oauth_configuration_only_sends_preview_headers() -> None:
    config = OAuthConfiguration(
        client_id="id",
        client_secret="secret",
        preview_headers=["application/vnd.github.machine-man-preview"],
    )

    assert config.headers() == {"Accept": "application/vnd.github.machine-man-preview"}


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


def test_settings_build_bearer_configuration_by_default() -> None:
    settings = Settings(_env_file=None, github_token="ghp_env")

    config = settings.token_configuration()

    assert config.authorization_header == "Bearer"
    assert config.access_token == "ghp_env"


def test_settings_build_basic_configuration() -> None:
    settings = Settings(
        _env_file=None,
        github_token="octocat:ghp_env",
        github_token_type="BASIC",
        github_api_url="https://ghe.example.com/api/v3",
    )

    config = settings.token_configuration()

    assert config.authorization_header == "Basic"
    assert config.access_token == base64.b64encode(b"octocat:ghp_env").decode("ascii")
    assert config.api_endpoint == "https://ghe.example.com/api/v3"


def test_settings_without_token_build_anonymous_configuration() -> None:
    config = Settings(_env_file=None, github_token="").token_configuration()

    assert config.access_token is None
    assert config.headers() == {}


def test_settings_split_oauth_scopes() -> None:
    """Comma-separated scopes are trimmed and empty items dropped."""
    settings = Settings(
        _env_file=None,
        oauth_client_id="id",
        oauth_client_secret="secret",
        oauth_scopes="repo, user,,gist ",
        github_web_url="https://ghe.example.com",
    )

    config = settings.oauth_configuration()

    assert config.scopes == ["repo", "user", "gist"]
    assert config.client_id == "id"
    assert config.web_endpoint == "https://ghe.example.com"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """GITHUB_* variables keep their names; client knobs use the OCTOCLIENT_ prefix."""
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_from_env")
    monkeypatch.setenv("OCTOCLIENT_REQUEST_TIMEOUT", "5")

    settings = Settings(_env_file=None)

    assert settings.github_token == "ghp_from_env"
    assert settings.request_timeout == 5.0


def test_settings_ignore_unprefixed_generic_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Host-process DEBUG / LOG_LEVEL / REQUEST_TIMEOUT values are not read."""
    monkeypatch.setenv("DEBUG", "*")
    monkeypatch.setenv("LOG_LEVEL", "not-a-level")
    monkeypatch.setenv("REQUEST_TIMEOUT", "soon")

    settings = Settings(_env_file=None)

    assert settings.debug is False
    assert settings.log_level == "INFO"
    assert settings.request_timeout == 30.0


def test_import_does_not_read_environment() -> None:
    """Importing the package succeeds whatever the environment holds."""
    env = {**os.environ, "DEBUG": "*", "OCTOCLIENT_DEBUG": "*", "GITHUB_TOKEN_TYPE": "nope"}

    result = subprocess.run(
        [sys.executable, "-c", "import octoclient, octoclient.config"],
        env=env,
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stderr


def test_settings_reject_unknown_token_type() -> None:
    """A misspelt token type fails instead of silently falling back to Bearer."""
    with pytest.raises(ValidationError):
        Settings(_env_file=None, github_token_type="bearr")


def test_settings_token_type_is_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN_TYPE", " Bearer ")

    assert Settings(_env_file=None).github_token_type == "bearer"
