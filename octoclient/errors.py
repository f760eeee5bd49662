"""Exceptions raised by octoclient.

HTTP and transport failures are not wrapped: ``httpx.HTTPStatusError`` and
``httpx.TransportError`` reach the caller unchanged.  The classes below cover
the few semantic failures the client detects itself.
"""

from typing import Any


class OctoClientError(Exception):
    """Base exception for errors detected by the client itself."""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if not self.context:
            return self.message
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} ({context_str})"


class RefUpdateShaMismatchError(OctoClientError):
    """The branch reference does not point at the commit that was just created."""

    def __init__(self, expected_sha: str, actual_sha: str) -> None:
        super().__init__(
            "Reference update returned an unexpected commit",
            context={"expected_sha": expected_sha, "actual_sha": actual_sha},
        )
        self.expected_sha = expected_sha
        self.actual_sha = actual_sha


class AccessTokenMissingError(OctoClientError):
    """The OAuth token endpoint answered successfully but without a token."""
