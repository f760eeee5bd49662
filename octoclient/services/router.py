"""Tagged request builder shared by every resource module.

A ``Route`` captures the four things that distinguish one endpoint call
from another: HTTP verb, path, parameters and how the parameters are
encoded.  Resource modules only construct routes; ``services.http`` turns
them into requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import quote

import httpx


def quote_segment(value: str, *, keep_slashes: bool = False) -> str:
    """Percent-encode *value* for use inside a URL path.

    Owner and repository names are single segments.  Branch and ref names
    may span several (``feature/login``), so their slashes are kept.
    """
    return quote(value, safe="/" if keep_slashes else "")


class Encoding(str, Enum):
    """Where a route's parameters go."""

    URL = "url"
    FORM = "form"
    JSON = "json"


@dataclass(frozen=True)
class Route:
    """One endpoint call: verb, path, parameters and their encoding."""

    method: str
    path: str
    params: dict[str, Any] = field(default_factory=dict)
    encoding: Encoding = Encoding.URL

    def url(self, base_url: str) -> str:
        """Join *base_url* and the route path with exactly one slash."""
        return f"{base_url.rstrip('/')}/{self.path.lstrip('/')}"

    def build(
        self,
        client: httpx.AsyncClient,
        base_url: str,
        headers: dict[str, str] | None = None,
    ) -> httpx.Request:
        """Build the ``httpx.Request`` for this route without sending it."""
        kwargs: dict[str, Any] = {"headers": headers or {}}
        if self.encoding is Encoding.JSON:
            kwargs["json"] = self.params
        elif self.encoding is Encoding.FORM:
            kwargs["data"] = self.params
        elif self.params:
            kwargs["params"] = self.params
        return client.build_request(self.method, self.url(base_url), **kwargs)
