"""Send routes and decode their JSON responses into pydantic models."""

from __future__ import annotations

from typing import TypeVar

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter

from octoclient.config import OAuthConfiguration, TokenConfiguration
from octoclient.services.router import Route

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

Configuration = TokenConfiguration | OAuthConfiguration


async def send(
    client: httpx.AsyncClient,
    configuration: Configuration,
    route: Route,
    *,
    base_url: str | None = None,
) -> httpx.Response:
    """Send *route* with the configuration's headers and return the response.

    Args:
        client: Shared httpx async client (for connection pooling).
        configuration: Supplies the API endpoint and per-request headers.
        route: The request to send.
        base_url: Overrides ``configuration.api_endpoint`` (the OAuth
            endpoints live on the web host, not the API host).

    Raises:
        httpx.HTTPStatusError: On non-2xx responses.
        httpx.TransportError: On network failures.
    """
    request = route.build(client, base_url or configuration.api_endpoint, configuration.headers())
    logger.debug("github_request", method=route.method, path=route.path)
    resp = await client.send(request)
    resp.raise_for_status()
    return resp


async def load(
    client: httpx.AsyncClient,
    configuration: Configuration,
    route: Route,
    model: type[ModelT],
) -> ModelT:
    """Send *route* and decode the JSON object body as *model*."""
    resp = await send(client, configuration, route)
    return model.model_validate(resp.json())


async def load_list(
    client: httpx.AsyncClient,
    configuration: Configuration,
    route: Route,
    model: type[ModelT],
) -> list[ModelT]:
    """Send *route* and decode the JSON array body as a list of *model*."""
    resp = await send(client, configuration, route)
    return TypeAdapter(list[model]).validate_python(resp.json())
