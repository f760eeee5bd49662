"""Repository listing and lookup."""

import httpx

from octoclient.config import TokenConfiguration
from octoclient.schemas.repositories import Repository
from octoclient.services.http import load, load_list
from octoclient.services.router import Route, quote_segment


def list_repositories_route(page: int | None = None, per_page: int | None = None) -> Route:
    params = {}
    if page is not None:
        params["page"] = page
    if per_page is not None:
        params["per_page"] = per_page
    return Route("GET", "/user/repos", params)


def get_repository_route(owner: str, name: str) -> Route:
    return Route("GET", f"/repos/{quote_segment(owner)}/{quote_segment(name)}")


async def list_repositories(
    client: httpx.AsyncClient,
    configuration: TokenConfiguration,
    *,
    page: int | None = None,
    per_page: int | None = None,
) -> list[Repository]:
    """List repositories the authenticated user can access.

    Raises:
        httpx.HTTPStatusError: On non-2xx responses.
    """
    return await load_list(
        client, configuration, list_repositories_route(page, per_page), Repository
    )


async def get_repository(
    client: httpx.AsyncClient,
    configuration: TokenConfiguration,
    owner: str,
    name: str,
) -> Repository:
    """Fetch a single repository by owner and name.

    Raises:
        httpx.HTTPStatusError: On non-2xx responses (404 for unknown repos).
    """
    return await load(client, configuration, get_repository_route(owner, name), Repository)
