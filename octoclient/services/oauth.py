"""OAuth web flow: authorize URL, code exchange and redirect handling.

Both endpoints live on the web host (``OAuthConfiguration.web_endpoint``),
not on the API host.
"""

from urllib.parse import parse_qsl, urlencode, urlsplit

import httpx
import structlog

from octoclient.config import OAuthConfiguration, TokenConfiguration
from octoclient.errors import AccessTokenMissingError
from octoclient.schemas.oauth import AccessToken
from octoclient.services.http import send
from octoclient.services.router import Encoding, Route

logger = structlog.get_logger(__name__)


def authorize_route(configuration: OAuthConfiguration) -> Route:
    params = {
        "scope": ",".join(configuration.scopes),
        "client_id": configuration.client_id,
        "allow_signup": "false",
    }
    return Route("GET", "login/oauth/authorize", params)


def access_token_route(configuration: OAuthConfiguration, code: str) -> Route:
    params = {
        "client_id": configuration.client_id,
        "client_secret": configuration.client_secret,
        "code": code,
    }
    return Route("POST", "login/oauth/access_token", params, Encoding.FORM)


def authorize_url(configuration: OAuthConfiguration) -> str:
    """URL to send the user's browser to in order to grant access."""
    route = authorize_route(configuration)
    return f"{route.url(configuration.web_endpoint)}?{urlencode(route.params)}"


def access_token_from_response(body: str) -> str | None:
    """Extract the token from an ``access_token=...&scope=...`` response body.

    Only the first ``&``-separated component is considered; its value is
    whatever follows the last ``=``.  Error responses (``error=...``) are
    also answered with 200, so any other leading key yields ``None``.
    """
    first = body.strip().split("&", 1)[0]
    key, sep, _ = first.partition("=")
    if not sep or key != "access_token":
        return None
    return first.rsplit("=", 1)[-1] or None


def parse_access_token(body: str) -> AccessToken | None:
    """Decode a url-encoded token response into an ``AccessToken``."""
    fields = dict(parse_qsl(body))
    if not fields.get("access_token"):
        return None
    return AccessToken.model_validate(fields)


async def exchange_code(
    client: httpx.AsyncClient,
    configuration: OAuthConfiguration,
    code: str,
) -> TokenConfiguration:
    """Exchange an authorization *code* for a ``TokenConfiguration``.

    Raises:
        httpx.HTTPStatusError: On non-2xx responses.
        AccessTokenMissingError: If the response carries no token.
    """
    route = access_token_route(configuration, code)
    resp = await send(client, configuration, route, base_url=configuration.web_endpoint)
    token = access_token_from_response(resp.text)
    if not token:
        raise AccessTokenMissingError(
            "OAuth token response did not contain an access token",
            context={"status_code": resp.status_code},
        )
    logger.info("oauth_code_exchanged", client_id=configuration.client_id)
    return TokenConfiguration.bearer(
        token,
        url=configuration.api_endpoint,
        preview_headers=list(configuration.preview_headers),
    )


async def handle_open_url(
    client: httpx.AsyncClient,
    configuration: OAuthConfiguration,
    url: str,
) -> TokenConfiguration | None:
    """Complete the flow from the redirect *url* the provider sent the user to.

    Returns ``None`` when the URL carries no ``code`` parameter.
    """
    code = dict(parse_qsl(urlsplit(url).query)).get("code")
    if not code:
        logger.debug("oauth_redirect_without_code")
        return None
    return await exchange_code(client, configuration, code)
