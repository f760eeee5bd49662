"""Pydantic model for the OAuth access token response."""

from pydantic import BaseModel, ConfigDict


class AccessToken(BaseModel):
    """Decoded ``login/oauth/access_token`` response body."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str
    scope: str = ""
    token_type: str = "bearer"
