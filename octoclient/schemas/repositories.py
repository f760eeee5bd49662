"""Pydantic models for repository resources."""

from pydantic import BaseModel, ConfigDict


class User(BaseModel):
    """Owner of a repository (user or organization)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    login: str
    id: int
    avatar_url: str | None = None
    html_url: str | None = None
    type: str | None = None
    site_admin: bool = False


class Repository(BaseModel):
    """Repository metadata as returned by ``/user/repos`` and ``/repos/{owner}/{repo}``.

    Reference: https://docs.github.com/en/rest/repos/repos#get-a-repository
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str
    full_name: str
    owner: User
    private: bool
    description: str | None = None
    fork: bool
    git_url: str
    ssh_url: str
    clone_url: str
    html_url: str | None = None
    default_branch: str = "main"
