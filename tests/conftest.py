"""Shared fixtures: configurations and canned GitHub API payloads."""

from collections.abc import Callable

import pytest

from octoclient.config import OAuthConfiguration, TokenConfiguration

API = "https://api.github.com"


@pytest.fixture
def token_config() -> TokenConfiguration:
    """Bearer configuration against the public API host."""
    return TokenConfiguration.bearer("ghp_secret")


@pytest.fixture
def oauth_config() -> OAuthConfiguration:
    """OAuth application credentials with two scopes."""
    return OAuthConfiguration(client_id="client-123", client_secret="shh", scopes=["repo", "user"])


@pytest.fixture
def repo_payload() -> dict:
    """A ``GET /repos/octocat/Hello-World`` response body."""
    return {
        "id": 1296269,
        "node_id": "MDEwOlJlcG9zaXRvcnkxMjk2MjY5",
        "name": "Hello-World",
        "full_name": "octocat/Hello-World",
        "owner": {
            "login": "octocat",
            "id": 1,
            "avatar_url": "https://github.com/images/error/octocat_happy.gif",
            "html_url": "https://github.com/octocat",
            "type": "User",
            "site_admin": False,
        },
        "private": False,
        "html_url": "https://github.com/octocat/Hello-World",
        "description": "This your first repo!",
        "fork": False,
        "git_url": "git:github.com/octocat/Hello-World.git",
        "ssh_url": "git@github.com:octocat/Hello-World.git",
        "clone_url": "https://github.com/octocat/Hello-World.git",
        "default_branch": "master",
        "stargazers_count": 80,
    }


@pytest.fixture
def make_tree() -> Callable[..., dict]:
    """Factory for git tree payloads."""

    def _make(sha: str, paths: tuple[str, ...] = ("README.md",)) -> dict:
        return {
            "sha": sha,
            "url": f"{API}/repos/octocat/Hello-World/git/trees/{sha}",
            "tree": [
                {
                    "path": path,
                    "mode": "100644",
                    "type": "blob",
                    "size": 30,
                    "sha": f"blob-{path}",
                    "url": f"{API}/repos/octocat/Hello-World/git/blobs/blob-{path}",
                }
                for path in paths
            ],
            "truncated": False,
        }

    return _make


@pytest.fixture
def make_reference() -> Callable[..., dict]:
    """Factory for git reference payloads."""

    def _make(sha: str, ref: str = "refs/heads/main") -> dict:
        return {
            "ref": ref,
            "node_id": "MDM6UmVmcmVmcy9oZWFkcy9mZWF0dXJlQQ==",
            "url": f"{API}/repos/octocat/Hello-World/git/{ref}",
            "object": {
                "type": "commit",
                "sha": sha,
                "url": f"{API}/repos/octocat/Hello-World/git/commits/{sha}",
            },
        }

    return _make


@pytest.fixture
def make_commit() -> Callable[..., dict]:
    """Factory for git commit payloads."""

    def _make(sha: str, tree_sha: str = "tree-new", parent_sha: str = "parent-sha") -> dict:
        actor = {"name": "Mona Octocat", "email": "octocat@github.com", "date": "2014-11-07T22:01:45Z"}
        return {
            "sha": sha,
            "node_id": "MDY6Q29tbWl0NzYzODQxN2RiNmQ1OWYzYzQzMWQzZTFmMjYxY2M2MzcxNTU2ODRjZA==",
            "url": f"{API}/repos/octocat/Hello-World/git/commits/{sha}",
            "html_url": f"https://github.com/octocat/Hello-World/commit/{sha}",
            "author": actor,
            "committer": actor,
            "message": "my commit message",
            "tree": {
                "url": f"{API}/repos/octocat/Hello-World/git/trees/{tree_sha}",
                "sha": tree_sha,
            },
            "parents": [
                {
                    "url": f"{API}/repos/octocat/Hello-World/git/commits/{parent_sha}",
                    "sha": parent_sha,
                    "html_url": f"https://github.com/octocat/Hello-World/commit/{parent_sha}",
                }
            ],
            "verification": {
                "verified": False,
                "reason": "unsigned",
                "signature": None,
                "payload": None,
            },
        }

    return _make
