"""High-level client bundling a configuration with one shared ``httpx.AsyncClient``.

Every method delegates to the module-level functions in ``octoclient.services``,
which remain usable directly with any ``httpx.AsyncClient``.
"""

from __future__ import annotations

from types import TracebackType

import httpx

from octoclient.config import Settings, TokenConfiguration
from octoclient.schemas.git import Blob, BlobContent, Commit, Reference, Tree
from octoclient.schemas.repositories import Repository
from octoclient.services import git, repositories


class GitHubClient:
    """Async API client for repositories and the git database.

    Use as an async context manager so the underlying connection pool is
    closed::

        async with GitHubClient(TokenConfiguration.bearer(token)) as gh:
            repos = await gh.repositories()
    """

    def __init__(
        self,
        configuration: TokenConfiguration,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.configuration = configuration
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> GitHubClient:
        """Build a client from environment ``Settings``."""
        return cls(settings.token_configuration(), timeout=settings.request_timeout)

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._http.aclose()

    # -- repositories -------------------------------------------------------

    async def repositories(
        self, *, page: int | None = None, per_page: int | None = None
    ) -> list[Repository]:
        """List repositories the authenticated user can access."""
        return await repositories.list_repositories(
            self._http, self.configuration, page=page, per_page=per_page
        )

    async def repository(self, owner: str, name: str) -> Repository:
        """Fetch one repository; 404 raises ``httpx.HTTPStatusError``."""
        return await repositories.get_repository(self._http, self.configuration, owner, name)

    # -- git ------------------------------------------------------------------

    async def delete_reference(self, owner: str, repo: str, ref: str) -> None:
        """Delete *ref*, given without the ``refs/`` prefix (``heads/x``)."""
        await git.delete_reference(self._http, self.configuration, owner, repo, ref)

    async def root_tree(self, owner: str, repo: str, branch: str = git.DEFAULT_BRANCH) -> Tree:
        """Fetch the top-level tree of *branch*."""
        return await git.get_root_tree(self._http, self.configuration, owner, repo, branch)

    async def parent_commit(
        self, owner: str, repo: str, branch: str = git.DEFAULT_BRANCH
    ) -> Reference:
        """Fetch the reference of *branch*, whose object is the tip commit."""
        return await git.get_parent_commit(self._http, self.configuration, owner, repo, branch)

    async def create_blob(self, owner: str, repo: str, blob: BlobContent) -> Blob:
        """Upload *blob*, as utf-8 text or base64 bytes."""
        return await git.create_blob(self._http, self.configuration, owner, repo, blob)

    async def create_tree(
        self, owner: str, repo: str, blobs: list[tuple[str, str]], base_tree: str
    ) -> Tree:
        """Create a tree of ``(path, blob_sha)`` file entries on *base_tree*."""
        return await git.create_tree(
            self._http, self.configuration, owner, repo, blobs, base_tree
        )

    async def create_commit(
        self, owner: str, repo: str, message: str, tree_sha: str, parents: list[str]
    ) -> Commit:
        """Create a commit object for *tree_sha* with *parents*."""
        return await git.create_commit(
            self._http, self.configuration, owner, repo, message, tree_sha, parents
        )

    async def update_reference(
        self,
        owner: str,
        repo: str,
        sha: str,
        branch: str = git.DEFAULT_BRANCH,
        *,
        force: bool = False,
    ) -> Reference:
        """Move ``refs/heads/<branch>`` to *sha*; *force* allows non-fast-forwards."""
        return await git.update_reference(
            self._http, self.configuration, owner, repo, sha, branch, force=force
        )

    async def commit(
        self,
        owner: str,
        repo: str,
        files: list[BlobContent],
        message: str,
        branch: str = git.DEFAULT_BRANCH,
    ) -> Commit:
        """Commit *files* to *branch*; see ``git.commit_files``."""
        return await git.commit_files(
            self._http, self.configuration, owner, repo, files, message, branch
        )
