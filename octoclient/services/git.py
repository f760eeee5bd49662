"""Git database operations and the commit-from-files workflow.

``commit_files`` composes a commit through the remote API only:

1. read the branch's root tree and current reference (the parent commit)
2. upload each file as a blob (concurrently, order does not matter)
3. create a tree on top of the root tree pointing at the new blobs
4. create a commit for that tree with the parent commit
5. move the branch reference to the new commit and verify it took
"""

import asyncio

import httpx
import structlog

from octoclient.config import TokenConfiguration
from octoclient.errors import RefUpdateShaMismatchError
from octoclient.schemas.git import (
    Blob,
    BlobContent,
    BlobRequest,
    Commit,
    CommitRequest,
    Reference,
    RefRequest,
    Tree,
    TreeRequest,
    TreeRequestEntry,
)
from octoclient.services.http import load, send
from octoclient.services.router import Encoding, Route, quote_segment

logger = structlog.get_logger(__name__)

DEFAULT_BRANCH = "main"


def _git_path(owner: str, repo: str, suffix: str) -> str:
    return f"/repos/{quote_segment(owner)}/{quote_segment(repo)}/git/{suffix}"


# ---------------------------------------------------------------------------
# Route builders
# ---------------------------------------------------------------------------


def delete_reference_route(owner: str, repo: str, ref: str) -> Route:
    ref_path = quote_segment(ref, keep_slashes=True)
    return Route("DELETE", _git_path(owner, repo, f"refs/{ref_path}"))


def root_tree_route(owner: str, repo: str, branch: str = DEFAULT_BRANCH) -> Route:
    branch_path = quote_segment(branch, keep_slashes=True)
    return Route("GET", _git_path(owner, repo, f"trees/{branch_path}"))


def parent_commit_route(owner: str, repo: str, branch: str = DEFAULT_BRANCH) -> Route:
    branch_path = quote_segment(branch, keep_slashes=True)
    return Route("GET", _git_path(owner, repo, f"refs/heads/{branch_path}"))


def create_blob_route(owner: str, repo: str, body: BlobRequest) -> Route:
    return Route("POST", _git_path(owner, repo, "blobs"), body.model_dump(), Encoding.JSON)


def create_tree_route(owner: str, repo: str, body: TreeRequest) -> Route:
    return Route("POST", _git_path(owner, repo, "trees"), body.model_dump(), Encoding.JSON)


def create_commit_route(owner: str, repo: str, body: CommitRequest) -> Route:
    return Route("POST", _git_path(owner, repo, "commits"), body.model_dump(), Encoding.JSON)


def update_reference_route(
    owner: str, repo: str, body: RefRequest, branch: str = DEFAULT_BRANCH
) -> Route:
    branch_path = quote_segment(branch, keep_slashes=True)
    return Route(
        "PATCH",
        _git_path(owner, repo, f"refs/heads/{branch_path}"),
        body.model_dump(),
        Encoding.JSON,
    )


# ---------------------------------------------------------------------------
# Single-request operations
# ---------------------------------------------------------------------------


async def delete_reference(
    client: httpx.AsyncClient,
    configuration: TokenConfiguration,
    owner: str,
    repo: str,
    ref: str,
) -> None:
    """Delete a reference, e.g. ``heads/feature-a`` or ``tags/v1.0``.

    Raises:
        httpx.HTTPStatusError: On non-2xx responses (422 for unknown refs).
    """
    await send(client, configuration, delete_reference_route(owner, repo, ref))
    logger.info("reference_deleted", owner=owner, repo=repo, ref=ref)


async def get_root_tree(
    client: httpx.AsyncClient,
    configuration: TokenConfiguration,
    owner: str,
    repo: str,
    branch: str = DEFAULT_BRANCH,
) -> Tree:
    """Fetch the top-level tree of *branch*."""
    return await load(client, configuration, root_tree_route(owner, repo, branch), Tree)


async def get_parent_commit(
    client: httpx.AsyncClient,
    configuration: TokenConfiguration,
    owner: str,
    repo: str,
    branch: str = DEFAULT_BRANCH,
) -> Reference:
    """Fetch the reference of *branch*; its ``object.sha`` is the tip commit."""
    return await load(client, configuration, parent_commit_route(owner, repo, branch), Reference)


async def create_blob(
    client: httpx.AsyncClient,
    configuration: TokenConfiguration,
    owner: str,
    repo: str,
    blob: BlobContent,
) -> Blob:
    """Upload one file's content as a blob."""
    route = create_blob_route(owner, repo, BlobRequest.from_blob(blob))
    created = await load(client, configuration, route, Blob)
    logger.debug("blob_created", file_name=blob.file_name, sha=created.sha)
    return created


async def create_tree(
    client: httpx.AsyncClient,
    configuration: TokenConfiguration,
    owner: str,
    repo: str,
    blobs: list[tuple[str, str]],
    base_tree: str,
) -> Tree:
    """Create a tree on top of *base_tree*.

    Args:
        blobs: ``(path, blob_sha)`` pairs, one regular-file entry each.
        base_tree: SHA of the tree the new entries are layered onto.
    """
    body = TreeRequest(
        base_tree=base_tree,
        tree=[TreeRequestEntry(path=path, sha=sha) for path, sha in blobs],
    )
    return await load(client, configuration, create_tree_route(owner, repo, body), Tree)


async def create_commit(
    client: httpx.AsyncClient,
    configuration: TokenConfiguration,
    owner: str,
    repo: str,
    message: str,
    tree_sha: str,
    parents: list[str],
) -> Commit:
    """Create a commit object for *tree_sha* with the given parent SHAs."""
    body = CommitRequest(tree=tree_sha, message=message, parents=parents)
    commit = await load(client, configuration, create_commit_route(owner, repo, body), Commit)
    logger.info("commit_created", owner=owner, repo=repo, sha=commit.sha)
    return commit


async def update_reference(
    client: httpx.AsyncClient,
    configuration: TokenConfiguration,
    owner: str,
    repo: str,
    sha: str,
    branch: str = DEFAULT_BRANCH,
    *,
    force: bool = False,
) -> Reference:
    """Point ``refs/heads/<branch>`` at *sha*.

    Without *force* the server rejects updates that are not fast-forwards.
    """
    route = update_reference_route(owner, repo, RefRequest(sha=sha, force=force), branch)
    ref = await load(client, configuration, route, Reference)
    logger.info("reference_updated", owner=owner, repo=repo, ref=ref.ref, sha=ref.object.sha)
    return ref


# ---------------------------------------------------------------------------
# Workflow
# ---------------------------------------------------------------------------


async def _create_blobs(
    client: httpx.AsyncClient,
    configuration: TokenConfiguration,
    owner: str,
    repo: str,
    files: list[BlobContent],
) -> list[Blob]:
    """Upload *files* concurrently; the first failure cancels the other uploads.

    The failing upload's own exception is re-raised (not the ``ExceptionGroup``
    the task group wraps it in) so callers see the same httpx errors as for
    any other step.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [
                tg.create_task(create_blob(client, configuration, owner, repo, blob))
                for blob in files
            ]
    except ExceptionGroup as group:
        logger.debug("blob_upload_failed", owner=owner, repo=repo, errors=len(group.exceptions))
        raise group.exceptions[0] from None
    return [task.result() for task in tasks]


async def commit_files(
    client: httpx.AsyncClient,
    configuration: TokenConfiguration,
    owner: str,
    repo: str,
    files: list[BlobContent],
    message: str,
    branch: str = DEFAULT_BRANCH,
) -> Commit:
    """Commit *files* on top of *branch* and advance the branch to the new commit.

    Returns:
        The created commit.

    Raises:
        ValueError: If *files* is empty.
        RefUpdateShaMismatchError: If the branch does not point at the new
            commit after the update.
        httpx.HTTPStatusError: If any of the underlying requests fails; the
            workflow stops at that step.
    """
    if not files:
        raise ValueError("commit_files requires at least one file")

    root_tree = await get_root_tree(client, configuration, owner, repo, branch)
    parent = await get_parent_commit(client, configuration, owner, repo, branch)

    created = await _create_blobs(client, configuration, owner, repo, files)
    blobs = [(blob.file_name, result.sha) for blob, result in zip(files, created)]

    tree = await create_tree(client, configuration, owner, repo, blobs, root_tree.sha)
    commit = await create_commit(
        client, configuration, owner, repo, message, tree.sha, [parent.object.sha]
    )

    ref = await update_reference(client, configuration, owner, repo, commit.sha, branch)
    if ref.object.sha != commit.sha:
        logger.warning(
            "ref_update_sha_mismatch",
            owner=owner,
            repo=repo,
            expected_sha=commit.sha,
            actual_sha=ref.object.sha,
        )
        raise RefUpdateShaMismatchError(commit.sha, ref.object.sha)
    return commit
