"""Pydantic models for the low-level git database API.

Request bodies serialize with ``model_dump()`` straight into the JSON the
API expects.  Response models ignore fields they do not declare, so payload
additions on the server side never break decoding.
"""

import base64
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

_RESPONSE_CONFIG = ConfigDict(frozen=True, extra="ignore")


class BlobContent(BaseModel):
    """A file to commit: its path in the tree and its text or binary content."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    content: str | bytes

    @property
    def encoding(self) -> str:
        """Wire encoding: ``base64`` for bytes, ``utf-8`` for text."""
        return "base64" if isinstance(self.content, bytes) else "utf-8"

    def encoded_content(self) -> str:
        """Content as sent in the blob request body."""
        if isinstance(self.content, bytes):
            return base64.b64encode(self.content).decode("ascii")
        return self.content


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------


class BlobRequest(BaseModel):
    """Body for ``POST /repos/{owner}/{repo}/git/blobs``."""

    content: str
    encoding: str

    @classmethod
    def from_blob(cls, blob: BlobContent) -> "BlobRequest":
        return cls(content=blob.encoded_content(), encoding=blob.encoding)


class TreeRequestEntry(BaseModel):
    """A regular file entry pointing at an existing blob."""

    path: str
    mode: str = "100644"
    type: str = "blob"
    sha: str


class TreeRequest(BaseModel):
    """Body for ``POST /repos/{owner}/{repo}/git/trees``."""

    base_tree: str
    tree: list[TreeRequestEntry]


class CommitRequest(BaseModel):
    """Body for ``POST /repos/{owner}/{repo}/git/commits``."""

    tree: str
    message: str
    parents: list[str]


class RefRequest(BaseModel):
    """Body for ``PATCH /repos/{owner}/{repo}/git/refs/{ref}``."""

    sha: str
    force: bool = False


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class Blob(BaseModel):
    """A created blob."""

    model_config = _RESPONSE_CONFIG

    sha: str
    url: str


class TreeEntry(BaseModel):
    """One object listed in a tree."""

    model_config = _RESPONSE_CONFIG

    path: str | None = None
    mode: str | None = None
    type: str | None = None
    sha: str | None = None
    size: int | None = None
    url: str | None = None


class Tree(BaseModel):
    """The hierarchy between files in a git repository."""

    model_config = _RESPONSE_CONFIG

    sha: str
    url: str
    tree: list[TreeEntry] = Field(default_factory=list)
    truncated: bool = False


class ReferenceObject(BaseModel):
    """The object a reference points at."""

    model_config = _RESPONSE_CONFIG

    sha: str
    type: str
    url: str


class Reference(BaseModel):
    """A named pointer such as ``refs/heads/main``."""

    model_config = _RESPONSE_CONFIG

    ref: str
    node_id: str
    url: str
    object: ReferenceObject


class GitActor(BaseModel):
    """Identifying information for the git author or committer."""

    model_config = _RESPONSE_CONFIG

    name: str
    email: str
    date: datetime


class CommitTree(BaseModel):
    model_config = _RESPONSE_CONFIG

    sha: str
    url: str


class CommitParent(BaseModel):
    model_config = _RESPONSE_CONFIG

    sha: str
    url: str
    html_url: str | None = None


class Verification(BaseModel):
    """Signature verification status of a commit."""

    model_config = _RESPONSE_CONFIG

    verified: bool
    reason: str
    signature: str | None = None
    payload: str | None = None


class Commit(BaseModel):
    """A git commit object.

    Reference: https://docs.github.com/en/rest/git/commits#create-a-commit
    """

    model_config = _RESPONSE_CONFIG

    sha: str
    node_id: str
    url: str
    html_url: str
    message: str
    author: GitActor
    committer: GitActor
    tree: CommitTree
    parents: list[CommitParent] = Field(default_factory=list)
    verification: Verification | None = None
