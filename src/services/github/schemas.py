"""Pydantic schemas for GitHub service."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class PullRequestMetadata(BaseModel):
    """Snapshot of a pull request, fetched fresh for every review."""

    model_config = ConfigDict(frozen=True)

    number: int
    title: str = ""
    body: Optional[str] = None
    author: str = "unknown"
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    changed_files: int = Field(default=0, ge=0)
    commit_count: int = Field(default=0, ge=0)
    mergeable: Optional[bool] = None
    is_draft: bool = False
    head_ref: str = ""
    head_sha: str = ""
    base_ref: str = ""
    base_sha: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FileChange(BaseModel):
    """A file touched by the PR. `patch` is None for binary or huge files."""

    model_config = ConfigDict(frozen=True)

    filename: str
    status: Literal["added", "modified", "removed", "renamed", "copied", "changed", "unchanged"] = "modified"
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    changes: int = Field(default=0, ge=0)
    patch: Optional[str] = None


class CommitRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    message: str
    sha: str


class IssueComment(BaseModel):
    """An existing top-level comment on the PR conversation."""

    model_config = ConfigDict(frozen=True)

    id: int
    body: str = ""
    author: str = "unknown"


class WebhookResponse(BaseModel):
    """Response schema for webhook events."""

    message: str
    event: str | None = None
    action: str | None = None


class PingResponse(BaseModel):
    """Response schema for GitHub ping event."""

    message: str = "pong"
    zen: str = ""


class ManualReviewResponse(BaseModel):
    """Response schema for the manual review trigger."""

    message: str = "PR review completed"
