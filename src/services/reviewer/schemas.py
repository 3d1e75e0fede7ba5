"""Pydantic schemas for reviewer service."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from src.services.github.schemas import CommitRecord, FileChange, PullRequestMetadata


class Severity(str, Enum):
    """Issue severity, most severe first."""

    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"
    STYLE = "style"


SEVERITY_ORDER = [Severity.CRITICAL, Severity.MAJOR, Severity.MINOR, Severity.STYLE]


class Issue(BaseModel):
    """A single problem found in the PR."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    message: str
    file: Optional[str] = None
    line: Optional[int] = Field(default=None, ge=1)


class ReviewSummary(BaseModel):
    """Headline numbers, projected from the PR metadata."""

    total_changes: int
    lines_added: int
    lines_deleted: int
    files_changed: int
    commits: int
    is_draft: bool
    is_mergeable: Optional[bool]

    @classmethod
    def from_metadata(cls, pr: PullRequestMetadata) -> "ReviewSummary":
        return cls(
            total_changes=pr.additions + pr.deletions,
            lines_added=pr.additions,
            lines_deleted=pr.deletions,
            files_changed=pr.changed_files,
            commits=pr.commit_count,
            is_draft=pr.is_draft,
            is_mergeable=pr.mergeable,
        )


class Analysis(BaseModel):
    """Everything the composer needs to write one review comment."""

    model_config = ConfigDict(frozen=True)

    pr: PullRequestMetadata
    files: tuple[FileChange, ...] = ()
    commits: tuple[CommitRecord, ...] = ()
    issues: tuple[Issue, ...] = ()
    positives: tuple[str, ...] = ()
    concerns: tuple[str, ...] = ()

    @property
    def summary(self) -> ReviewSummary:
        return ReviewSummary.from_metadata(self.pr)

    def issues_with(self, severity: Severity) -> list[Issue]:
        return [issue for issue in self.issues if issue.severity == severity]


class ReviewResult(BaseModel):
    """Result of a PR review."""

    pr: str
    files_reviewed: int
    issues: int
    posted: bool
    comment: str
