"""GitHub API client - data layer."""

import asyncio
from typing import Callable, Optional, TypeVar

from github import Auth, Github, GithubException, UnknownObjectException
from github.PullRequest import PullRequest

from src.config import settings
from src.core.exceptions import ExternalServiceError, PRNotFoundError
from src.core.logging import get_logger
from src.services.github.schemas import CommitRecord, FileChange, IssueComment, PullRequestMetadata

logger = get_logger("github.client")

T = TypeVar("T")


class GitHubClient:
    """Async facade over PyGithub.

    PyGithub is blocking, so every call runs in a worker thread and the
    event loop stays free for other reviews.
    """

    def __init__(self, token: str, user_agent: Optional[str] = None) -> None:
        self._github = Github(
            auth=Auth.Token(token),
            user_agent=user_agent or settings.bot_name,
        )

    async def _call(self, owner: str, repo: str, pr_number: int, fn: Callable[[], T]) -> T:
        try:
            return await asyncio.to_thread(fn)
        except UnknownObjectException as e:
            raise PRNotFoundError(owner, repo, pr_number) from e
        except GithubException as e:
            logger.error(f"GitHub call failed for {owner}/{repo}#{pr_number}: {e.status} {e.data}")
            raise ExternalServiceError("GitHub", f"{e.status} {e.data}") from e

    def _get_pull(self, owner: str, repo: str, pr_number: int) -> PullRequest:
        repository = self._github.get_repo(f"{owner}/{repo}")
        return repository.get_pull(pr_number)

    async def fetch_pull_request(self, owner: str, repo: str, pr_number: int) -> PullRequestMetadata:
        """Fetch a pull request snapshot."""

        def fetch() -> PullRequestMetadata:
            pr = self._get_pull(owner, repo, pr_number)
            return PullRequestMetadata(
                number=pr.number,
                title=pr.title or "",
                body=pr.body,
                author=pr.user.login if pr.user else "unknown",
                additions=pr.additions or 0,
                deletions=pr.deletions or 0,
                changed_files=pr.changed_files or 0,
                commit_count=pr.commits or 0,
                mergeable=pr.mergeable,
                is_draft=bool(pr.draft),
                head_ref=pr.head.ref,
                head_sha=pr.head.sha,
                base_ref=pr.base.ref,
                base_sha=pr.base.sha,
                created_at=pr.created_at,
                updated_at=pr.updated_at,
            )

        return await self._call(owner, repo, pr_number, fetch)

    async def fetch_changed_files(self, owner: str, repo: str, pr_number: int) -> list[FileChange]:
        """Fetch changed files from a PR."""

        def fetch() -> list[FileChange]:
            pr = self._get_pull(owner, repo, pr_number)
            return [
                FileChange(
                    filename=f.filename,
                    status=f.status,
                    additions=f.additions,
                    deletions=f.deletions,
                    changes=f.changes,
                    patch=f.patch,
                )
                for f in pr.get_files()
            ]

        files = await self._call(owner, repo, pr_number, fetch)
        logger.debug(f"Found {len(files)} files in {owner}/{repo}#{pr_number}")
        return files

    async def fetch_commits(self, owner: str, repo: str, pr_number: int) -> list[CommitRecord]:
        """Fetch commits of a PR, oldest first."""

        def fetch() -> list[CommitRecord]:
            pr = self._get_pull(owner, repo, pr_number)
            return [CommitRecord(message=c.commit.message, sha=c.sha) for c in pr.get_commits()]

        return await self._call(owner, repo, pr_number, fetch)

    async def fetch_existing_comments(self, owner: str, repo: str, pr_number: int) -> list[IssueComment]:
        """Fetch the PR conversation comments."""

        def fetch() -> list[IssueComment]:
            pr = self._get_pull(owner, repo, pr_number)
            return [
                IssueComment(
                    id=c.id,
                    body=c.body or "",
                    author=c.user.login if c.user else "unknown",
                )
                for c in pr.get_issue_comments()
            ]

        return await self._call(owner, repo, pr_number, fetch)

    async def post_comment(self, owner: str, repo: str, pr_number: int, body: str) -> None:
        """Post a comment on the PR conversation."""

        def post() -> None:
            pr = self._get_pull(owner, repo, pr_number)
            pr.create_issue_comment(body)

        await self._call(owner, repo, pr_number, post)
        logger.info(f"Posted comment on {owner}/{repo}#{pr_number}")
