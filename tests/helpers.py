"""In-memory collaborators and builders shared by the tests."""

import asyncio

from src.core.exceptions import ExternalServiceError
from src.services.github.schemas import CommitRecord, FileChange, IssueComment, PullRequestMetadata


class FirstChoice:
    """Phrase chooser that always picks the first phrase."""

    def choice(self, seq):
        return seq[0]


class FakeGitHub:
    """In-memory stand-in for GitHubClient."""

    def __init__(
        self,
        pr=None,
        files=(),
        commits=(),
        comments=(),
        delay: float = 0.0,
        fail_on: tuple[str, ...] = (),
    ):
        self.pr = pr or make_pr()
        self.files = list(files)
        self.commits = list(commits)
        self.comments = list(comments)
        self.delay = delay
        self.fail_on = fail_on
        self.calls: list[str] = []
        self.posted: list[tuple[str, str, int, str]] = []

    async def _enter(self, name: str) -> None:
        self.calls.append(name)
        if self.delay:
            await asyncio.sleep(self.delay)
        if name in self.fail_on:
            raise ExternalServiceError("GitHub", f"{name} failed")

    async def fetch_pull_request(self, owner, repo, pr_number):
        await self._enter("fetch_pull_request")
        return self.pr

    async def fetch_changed_files(self, owner, repo, pr_number):
        await self._enter("fetch_changed_files")
        return self.files

    async def fetch_commits(self, owner, repo, pr_number):
        await self._enter("fetch_commits")
        return self.commits

    async def fetch_existing_comments(self, owner, repo, pr_number):
        await self._enter("fetch_existing_comments")
        return self.comments

    async def post_comment(self, owner, repo, pr_number, body):
        await self._enter("post_comment")
        self.posted.append((owner, repo, pr_number, body))


class FakeLLM:
    """LLM stand-in returning canned text, or raising `error`."""

    def __init__(self, response: str = "", error: Exception | None = None):
        self.response = response
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt, system_instruction, temperature=0.0, max_tokens=None):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.response


def make_pr(**overrides) -> PullRequestMetadata:
    fields = {
        "number": 7,
        "title": "Add tokenizer for the expression parser",
        "body": "Splits the input into tokens before parsing so errors carry positions.",
        "author": "alice",
        "additions": 40,
        "deletions": 10,
        "changed_files": 2,
        "commit_count": 1,
        "mergeable": True,
        "is_draft": False,
        "head_ref": "feature/tokenizer",
        "head_sha": "abc123",
        "base_ref": "main",
        "base_sha": "def456",
    }
    fields.update(overrides)
    return PullRequestMetadata(**fields)


def make_file(filename: str, patch: str | None = None, **overrides) -> FileChange:
    return FileChange(filename=filename, patch=patch, **overrides)


def make_commit(message: str, sha: str = "c0ffee") -> CommitRecord:
    return CommitRecord(message=message, sha=sha)


def make_comment(body: str, author: str = "bob", comment_id: int = 1) -> IssueComment:
    return IssueComment(id=comment_id, body=body, author=author)


def make_event(
    action: str = "opened",
    state: str = "open",
    draft: bool = False,
    login: str = "alice",
    user_type: str = "User",
    number: int = 7,
) -> dict:
    return {
        "action": action,
        "pull_request": {
            "number": number,
            "state": state,
            "draft": draft,
            "user": {"login": login, "type": user_type},
        },
        "repository": {"name": "widgets", "owner": {"login": "acme"}},
    }

