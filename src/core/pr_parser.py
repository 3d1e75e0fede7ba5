"""PR references as typed on the command line."""

import re
from dataclasses import dataclass
from typing import Optional

from src.config import Settings, settings

_NAME = r"[\w.-]+"

# Each form must match the whole argument.
_URL = re.compile(
    rf"(?:https?://)?(?:www\.)?github\.com/(?P<owner>{_NAME})/(?P<repo>{_NAME})"
    r"/pull/(?P<number>\d+)(?:[/?#].*)?"
)
_QUALIFIED = re.compile(rf"(?P<owner>{_NAME})/(?P<repo>{_NAME})(?:#|/pull/)(?P<number>\d+)")
_NUMBER_ONLY = re.compile(r"#?(?P<number>\d+)")


@dataclass(frozen=True)
class PRReference:
    """A pull request in a specific repository."""

    owner: str
    repo: str
    pr_number: int

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.pr_number}"


def default_repository(config: Settings = settings) -> Optional[tuple[str, str]]:
    """The (owner, repo) pair from DEFAULT_REPO_OWNER/DEFAULT_REPO_NAME, if both are set."""
    if config.default_repo_owner and config.default_repo_name:
        return config.default_repo_owner, config.default_repo_name
    return None


def parse_pr_reference(text: str, config: Settings = settings) -> Optional[PRReference]:
    """Read one PR reference.

    Accepted: a pull request URL, `owner/repo#123`, `owner/repo/pull/123`,
    and a bare `123` or `#123` resolved against the default repository.
    Anything else, including PR number 0, gives None.
    """
    text = text.strip()

    for pattern in (_URL, _QUALIFIED):
        match = pattern.fullmatch(text)
        if match:
            owner, repo = match["owner"], match["repo"]
            break
    else:
        match = _NUMBER_ONLY.fullmatch(text)
        repository = default_repository(config) if match else None
        if repository is None:
            return None
        owner, repo = repository

    number = int(match["number"])
    if number < 1:
        return None
    return PRReference(owner=owner, repo=repo, pr_number=number)
