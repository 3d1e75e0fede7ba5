"""GitHub service - decides whether a pull_request event gets a review."""

from dataclasses import dataclass
from typing import Optional

from src.config import settings
from src.core.logging import get_logger
from src.core.pr_parser import PRReference
from src.services.github.client import GitHubClient
from src.services.github.schemas import IssueComment
from src.services.reviewer.composer import REVIEW_MARKER

logger = get_logger("github.service")

REVIEWABLE_ACTIONS = ("opened", "ready_for_review", "synchronize")


@dataclass
class GateDecision:
    """Outcome of the eligibility check for one event."""

    proceed: bool
    reason: str
    target: Optional[PRReference] = None


def is_bot_author(user: dict) -> bool:
    # Also catches humans with "bot" in their login; accepted to prevent loops
    login = user.get("login")
    return user.get("type") == "Bot" or (isinstance(login, str) and "bot" in login)


def _is_name(value) -> bool:
    return isinstance(value, str) and bool(value)


def has_prior_review(comments: list[IssueComment], bot_name: str) -> bool:
    """True if one of our review comments is already on the PR."""
    return any(
        REVIEW_MARKER in comment.body or (bot_name and bot_name in comment.author)
        for comment in comments
    )


async def should_review(
    payload: dict,
    client: GitHubClient,
    bot_name: str = settings.bot_name,
) -> GateDecision:
    """Apply the eligibility rules to a pull_request webhook payload.

    Rules run in order and stop at the first rejection. The only side
    effect is one read of the existing PR comments, and a failure of that
    read propagates so no review runs with an unknown dedup state.
    """
    action = payload.get("action")
    pr = payload.get("pull_request")
    repo = payload.get("repository")

    if not isinstance(pr, dict) or not isinstance(repo, dict):
        return GateDecision(False, "missing pull request or repository data")

    owner_info = repo.get("owner")
    number = pr.get("number")
    owner = owner_info.get("login") if isinstance(owner_info, dict) else None
    repo_name = repo.get("name")
    if not isinstance(number, int) or not _is_name(owner) or not _is_name(repo_name):
        return GateDecision(False, "missing pull request number or repository name")
    target = PRReference(owner=owner, repo=repo_name, pr_number=number)

    if pr.get("state") == "closed":
        return GateDecision(False, f"{target} is closed", target)

    user = pr.get("user")
    if not isinstance(user, dict):
        user = {}
    if is_bot_author(user):
        return GateDecision(False, f"{target} was opened by bot {user.get('login')}", target)

    if action not in REVIEWABLE_ACTIONS:
        return GateDecision(False, f"action {action} is not reviewed", target)

    if pr.get("draft") and action != "ready_for_review":
        return GateDecision(False, f"{target} is a draft", target)

    comments = await client.fetch_existing_comments(owner, repo_name, number)
    if has_prior_review(comments, bot_name) and action != "synchronize":
        return GateDecision(False, f"{target} was already reviewed", target)

    return GateDecision(True, f"{action} on {target}", target)
