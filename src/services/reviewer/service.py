"""Reviewer service - orchestration layer."""

import asyncio
from typing import Optional

from src.config import settings
from src.core.exceptions import ReviewTimeoutError
from src.core.logging import get_logger
from src.services.github.client import GitHubClient
from src.services.github.service import should_review
from src.services.reviewer.analyzer import PRAnalyzer
from src.services.reviewer.composer import CommentComposer
from src.services.reviewer.schemas import ReviewResult

logger = get_logger("reviewer.service")


class ReviewService:
    """Fetch, analyze, compose and post. Holds no per-review state."""

    def __init__(
        self,
        github: GitHubClient,
        analyzer: PRAnalyzer,
        composer: CommentComposer,
        timeout: float = settings.review_timeout_seconds,
        bot_name: str = settings.bot_name,
    ) -> None:
        self.github = github
        self.analyzer = analyzer
        self.composer = composer
        self.timeout = timeout
        self.bot_name = bot_name

    async def review_pull_request(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        post: bool = True,
    ) -> ReviewResult:
        """Review a pull request and post the comment."""
        pr_ref = f"{owner}/{repo}#{pr_number}"
        logger.info(f"Reviewing {pr_ref}")

        pr, files, commits = await asyncio.gather(
            self.github.fetch_pull_request(owner, repo, pr_number),
            self.github.fetch_changed_files(owner, repo, pr_number),
            self.github.fetch_commits(owner, repo, pr_number),
        )

        analysis = await self.analyzer.analyze(pr, files, commits)
        comment = await self.composer.compose(analysis)

        if post:
            await self.github.post_comment(owner, repo, pr_number, comment)
            logger.info(f"Reviewed and commented on {pr_ref}")

        return ReviewResult(
            pr=pr_ref,
            files_reviewed=len(files),
            issues=len(analysis.issues),
            posted=post,
            comment=comment,
        )

    async def review_with_timeout(
        self,
        owner: str,
        repo: str,
        pr_number: int,
        post: bool = True,
    ) -> ReviewResult:
        """Same as review_pull_request, bounded by the overall review timeout.

        Raises:
            ReviewTimeoutError: If the budget runs out; in-flight results are dropped
        """
        try:
            return await asyncio.wait_for(
                self.review_pull_request(owner, repo, pr_number, post=post),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise ReviewTimeoutError(f"{owner}/{repo}#{pr_number}", self.timeout) from e

    async def handle_pull_request_event(self, payload: dict) -> Optional[ReviewResult]:
        """Gate a pull_request event and review it if eligible."""
        decision = await should_review(payload, self.github, bot_name=self.bot_name)
        if not decision.proceed:
            logger.info(f"Skipping review: {decision.reason}")
            return None

        target = decision.target
        logger.info(f"Review triggered: {decision.reason}")
        return await self.review_with_timeout(target.owner, target.repo, target.pr_number)


async def run_webhook_review(service: ReviewService, payload: dict) -> None:
    """Background task for a webhook delivery. Logs failures, never raises."""
    try:
        result = await service.handle_pull_request_event(payload)
        if result:
            logger.info(f"Review completed: {result.pr} ({result.issues} issues)")
    except ReviewTimeoutError as e:
        logger.error(f"Review dropped: {e.message}")
    except Exception as e:
        logger.error(f"Review failed: {e}")
