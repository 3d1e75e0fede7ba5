"""Tests for review orchestration, timeouts and the background runner."""

import asyncio

import pytest

from helpers import FakeGitHub, FirstChoice, make_comment, make_commit, make_event, make_file
from src.config import Settings
from src.core.exceptions import ExternalServiceError, ReviewTimeoutError
from src.services.reviewer.analyzer import PRAnalyzer
from src.services.reviewer.composer import REVIEW_MARKER, CommentComposer
from src.services.reviewer.service import ReviewService, run_webhook_review


def make_service(github, timeout=5.0):
    config = Settings(github_token="t")
    return ReviewService(
        github=github,
        analyzer=PRAnalyzer(config=config),
        composer=CommentComposer(chooser=FirstChoice(), config=config),
        timeout=timeout,
        bot_name="linus-pr-bot",
    )


class TestReviewPullRequest:
    def test_posts_one_comment(self):
        """Fetch, analyze, compose and post a single comment."""
        github = FakeGitHub(
            files=[make_file("src/view.js", "+el.innerHTML = html;")],
            commits=[make_commit("view: render html preview")],
        )
        result = asyncio.run(make_service(github).review_pull_request("acme", "widgets", 7))

        assert len(github.posted) == 1
        owner, repo, number, body = github.posted[0]
        assert (owner, repo, number) == ("acme", "widgets", 7)
        assert body.count(REVIEW_MARKER) == 1
        assert "(`src/view.js`)" in body
        assert result.pr == "acme/widgets#7"
        assert result.files_reviewed == 1
        assert result.posted is True
        assert result.comment == body

    def test_dry_run_does_not_post(self):
        github = FakeGitHub()
        result = asyncio.run(make_service(github).review_pull_request("acme", "widgets", 7, post=False))

        assert github.posted == []
        assert result.posted is False
        assert REVIEW_MARKER in result.comment

    def test_fetch_failure_propagates(self):
        """No partial comment is posted when GitHub fails."""
        github = FakeGitHub(fail_on=("fetch_changed_files",))

        with pytest.raises(ExternalServiceError):
            asyncio.run(make_service(github).review_pull_request("acme", "widgets", 7))
        assert github.posted == []

    def test_timeout(self):
        """A slow review is abandoned and nothing is posted."""
        github = FakeGitHub(delay=0.5)

        with pytest.raises(ReviewTimeoutError):
            asyncio.run(make_service(github, timeout=0.05).review_with_timeout("acme", "widgets", 7))
        assert github.posted == []


class TestHandlePullRequestEvent:
    def test_eligible_event_is_reviewed(self):
        github = FakeGitHub()
        result = asyncio.run(make_service(github).handle_pull_request_event(make_event()))

        assert result is not None
        assert len(github.posted) == 1

    def test_closed_event_is_ignored(self):
        github = FakeGitHub()
        result = asyncio.run(make_service(github).handle_pull_request_event(make_event(state="closed")))

        assert result is None
        assert github.calls == []

    def test_duplicate_opened_is_ignored(self):
        github = FakeGitHub(comments=[make_comment(REVIEW_MARKER)])
        asyncio.run(make_service(github).handle_pull_request_event(make_event(action="opened")))

        assert github.posted == []

    def test_synchronize_reviews_again(self):
        github = FakeGitHub(comments=[make_comment(REVIEW_MARKER)])
        asyncio.run(make_service(github).handle_pull_request_event(make_event(action="synchronize")))

        assert len(github.posted) == 1


class TestRunWebhookReview:
    def test_swallows_github_errors(self):
        """Background failures are logged, not raised."""
        github = FakeGitHub(fail_on=("fetch_pull_request",))
        asyncio.run(run_webhook_review(make_service(github), make_event()))

        assert github.posted == []

    def test_swallows_timeouts(self):
        github = FakeGitHub(delay=0.2)
        asyncio.run(run_webhook_review(make_service(github, timeout=0.05), make_event()))

        assert github.posted == []

    def test_dedup_lookup_failure_aborts(self):
        github = FakeGitHub(fail_on=("fetch_existing_comments",))
        asyncio.run(run_webhook_review(make_service(github), make_event()))

        assert "fetch_pull_request" not in github.calls
        assert github.posted == []
