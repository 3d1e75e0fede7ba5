"""Process-wide collaborators, built once at startup."""

from typing import Optional

from fastapi import Request

from src.config import Settings, settings
from src.core.llm import build_llm_client
from src.services.github.client import GitHubClient
from src.services.reviewer.analyzer import PRAnalyzer
from src.services.reviewer.composer import CommentComposer
from src.services.reviewer.phrases import PhraseChooser
from src.services.reviewer.service import ReviewService


def build_review_service(
    config: Settings = settings,
    chooser: Optional[PhraseChooser] = None,
) -> ReviewService:
    """Wire the GitHub client, LLM client, analyzer and composer together."""
    llm = build_llm_client(config)
    return ReviewService(
        github=GitHubClient(config.github_token, user_agent=config.bot_name),
        analyzer=PRAnalyzer(llm=llm, config=config),
        composer=CommentComposer(llm=llm, chooser=chooser, config=config),
        timeout=config.review_timeout_seconds,
        bot_name=config.bot_name,
    )


def get_review_service(request: Request) -> ReviewService:
    """FastAPI dependency returning the service built in the app lifespan."""
    return request.app.state.review_service
