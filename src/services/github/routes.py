"""GitHub webhook and manual review routes."""

import json

from fastapi import APIRouter, BackgroundTasks, Depends, Request

from src.core.exceptions import ApiException
from src.core.logging import get_logger
from src.core.security import require_github_signature
from src.dependencies import get_review_service
from src.services.github.schemas import ManualReviewResponse, PingResponse, WebhookResponse
from src.services.reviewer.service import ReviewService, run_webhook_review

logger = get_logger("github.routes")

router = APIRouter()


@router.post("/webhook")
async def github_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    service: ReviewService = Depends(get_review_service),
):
    """Handle GitHub webhook events.

    Acknowledges immediately; eligibility and the review itself run in a
    background task.
    """
    event = request.headers.get("X-GitHub-Event")
    signature = request.headers.get("X-Hub-Signature-256")
    delivery_id = request.headers.get("X-GitHub-Delivery")

    body = await request.body()
    require_github_signature(body, signature)

    try:
        payload = json.loads(body) if body else {}
    except ValueError:
        logger.warning(f"Webhook body is not JSON (delivery={delivery_id})")
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    action = payload.get("action")
    if not isinstance(action, str):
        action = None
    logger.info(f"Webhook received: event={event}, action={action}, delivery={delivery_id}")

    if event == "ping":
        zen = payload.get("zen")
        return PingResponse(zen=zen if isinstance(zen, str) else "")

    if event == "pull_request":
        background_tasks.add_task(run_webhook_review, service, payload)
        return WebhookResponse(message="Webhook processed", event=event, action=action)

    logger.info(f"Unhandled event type: {event}")
    return WebhookResponse(message=f"Event {event} not handled", event=event, action=action)


@router.post("/review/{owner}/{repo}/{pull_number}", response_model=ManualReviewResponse)
async def manual_review(
    owner: str,
    repo: str,
    pull_number: int,
    service: ReviewService = Depends(get_review_service),
) -> ManualReviewResponse:
    """Review a PR right away, skipping the eligibility checks."""
    try:
        await service.review_with_timeout(owner, repo, pull_number)
    except Exception as e:
        logger.error(f"Error reviewing {owner}/{repo}#{pull_number}: {e}")
        raise ApiException(500, "Failed to review PR") from e
    return ManualReviewResponse()
