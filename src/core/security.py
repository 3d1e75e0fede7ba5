"""Webhook signature verification."""

import hashlib
import hmac
from typing import Optional

from src.config import settings
from src.core.exceptions import SignatureVerificationError
from src.core.logging import get_logger

logger = get_logger("security")


def verify_github_signature(
    payload: bytes,
    signature: Optional[str],
    secret: Optional[str] = None,
) -> bool:
    """Verify GitHub webhook signature using HMAC-SHA256.

    Args:
        payload: Raw request body bytes
        signature: X-Hub-Signature-256 header value
        secret: Shared secret, defaults to the configured webhook secret

    Returns:
        True if valid or no secret is configured, False otherwise
    """
    secret = secret if secret is not None else settings.github_webhook_secret
    if not secret:
        logger.debug("No GitHub webhook secret configured, skipping verification")
        return True

    if not signature:
        return False

    expected = hmac.new(
        secret.encode(),
        payload,
        hashlib.sha256,
    ).hexdigest()

    expected_signature = f"sha256={expected}"
    return hmac.compare_digest(expected_signature.encode(), signature.encode())


def require_github_signature(
    payload: bytes,
    signature: Optional[str],
    secret: Optional[str] = None,
) -> None:
    """Verify GitHub signature or raise exception.

    Raises:
        SignatureVerificationError: If signature is invalid
    """
    if not verify_github_signature(payload, signature, secret):
        logger.warning("Invalid GitHub webhook signature")
        raise SignatureVerificationError("GitHub webhook")
