"""Tests for webhook signature verification."""

import hashlib
import hmac

import pytest

from src.core.exceptions import SignatureVerificationError
from src.core.security import require_github_signature, verify_github_signature

BODY = b'{"action": "opened"}'


def sign(body: bytes, secret: str = "s3cret") -> str:
    return "sha256=" + hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


class TestVerifyGithubSignature:
    def test_valid(self):
        assert verify_github_signature(BODY, sign(BODY), secret="s3cret")

    def test_tampered_body(self):
        assert not verify_github_signature(BODY + b" ", sign(BODY), secret="s3cret")

    def test_wrong_secret(self):
        assert not verify_github_signature(BODY, sign(BODY, "other"), secret="s3cret")

    def test_missing_signature(self):
        assert not verify_github_signature(BODY, None, secret="s3cret")
        assert not verify_github_signature(BODY, "", secret="s3cret")

    def test_garbage_signature(self):
        assert not verify_github_signature(BODY, "sha256=ü", secret="s3cret")

    def test_no_secret_configured(self):
        """Without a secret there is nothing to check."""
        assert verify_github_signature(BODY, None, secret="")


class TestRequireGithubSignature:
    def test_raises_on_invalid(self):
        with pytest.raises(SignatureVerificationError) as exc_info:
            require_github_signature(BODY, "sha256=deadbeef", secret="s3cret")
        assert exc_info.value.status_code == 401
