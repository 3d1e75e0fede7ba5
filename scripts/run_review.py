#!/usr/bin/env python3
"""Run a PR review locally.

Usage:
    python -m scripts.run_review owner/repo#123
    python -m scripts.run_review https://github.com/owner/repo/pull/123 --dry-run
"""
import argparse
import asyncio
import sys

from dotenv import load_dotenv

load_dotenv()

from src.config import ConfigurationError, settings, validate_settings
from src.core.exceptions import ApiException
from src.core.pr_parser import parse_pr_reference
from src.dependencies import build_review_service


async def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Review one pull request")
    parser.add_argument("ref", help="owner/repo#123, a PR URL, or #123 with DEFAULT_REPO_* set")
    parser.add_argument("--dry-run", action="store_true", help="print the comment instead of posting it")
    args = parser.parse_args(argv)

    pr_ref = parse_pr_reference(args.ref)
    if not pr_ref:
        print(f"Could not parse a PR reference from {args.ref!r}", file=sys.stderr)
        return 2

    try:
        validate_settings(settings)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    service = build_review_service(settings)
    try:
        result = await service.review_with_timeout(
            pr_ref.owner,
            pr_ref.repo,
            pr_ref.pr_number,
            post=not args.dry_run,
        )
    except ApiException as e:
        print(f"Review failed: {e.message}", file=sys.stderr)
        return 1
    print(result.comment if args.dry_run else f"Review result: {result.model_dump(exclude={'comment'})}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
