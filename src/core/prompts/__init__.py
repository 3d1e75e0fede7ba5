"""Prompt templates using Jinja2."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

PROMPTS_DIR = Path(__file__).parent
_env = Environment(loader=FileSystemLoader(PROMPTS_DIR), trim_blocks=True, lstrip_blocks=True)


def render_code_inspection_prompt(
    filename: str,
    patch: str,
    pr_title: str,
    pr_description: str | None,
    additions: int,
    deletions: int,
) -> str:
    """Render the per-file code inspection prompt."""
    template = _env.get_template("code_inspection.jinja2")
    return template.render(
        filename=filename,
        patch=patch,
        pr_title=pr_title,
        pr_description=pr_description,
        additions=additions,
        deletions=deletions,
    )


def render_review_comment_prompt(
    title: str,
    author: str,
    summary,
    description: str | None,
    issues: list,
    positives: list[str],
    concerns: list[str],
) -> str:
    """Render the review comment prompt from an analysis."""
    template = _env.get_template("review_comment.jinja2")
    return template.render(
        title=title,
        author=author,
        summary=summary,
        description=description,
        issues=issues,
        positives=positives,
        concerns=concerns,
    )
