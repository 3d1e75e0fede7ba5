"""Comment composer - renders an Analysis as a review comment."""

from typing import Optional

from src.config import Settings, settings
from src.core.llm import LLMClient
from src.core.logging import get_logger
from src.core.prompts import render_review_comment_prompt
from src.services.reviewer.phrases import (
    CLOSINGS,
    OPENINGS,
    PhraseChooser,
    closing_bucket,
    default_chooser,
    opening_bucket,
)
from src.services.reviewer.schemas import SEVERITY_ORDER, Analysis, Issue, Severity

logger = get_logger("reviewer.composer")

REVIEW_MARKER = "<!-- linus-pr-bot -->"
SIGN_OFF = "*- Linus (Bot)*"
SIGN_OFF_PREFIX = "- Linus"

SEVERITY_HEADINGS = {
    Severity.CRITICAL: "🔥 **Critical Issues:**",
    Severity.MAJOR: "⚠️ **Major Issues:**",
    Severity.MINOR: "📝 **Minor Issues:**",
    Severity.STYLE: "🎨 **Style Issues:**",
}

COMMENT_SYSTEM_PROMPT = f"""You are Linus Torvalds reviewing a GitHub pull request. Generate a code review comment in his characteristic style:
- Direct and blunt, but not unnecessarily rude
- Technically focused and precise
- Often mentions specific technical details
- Uses his typical phrases and expressions
- Sometimes appreciates good work, but always points out problems
- Ends comments with a signature like "{SIGN_OFF_PREFIX}" or similar
- Keeps it concise but impactful
- Uses markdown formatting for code and emphasis
- Include the hidden comment identifier: {REVIEW_MARKER}"""


def ensure_single_marker(text: str) -> str:
    """Return `text` with the review marker exactly once, at the top."""
    body = text.replace(REVIEW_MARKER, "").lstrip("\n")
    return f"{REVIEW_MARKER}\n{body}"


def ensure_sign_off(text: str) -> str:
    if SIGN_OFF_PREFIX in text:
        return text
    return f"{text.rstrip()}\n\n{SIGN_OFF}"


def _issue_line(issue: Issue) -> str:
    line = f"- {issue.message}"
    if issue.file:
        line += f" (`{issue.file}`)"
    return line


class CommentComposer:
    """Writes the review comment, through the LLM when available.

    The template path is the fallback for every LLM failure, so `compose`
    never raises on LLM trouble.
    """

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        chooser: Optional[PhraseChooser] = None,
        config: Settings = settings,
    ) -> None:
        self.llm = llm
        self.chooser = chooser or default_chooser()
        self.config = config

    async def compose(self, analysis: Analysis) -> str:
        if self.llm is not None:
            try:
                return await self.compose_with_llm(analysis)
            except Exception as e:
                logger.warning(f"LLM comment generation failed, falling back to template: {e}")
        return self.compose_from_template(analysis)

    async def compose_with_llm(self, analysis: Analysis) -> str:
        prompt = render_review_comment_prompt(
            title=analysis.pr.title,
            author=analysis.pr.author,
            summary=analysis.summary,
            description=analysis.pr.body,
            issues=list(analysis.issues),
            positives=list(analysis.positives),
            concerns=list(analysis.concerns),
        )
        comment = await self.llm.complete(
            prompt,
            COMMENT_SYSTEM_PROMPT,
            temperature=self.config.comment_temperature,
            max_tokens=1000,
        )
        if not comment or not comment.replace(REVIEW_MARKER, "").strip():
            raise ValueError("LLM returned an empty comment")
        return ensure_sign_off(ensure_single_marker(comment.strip()))

    def compose_from_template(self, analysis: Analysis) -> str:
        summary = analysis.summary
        issues = analysis.issues
        positives = analysis.positives
        critical = len(analysis.issues_with(Severity.CRITICAL))
        major = len(analysis.issues_with(Severity.MAJOR))

        opening = opening_bucket(critical, major, len(positives), len(issues))
        parts = [
            "## Code Review\n",
            self.chooser.choice(OPENINGS[opening]) + "\n",
            f"**Stats:** +{summary.lines_added}/-{summary.lines_deleted} lines "
            f"across {summary.files_changed} files\n",
        ]

        if positives:
            parts.append("**What's Good:**\n" + "\n".join(f"- {p}" for p in positives) + "\n")

        if issues:
            block = ["**Issues:**"]
            for severity in SEVERITY_ORDER:
                group = analysis.issues_with(severity)
                if group:
                    block.append(f"\n{SEVERITY_HEADINGS[severity]}")
                    block.extend(_issue_line(issue) for issue in group)
            parts.append("\n".join(block) + "\n")

        if analysis.concerns:
            parts.append("**Concerns:**\n" + "\n".join(f"- {c}" for c in analysis.concerns) + "\n")

        closing = closing_bucket(major, len(issues), len(positives))
        parts.append(self.chooser.choice(CLOSINGS[closing]) + "\n")
        parts.append(SIGN_OFF)

        return ensure_single_marker("\n".join(parts))
