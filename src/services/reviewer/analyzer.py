"""PR analyzer - turns PR metadata, commits and patches into issues, positives and concerns."""

import asyncio
import json
import re
from typing import Optional

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from src.config import Settings, settings
from src.core.llm import LLMClient
from src.core.logging import get_logger
from src.core.prompts import render_code_inspection_prompt
from src.services.github.schemas import CommitRecord, FileChange, PullRequestMetadata
from src.services.reviewer.patch_parser import iter_added_lines, parse_patch_line_numbers
from src.services.reviewer.schemas import Analysis, Issue, Severity

logger = get_logger("reviewer.analyzer")

INSPECTION_SYSTEM_PROMPT = """You are a senior kernel maintainer reviewing a single file of a pull request.

Only judge lines the diff adds. Report real problems: security holes, missing error handling,
poor code quality, performance traps and logic errors. Skip personal style preferences.

Answer with a JSON array only, no prose and no markdown."""

MAX_FILES_CHANGED = 20
MAX_TOTAL_CHANGES = 1000
SMALL_PR_FILES = 5
SMALL_PR_CHANGES = 200
MIN_COMMIT_MESSAGE = 10
MIN_FIX_MESSAGE = 20
GOOD_COMMIT_MESSAGE = 20
MIN_TITLE = 10
MIN_BODY = 20

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n(.*)\n```\s*$", re.DOTALL)


class AIFinding(BaseModel):
    """One entry of the code inspection response."""

    severity: Severity
    message: str = Field(min_length=1)
    line: Optional[int] = None


_FINDINGS = TypeAdapter(list[AIFinding])


def is_test_file(filename: str) -> bool:
    return "test" in filename or "spec" in filename


def is_source_file(filename: str) -> bool:
    return filename.endswith((".ts", ".js")) and not is_test_file(filename)


def _first_line(message: str) -> str:
    return message.split("\n", 1)[0]


def parse_findings(raw: str) -> Optional[list[AIFinding]]:
    """Parse the LLM inspection output.

    Returns None when the response is not a JSON array of well-formed
    findings. One bad entry discards the whole response.
    """
    text = raw.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1).strip()
    try:
        return _FINDINGS.validate_python(json.loads(text))
    except (json.JSONDecodeError, ValidationError) as e:
        logger.warning(f"Discarding malformed inspection response: {e}")
        return None


def scan_patch(file: FileChange) -> list[Issue]:
    """Rule-based scan of one patch, used when AI inspection finds nothing."""
    patch = file.patch or ""
    issues = []

    if "console.log" in patch:
        issues.append(Issue(
            severity=Severity.MINOR,
            file=file.filename,
            message="console.log statements found. Clean up your debugging mess.",
        ))

    if "TODO" in patch or "FIXME" in patch:
        issues.append(Issue(
            severity=Severity.MINOR,
            file=file.filename,
            message="TODO/FIXME comments. Either fix it now or create an issue.",
        ))

    if "eval(" in patch or "innerHTML" in patch:
        issues.append(Issue(
            severity=Severity.CRITICAL,
            file=file.filename,
            message="eval()/innerHTML in new code. That's an injection hole waiting to happen.",
        ))

    return issues


def long_line_issue(file: FileChange, max_length: int) -> Optional[Issue]:
    """One style issue per file for added lines over `max_length` characters."""
    long_lines = [number for number, text in iter_added_lines(file.patch) if len(text) > max_length]
    if not long_lines:
        return None
    count = len(long_lines)
    return Issue(
        severity=Severity.STYLE,
        file=file.filename,
        line=long_lines[0],
        message=(
            f"{count} line{'s' if count != 1 else ''} longer than {max_length} characters. Break it up."
        ),
    )


def find_issues(
    pr: PullRequestMetadata,
    files: list[FileChange],
    commits: list[CommitRecord],
    code_issues: list[Issue],
    max_line_length: int = 120,
) -> list[Issue]:
    """Collect issues. `code_issues` are the per-file findings, AI or rule-based."""
    issues: list[Issue] = []

    if pr.changed_files > MAX_FILES_CHANGED:
        issues.append(Issue(
            severity=Severity.MAJOR,
            message=f"This PR touches {pr.changed_files} files. That's a lot. Did you consider breaking this down?",
        ))

    total = pr.additions + pr.deletions
    if total > MAX_TOTAL_CHANGES:
        issues.append(Issue(
            severity=Severity.MAJOR,
            message=f"{total} line changes. This is getting unwieldy.",
        ))

    for commit in commits:
        message = commit.message
        if len(message) < MIN_COMMIT_MESSAGE:
            issues.append(Issue(
                severity=Severity.MINOR,
                message=f'Commit message "{_first_line(message)}" is too short. Be more descriptive.',
            ))
        if "fix" in message.lower() and len(message) < MIN_FIX_MESSAGE:
            issues.append(Issue(
                severity=Severity.MINOR,
                message=f'"{_first_line(message)}" - what exactly did you fix? Be specific.',
            ))

    has_tests = any(is_test_file(f.filename) for f in files)
    has_code = any(is_source_file(f.filename) for f in files)
    if has_code and not has_tests:
        issues.append(Issue(
            severity=Severity.MAJOR,
            message="No tests? Really? How do you know this actually works?",
        ))

    issues.extend(code_issues)

    for file in files:
        issue = long_line_issue(file, max_line_length)
        if issue:
            issues.append(issue)

    if not pr.title or len(pr.title) < MIN_TITLE:
        issues.append(Issue(
            severity=Severity.MINOR,
            message="PR title is too short. Be more descriptive.",
        ))

    if not pr.body or len(pr.body) < MIN_BODY:
        issues.append(Issue(
            severity=Severity.MINOR,
            message="PR description is lacking. What does this actually do?",
        ))

    return issues


def find_positives(
    pr: PullRequestMetadata,
    files: list[FileChange],
    commits: list[CommitRecord],
) -> list[str]:
    positives = []

    if pr.changed_files <= SMALL_PR_FILES and pr.additions + pr.deletions <= SMALL_PR_CHANGES:
        positives.append("Reasonably sized PR. Good.")

    if any(is_test_file(f.filename) for f in files):
        positives.append("Tests included. Finally, someone who gets it.")

    if any(f.filename.endswith(".md") or "doc" in f.filename for f in files):
        positives.append("Documentation updated. Rare sight these days.")

    if any(len(c.message) >= GOOD_COMMIT_MESSAGE and ":" in c.message for c in commits):
        positives.append("Decent commit messages. You can actually tell what was done.")

    if any(
        f.filename.endswith(".d.ts") or "interface " in (f.patch or "") or "type " in (f.patch or "")
        for f in files
    ):
        positives.append("Type definitions. TypeScript appreciation noted.")

    return positives


def find_concerns(pr: PullRequestMetadata, files: list[FileChange]) -> list[str]:
    concerns = []
    names = [f.filename for f in files]

    if any("config" in n or n.endswith((".json", ".env")) for n in names):
        concerns.append("Configuration changes detected. Double-check these.")

    if "package.json" in names:
        concerns.append("Dependency changes. Hope you know what you're doing.")

    if any("migration" in n or "schema" in n for n in names):
        concerns.append("Database changes. This better be backwards compatible.")

    if any("auth" in n or "security" in n or "password" in n for n in names):
        concerns.append("Security-related changes. Have these been properly reviewed?")

    if pr.is_draft:
        concerns.append("This is a draft. Why am I reviewing unfinished work?")

    return concerns


class PRAnalyzer:
    """Builds an Analysis for one PR.

    With an LLM client configured, each patch is first sent for code
    inspection; files where that yields nothing get the rule-based scan.
    """

    def __init__(self, llm: Optional[LLMClient] = None, config: Settings = settings) -> None:
        self.llm = llm
        self.config = config

    async def analyze(
        self,
        pr: PullRequestMetadata,
        files: list[FileChange],
        commits: list[CommitRecord],
    ) -> Analysis:
        code_issues = await self.inspect_files(pr, files)

        analysis = Analysis(
            pr=pr,
            files=tuple(files),
            commits=tuple(commits),
            issues=tuple(find_issues(pr, files, commits, code_issues, self.config.max_line_length)),
            positives=tuple(find_positives(pr, files, commits)),
            concerns=tuple(find_concerns(pr, files)),
        )
        logger.info(
            f"Analyzed PR #{pr.number}: {len(analysis.issues)} issues, "
            f"{len(analysis.positives)} positives, {len(analysis.concerns)} concerns"
        )
        return analysis

    async def inspect_files(self, pr: PullRequestMetadata, files: list[FileChange]) -> list[Issue]:
        """Per-file code issues, in file order."""
        patched = [f for f in files if f.patch]
        semaphore = asyncio.Semaphore(max(1, self.config.max_concurrent_inspections))

        async def inspect(index: int, file: FileChange) -> list[Issue]:
            ai_issues: list[Issue] = []
            if self.llm is not None and index < self.config.max_files_per_inspection:
                async with semaphore:
                    ai_issues = await self.inspect_with_llm(pr, file)
            return ai_issues or scan_patch(file)

        results = await asyncio.gather(*(inspect(i, f) for i, f in enumerate(patched)))
        return [issue for file_issues in results for issue in file_issues]

    async def inspect_with_llm(self, pr: PullRequestMetadata, file: FileChange) -> list[Issue]:
        """Ask the LLM about one file. Any failure yields no issues."""
        prompt = render_code_inspection_prompt(
            filename=file.filename,
            patch=file.patch or "",
            pr_title=pr.title,
            pr_description=pr.body,
            additions=file.additions,
            deletions=file.deletions,
        )
        try:
            raw = await self.llm.complete(
                prompt,
                INSPECTION_SYSTEM_PROMPT,
                temperature=self.config.inspection_temperature,
            )
        except Exception as e:
            logger.warning(f"Code inspection failed for {file.filename}: {e}")
            return []

        findings = parse_findings(raw)
        if not findings:
            return []

        valid_lines = parse_patch_line_numbers(file.patch)
        return [
            Issue(
                severity=finding.severity,
                message=finding.message,
                file=file.filename,
                line=finding.line if finding.line in valid_lines else None,
            )
            for finding in findings
        ]
