"""Patch parser to locate added lines in a unified diff."""

import re

HUNK_HEADER = re.compile(r"^@@ -\d+(?:,\d+)? \+(\d+)(?:,\d+)? @@")


def iter_added_lines(patch: str | None) -> list[tuple[int, str]]:
    """Extract added lines from a unified diff patch.

    Args:
        patch: Unified diff patch string, as GitHub returns it per file

    Returns:
        List of (line number in the new file, line text without the "+")
    """
    added: list[tuple[int, str]] = []

    if not patch:
        return added

    # Track current line number in the new file
    current_line = 0

    for line in patch.split("\n"):
        hunk_match = HUNK_HEADER.match(line)
        if hunk_match:
            current_line = int(hunk_match.group(1))
            continue

        # Skip if we haven't seen a hunk header yet
        if current_line == 0:
            continue

        if line.startswith("+") and not line.startswith("+++"):
            added.append((current_line, line[1:]))
            current_line += 1
        elif line.startswith("-") and not line.startswith("---"):
            # Removed lines don't exist in the new file
            continue
        elif not line.startswith("\\"):
            current_line += 1

    return added


def parse_patch_line_numbers(patch: str | None) -> set[int]:
    """New-file line numbers of every added line in the patch."""
    return {number for number, _ in iter_added_lines(patch)}
