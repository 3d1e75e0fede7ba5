"""Opening and closing phrase pools for template comments."""

import random
from typing import Protocol, Sequence


class PhraseChooser(Protocol):
    """Anything with a `choice` method, e.g. `random.Random(seed)`."""

    def choice(self, seq: Sequence[str]) -> str: ...


OPENINGS = {
    "critical": [
        "Ok, this is problematic.",
        "What were you thinking?",
        "This needs serious work.",
        "Hold on. Let me understand what happened here.",
    ],
    "major": [
        "Right, let's talk about this.",
        "I have some concerns.",
        "This needs attention.",
        "Well, this is... interesting.",
    ],
    "positive": [
        "Not bad. Actually, not bad at all.",
        "Ok, this looks reasonable.",
        "Finally, someone who gets it.",
        "This is more like it.",
    ],
    "neutral": [
        "Let me look at this.",
        "So, here's what I see.",
        "Alright, let's review this.",
        "Here's my take on this PR.",
    ],
}

CLOSINGS = {
    "needs_work": [
        "Fix these issues and we'll talk.",
        "Come back when you've addressed these problems.",
        "This needs work before it's ready.",
    ],
    "ship_it": [
        "Good work. Merging this makes sense.",
        "This is fine. Ship it.",
        "Looks good to me.",
    ],
    "minor_fixes": [
        "Address the minor issues and this should be good to go.",
        "Small fixes needed, but overall solid work.",
        "Clean up these details and we're good.",
    ],
    "several_issues": [
        "Several things to address here.",
        "Multiple issues need attention.",
        "Let's get these problems sorted out.",
    ],
}


def opening_bucket(critical: int, major: int, positives: int, total_issues: int) -> str:
    if critical > 0:
        return "critical"
    if major > 2:
        return "major"
    if positives > total_issues:
        return "positive"
    return "neutral"


def closing_bucket(major: int, total_issues: int, positives: int) -> str:
    if major > 3:
        return "needs_work"
    if total_issues == 0 and positives > 0:
        return "ship_it"
    if total_issues <= 2:
        return "minor_fixes"
    return "several_issues"


def default_chooser() -> PhraseChooser:
    return random.Random()
