"""Reshape free-text advisor replies into recommendation lines"""

from typing import List

FALLBACK_ADVICE = "Unable to parse AI recommendations"


def parse_advice(text: str | None) -> List[str]:
    """Split advisor text into trimmed, non-blank lines; fall back to a single notice when empty"""
    if not text:
        return [FALLBACK_ADVICE]

    lines = [line.strip() for line in text.splitlines()]
    recommendations = [line for line in lines if line]
    return recommendations or [FALLBACK_ADVICE]
