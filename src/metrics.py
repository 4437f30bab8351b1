"""
Content metrics shown while authoring.
"""
import math

WORDS_PER_MINUTE = 200


def word_count(content: str) -> int:
    """Count whitespace-delimited words."""
    return len(content.split())


def estimated_read_time(content: str) -> int:
    """
    Estimate reading time in whole minutes.

    Halves round up, and the result is never below one minute, even for
    empty content.

    Args:
        content: Article body text

    Returns:
        Minutes
    """
    return max(1, math.floor(word_count(content) / WORDS_PER_MINUTE + 0.5))
