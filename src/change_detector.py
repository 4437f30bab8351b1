"""
Dirty-state detection for the edit form.
"""
from datetime import timezone, tzinfo
from typing import Optional

from src.date_coercion import to_local_input
from src.models import Article, FormState

TRACKED_FIELDS = ("title", "content", "status", "publish_date_local")


def snapshot_from_article(article: Article, tz: tzinfo = timezone.utc) -> FormState:
    """
    Build the form state an article loads into.

    Args:
        article: Article as fetched
        tz: Display timezone for the schedule input

    Returns:
        FormState mirroring the article
    """
    return FormState(
        title=article.title,
        content=article.content,
        status=article.status,
        publish_date_local=to_local_input(article.publish_date, tz),
    )


def is_dirty(original: Optional[FormState], current: FormState) -> bool:
    """
    Check whether the form differs from its loaded snapshot.

    Args:
        original: Snapshot taken at load time, or None in the create flow
        current: Live form state

    Returns:
        True if any tracked field differs
    """
    if original is None:
        return False
    return any(_tracked_value(original, name) != _tracked_value(current, name)
               for name in TRACKED_FIELDS)


def _tracked_value(state: FormState, name: str):
    value = getattr(state, name)
    if name == "publish_date_local":
        # "YYYY-MM-DDTHH:MM"
        return (value or "")[:16]
    return value
