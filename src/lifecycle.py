"""
Create/edit form lifecycle for articles.

Holds the working form state, derives live metrics and dirty state, validates
locally, and packages the payload sent to the blog API.

Publication policy: a publish date is a scheduled publication and only
applies to drafts. Publishing sends publish_date as null. A scheduled date
may not be earlier than the current minute.
"""
import logging
from dataclasses import replace
from datetime import datetime, timezone, tzinfo
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from src.change_detector import is_dirty, snapshot_from_article
from src.date_coercion import format_instant, from_local_input, min_schedule_local, utc_now
from src.errors import GENERAL_ERROR_KEY, ArticleServiceError, ValidationFailedError
from src.metrics import estimated_read_time, word_count
from src.models import Actor, Article, ArticleStatus, FormState

logger = logging.getLogger(__name__)


class SubmitAction(str, Enum):
    """How the form is being submitted."""

    SAVE_DRAFT = "save_draft"
    SUBMIT = "submit"


class LifecycleController:
    """State machine behind the article create and edit forms."""

    EDITABLE_FIELDS = ("title", "content", "status", "publish_date_local")

    def __init__(
        self,
        blog_api,
        actor: Optional[Actor],
        article: Optional[Article] = None,
        tz: tzinfo = timezone.utc,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize the controller.

        Args:
            blog_api: BlogAPI instance used for submission
            actor: Signed-in actor, or None
            article: Article being edited, or None for the create flow
            tz: Display timezone for the schedule input
            clock: Returns the current aware datetime
        """
        self.blog_api = blog_api
        self.actor = actor
        self.tz = tz
        self.clock = clock
        self.article: Optional[Article] = None
        self.original: Optional[FormState] = None
        self.form = FormState()
        self.errors: Dict[str, List[str]] = {}
        self.submitting = False
        if article is not None:
            self._load(article)

    @classmethod
    def for_create(cls, blog_api, actor: Optional[Actor], tz: tzinfo = timezone.utc,
                   clock: Callable[[], datetime] = utc_now) -> "LifecycleController":
        """Controller for a new article, starting as a draft."""
        return cls(blog_api, actor, article=None, tz=tz, clock=clock)

    @classmethod
    def for_edit(cls, blog_api, actor: Optional[Actor], article: Article,
                 tz: tzinfo = timezone.utc,
                 clock: Callable[[], datetime] = utc_now) -> "LifecycleController":
        """Controller for an existing article, starting from its current fields."""
        return cls(blog_api, actor, article=article, tz=tz, clock=clock)

    def _load(self, article: Article) -> None:
        self.article = article
        self.original = snapshot_from_article(article, self.tz)
        self.form = replace(self.original)

    @property
    def is_edit(self) -> bool:
        """True in the edit flow."""
        return self.article is not None

    def update(self, **fields: Any) -> None:
        """
        Apply field edits to the form.

        Raises:
            ValueError: Unknown field, invalid status or non-string text value
        """
        for name, value in fields.items():
            if name not in self.EDITABLE_FIELDS:
                raise ValueError(f"Unknown form field: {name}")
            if name == "status":
                value = ArticleStatus.coerce(value)
            elif value is None:
                value = ""
            elif not isinstance(value, str):
                raise ValueError(f"Form field {name} must be a string")
            setattr(self.form, name, value)

    @property
    def word_count(self) -> int:
        """Live word count of the form content."""
        return word_count(self.form.content)

    @property
    def estimated_read_time(self) -> int:
        """Live reading time of the form content, in minutes."""
        return estimated_read_time(self.form.content)

    @property
    def show_schedule_control(self) -> bool:
        """Scheduling is only offered while the status control is on draft."""
        return self.form.status == ArticleStatus.DRAFT

    @property
    def min_schedule_local(self) -> str:
        """Earliest selectable schedule value."""
        return min_schedule_local(self.clock(), self.tz)

    @property
    def is_dirty(self) -> bool:
        """True if the edit form differs from the loaded article."""
        return is_dirty(self.original, self.form)

    @property
    def can_save(self) -> bool:
        """Save controls are enabled when idle and, when editing, something changed."""
        if self.submitting:
            return False
        return not self.is_edit or self.is_dirty

    @property
    def general_error(self) -> Optional[str]:
        """Banner message, if any."""
        messages = self.errors.get(GENERAL_ERROR_KEY)
        return messages[0] if messages else None

    def _payload_status(self, action: SubmitAction) -> ArticleStatus:
        if action == SubmitAction.SAVE_DRAFT:
            return ArticleStatus.DRAFT
        return self.form.status

    def _scheduled_instant(self) -> Optional[datetime]:
        # An untouched schedule keeps the loaded instant, even across a DST overlap.
        if self.original is not None and self.form.publish_date_local == self.original.publish_date_local:
            return self.article.publish_date
        prefer = self.article.publish_date if self.article is not None else None
        return from_local_input(self.form.publish_date_local, self.tz, prefer=prefer)

    def build_payload(self, action: SubmitAction = SubmitAction.SUBMIT) -> Dict[str, Any]:
        """
        Package the form for submission.

        Args:
            action: SAVE_DRAFT forces draft status; SUBMIT uses the status control

        Returns:
            {title, content, status, publish_date}

        Raises:
            ValueError: If the schedule value is malformed
        """
        status = self._payload_status(action)
        publish_date = None
        if status == ArticleStatus.DRAFT:
            publish_date = format_instant(self._scheduled_instant())
        return {
            "title": self.form.title,
            "content": self.form.content,
            "status": status.value,
            "publish_date": publish_date,
        }

    def validate(self, action: SubmitAction = SubmitAction.SUBMIT) -> Dict[str, List[str]]:
        """
        Check the form before submission.

        Args:
            action: Submission action, which decides whether a schedule is sent

        Returns:
            Field-keyed error messages; empty when valid
        """
        errors: Dict[str, List[str]] = {}
        if not self.form.title.strip():
            errors["title"] = ["This field may not be blank."]
        if not self.form.content.strip():
            errors["content"] = ["This field may not be blank."]

        if self._payload_status(action) == ArticleStatus.DRAFT:
            try:
                scheduled = self._scheduled_instant()
            except ValueError:
                errors["publish_date"] = ["Enter a valid date and time."]
            else:
                earliest = self.clock().astimezone(timezone.utc).replace(second=0, microsecond=0)
                if scheduled is not None and scheduled < earliest:
                    errors["publish_date"] = ["Publish date cannot be in the past."]
        return errors

    def submit(self, action: SubmitAction = SubmitAction.SUBMIT) -> Optional[Article]:
        """
        Validate and send the form.

        On failure the messages are stored in `errors` and None is returned.
        A successful edit becomes the new original snapshot.

        Args:
            action: SAVE_DRAFT or SUBMIT

        Returns:
            Article returned by the server, or None on failure
        """
        self.errors = {}
        if self.actor is None:
            self.errors = {GENERAL_ERROR_KEY: ["You must be logged in to save articles"]}
            return None
        if self.is_edit and not self.is_dirty:
            self.errors = {GENERAL_ERROR_KEY: ["No changes to save"]}
            return None

        errors = self.validate(action)
        if errors:
            self.errors = errors
            return None

        payload = self.build_payload(action)
        self.submitting = True
        try:
            if self.is_edit:
                article = self.blog_api.update_article(self.actor.id, self.article.id, payload)
            else:
                article = self.blog_api.create_article(payload)
        except ValidationFailedError as e:
            self.errors = e.field_errors
            return None
        except ArticleServiceError as e:
            logger.warning("Article submission failed: %s", e.message)
            failure = "Failed to update article" if self.is_edit else "Failed to create article"
            self.errors = {GENERAL_ERROR_KEY: [failure]}
            return None
        finally:
            self.submitting = False

        logger.info("Saved article %s as %s", article.id, payload["status"])
        if self.is_edit:
            self._load(article)
        return article
