"""
Owner-then-public article lookup.
"""
import logging
from typing import Optional

from src.errors import NotFoundError
from src.models import Actor, Article

logger = logging.getLogger(__name__)


class AccessResolver:
    """Decides which lookup to attempt when fetching a single article."""

    def __init__(self, blog_api):
        """
        Initialize the resolver.

        Args:
            blog_api: BlogAPI instance
        """
        self.blog_api = blog_api

    def resolve(self, identifier: str, actor: Optional[Actor]) -> Article:
        """
        Fetch an article by ID or slug.

        A signed-in actor is tried against their own articles first, which
        includes drafts. Only a not-found result falls back to the public
        lookup; any other failure propagates unchanged.

        Args:
            identifier: Article ID or slug
            actor: Current actor, or None when anonymous

        Returns:
            Article

        Raises:
            NotFoundError: Article absent at the final scope
            ForbiddenError: Actor lacks rights
            UnknownError: Transport or unexpected failure
        """
        if actor is not None:
            try:
                return self.blog_api.get_user_article(actor.id, identifier)
            except NotFoundError:
                logger.debug(
                    "Article %s not among user %s's articles, trying public lookup",
                    identifier, actor.id
                )
        return self.blog_api.get_public_article(identifier)
