"""
Page state for reading and managing articles.

Each page tags its loads with a request generation so that a response
arriving after a newer load has started is dropped instead of overwriting
newer state. Deletion asks an injected confirmation callable first.
"""
import logging
import threading
from typing import Any, Callable, List, Optional

from src.access_resolver import AccessResolver
from src.errors import ArticleServiceError, ForbiddenError, NotFoundError, UnauthenticatedError
from src.models import Actor, Article

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this article?"

ConfirmFn = Callable[[str], bool]


class RequestGeneration:
    """Monotonic counter identifying the latest outstanding request."""

    def __init__(self):
        self._lock = threading.Lock()
        self._current = 0

    def next(self) -> int:
        """Start a new generation and return its token."""
        with self._lock:
            self._current += 1
            return self._current

    def is_current(self, token: int) -> bool:
        """True if no newer generation has started since the token was issued."""
        with self._lock:
            return token == self._current


class ArticleDetailPage:
    """Single article view with author-only deletion."""

    def __init__(self, resolver: AccessResolver, blog_api, confirm: ConfirmFn):
        self.resolver = resolver
        self.blog_api = blog_api
        self.confirm = confirm
        self.article: Optional[Article] = None
        self.error: Optional[str] = None
        self.loading = False
        self._generation = RequestGeneration()

    def load(self, identifier: str, actor: Optional[Actor]) -> Optional[Article]:
        """
        Load an article by ID or slug.

        Args:
            identifier: Article ID or slug
            actor: Current actor, or None

        Returns:
            The article shown after this call, or None
        """
        token = self._generation.next()
        self.loading = True
        try:
            article = self.resolver.resolve(identifier, actor)
        except ArticleServiceError as e:
            if not self._generation.is_current(token):
                logger.debug("Dropping stale failure for article %s", identifier)
                return self.article
            self.article = None
            if isinstance(e, NotFoundError):
                self.error = "Article not found"
            elif isinstance(e, ForbiddenError):
                self.error = "You do not have permission to view this article"
            else:
                self.error = "Failed to load article"
            self.loading = False
            return None

        if not self._generation.is_current(token):
            logger.debug("Dropping stale response for article %s", identifier)
            return self.article
        self.article = article
        self.error = None
        self.loading = False
        return article

    def is_author(self, actor: Optional[Actor]) -> bool:
        """True if the actor owns the loaded article."""
        if actor is None or self.article is None:
            return False
        return str(actor.id) == str(self.article.author)

    def delete(self, actor: Optional[Actor]) -> bool:
        """
        Delete the loaded article after confirmation.

        Returns:
            True if the server deleted the article
        """
        if self.article is None:
            return False
        if not self.is_author(actor):
            self.error = "You do not have permission to delete this article"
            return False
        if not self.confirm(DELETE_CONFIRMATION):
            return False
        try:
            self.blog_api.delete_article(actor.id, self.article.id)
        except ArticleServiceError as e:
            logger.warning("Deleting article %s failed: %s", self.article.id, e.message)
            self.error = "Failed to delete article"
            return False
        logger.info("Deleted article %s", self.article.id)
        self._generation.next()
        self.article = None
        self.error = None
        return True


class MyArticlesPage:
    """The signed-in actor's own articles, drafts included."""

    def __init__(self, blog_api, confirm: ConfirmFn, page_size: int = 10):
        self.blog_api = blog_api
        self.confirm = confirm
        self.page_size = page_size
        self.articles: List[Article] = []
        self.count = 0
        self.error: Optional[str] = None
        self.loading = False
        self._generation = RequestGeneration()

    def load(self, actor: Optional[Actor], page: int = 1) -> List[Article]:
        """
        Fetch one page of the actor's articles.

        Raises:
            UnauthenticatedError: If no actor is signed in
        """
        if actor is None:
            raise UnauthenticatedError("Sign in to see your articles")
        token = self._generation.next()
        self.loading = True
        try:
            result = self.blog_api.get_my_articles(actor, page=page, page_size=self.page_size)
        except ArticleServiceError:
            if self._generation.is_current(token):
                self.error = "Failed to fetch your articles"
                self.loading = False
            return self.articles

        if not self._generation.is_current(token):
            logger.debug("Dropping stale article list for page %s", page)
            return self.articles
        self.articles = result.results
        self.count = result.count
        self.error = None
        self.loading = False
        return self.articles

    def delete(self, actor: Optional[Actor], article_id: Any) -> bool:
        """
        Delete one of the listed articles after confirmation.

        The item leaves the local list only after the server confirms; the
        list is not refetched.

        Returns:
            True if the article was deleted
        """
        if actor is None:
            raise UnauthenticatedError("Sign in to delete articles")
        if not self.confirm(DELETE_CONFIRMATION):
            return False
        try:
            self.blog_api.delete_article(actor.id, article_id)
        except ArticleServiceError as e:
            logger.warning("Deleting article %s failed: %s", article_id, e.message)
            self.error = "Failed to delete article"
            return False
        remaining = [a for a in self.articles if str(a.id) != str(article_id)]
        if len(remaining) < len(self.articles):
            self.count = max(0, self.count - (len(self.articles) - len(remaining)))
            self.articles = remaining
        self.error = None
        return True


class PublicArticlesPage:
    """Paginated list of published articles."""

    def __init__(self, blog_api, page_size: int = 10):
        self.blog_api = blog_api
        self.page_size = page_size
        self.articles: List[Article] = []
        self.current_page = 1
        self.total_pages = 1
        self.error: Optional[str] = None
        self.loading = False
        self._generation = RequestGeneration()

    def load(self, page: int = 1) -> List[Article]:
        """Fetch the given page of published articles."""
        token = self._generation.next()
        self.loading = True
        try:
            result = self.blog_api.get_public_articles(page=page, page_size=self.page_size)
        except ArticleServiceError:
            if self._generation.is_current(token):
                self.error = "Failed to fetch articles"
                self.loading = False
            return self.articles

        if not self._generation.is_current(token):
            logger.debug("Dropping stale public list for page %s", page)
            return self.articles
        self.articles = result.results
        self.current_page = page
        self.total_pages = result.total_pages
        self.error = None
        self.loading = False
        return self.articles

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages

    def next_page(self) -> List[Article]:
        """Load the following page, staying on the last one."""
        return self.load(min(self.current_page + 1, self.total_pages))

    def previous_page(self) -> List[Article]:
        """Load the preceding page, staying on the first one."""
        return self.load(max(self.current_page - 1, 1))
