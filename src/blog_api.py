"""
Blog API wrapper for the article client.
Handles public and owner-scoped article lookups, listing, and mutations.
"""
import json
import logging
from typing import Any, Dict, Optional

import requests

from src.errors import UnauthenticatedError, UnknownError, error_from_response
from src.models import Actor, Article, ArticlePage

# Configure logging
logger = logging.getLogger(__name__)


class BlogAPI:
    """Wrapper for the blog platform's article endpoints."""

    def __init__(self, base_url: str, access_token: Optional[str] = None, timeout: int = 30):
        """
        Initialize blog API client.

        Args:
            base_url: API root, e.g. "https://blog.example.com/api"
            access_token: Bearer token of the signed-in user (optional)
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        return headers

    def _require_token(self) -> None:
        if not self.access_token:
            raise UnauthenticatedError("Authentication required")

    def _request(self, method: str, path: str, **kwargs) -> Any:
        """
        Send a request and decode the JSON response.

        Args:
            method: HTTP method
            path: Path below the base URL, starting with "/"
            **kwargs: Passed through to requests.request

        Returns:
            Decoded JSON body, or None for empty responses

        Raises:
            ArticleServiceError: Typed failure for HTTP and transport errors
        """
        url = f"{self.base_url}{path}"
        try:
            response = requests.request(
                method, url, headers=self._headers(), timeout=self.timeout, **kwargs
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            try:
                error_data = e.response.json()
            except ValueError:
                error_data = None

            if error_data is None:
                logger.error(
                    "Blog API HTTP %s error on %s %s (could not parse error body)",
                    e.response.status_code, method, path
                )
            else:
                logger.error(
                    "Blog API HTTP %s error on %s %s",
                    e.response.status_code, method, path
                )
                logger.debug("Full blog API error response: %s", json.dumps(error_data, indent=2))

            raise error_from_response(e.response.status_code, error_data) from e
        except requests.exceptions.RequestException as e:
            logger.error("Blog API request %s %s failed: %s", method, path, e)
            raise UnknownError(f"Request failed: {e}") from e

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("Blog API returned a non-JSON body for %s %s", method, path)
            raise UnknownError("Invalid JSON in response", status_code=response.status_code) from e

    def _parse_article(self, data: Any, method: str, path: str) -> Article:
        if not isinstance(data, dict):
            logger.error("Blog API returned no article object for %s %s", method, path)
            raise UnknownError("Unexpected response body")
        try:
            return Article.from_dict(data)
        except (AttributeError, TypeError, ValueError) as e:
            logger.error("Blog API returned an unreadable article for %s %s: %s", method, path, e)
            raise UnknownError(f"Unexpected article data: {e}") from e

    def _parse_page(self, data: Any, method: str, path: str, page: int, page_size: int) -> ArticlePage:
        try:
            return ArticlePage.from_response(data or [], page=page, page_size=page_size)
        except (AttributeError, TypeError, ValueError) as e:
            logger.error("Blog API returned an unreadable article list for %s %s: %s", method, path, e)
            raise UnknownError(f"Unexpected article list: {e}") from e

    def get_public_articles(self, page: int = 1, page_size: int = 10) -> ArticlePage:
        """
        List published articles.

        Args:
            page: Page number, starting at 1
            page_size: Articles per page

        Returns:
            ArticlePage with results and total count
        """
        path = "/articles/public_articles/"
        data = self._request("GET", path, params={"page": page, "page_size": page_size})
        return self._parse_page(data, "GET", path, page, page_size)

    def get_public_article(self, id_or_slug: str) -> Article:
        """
        Fetch a single publicly visible article.

        Args:
            id_or_slug: Article ID or slug

        Returns:
            Article
        """
        path = f"/articles/public_articles/{id_or_slug}/"
        return self._parse_article(self._request("GET", path), "GET", path)

    def get_user_articles(self, user_id: Any, page: int = 1, page_size: int = 10) -> ArticlePage:
        """
        List articles owned by a user, drafts included.

        Args:
            user_id: Owner's user ID
            page: Page number, starting at 1
            page_size: Articles per page

        Returns:
            ArticlePage with results and total count
        """
        path = f"/articles/user_articles/{user_id}/"
        data = self._request("GET", path, params={"page": page, "page_size": page_size})
        return self._parse_page(data, "GET", path, page, page_size)

    def get_user_article(self, user_id: Any, id_or_slug: str) -> Article:
        """
        Fetch a single article within a user's own articles.

        Args:
            user_id: Owner's user ID
            id_or_slug: Article ID or slug

        Returns:
            Article
        """
        path = f"/articles/user_articles/{user_id}/{id_or_slug}/"
        return self._parse_article(self._request("GET", path), "GET", path)

    def get_my_articles(self, actor: Actor, page: int = 1, page_size: int = 10) -> ArticlePage:
        """List the given actor's own articles."""
        return self.get_user_articles(actor.id, page=page, page_size=page_size)

    def create_article(self, payload: Dict[str, Any]) -> Article:
        """
        Create an article.

        Args:
            payload: {title, content, status, publish_date}

        Returns:
            Created article with server-assigned id, slug and timestamps

        Raises:
            UnauthenticatedError: If no access token is configured
        """
        self._require_token()
        path = "/articles/create/"
        return self._parse_article(self._request("POST", path, json=payload), "POST", path)

    def update_article(self, user_id: Any, article_id: Any, payload: Dict[str, Any]) -> Article:
        """
        Update one of the user's articles.

        Args:
            user_id: Owner's user ID
            article_id: Article ID
            payload: Fields to change

        Returns:
            Updated article
        """
        self._require_token()
        path = f"/articles/user_articles/{user_id}/{article_id}/"
        return self._parse_article(self._request("PATCH", path, json=payload), "PATCH", path)

    def delete_article(self, user_id: Any, article_id: Any) -> None:
        """
        Delete one of the user's articles.

        Args:
            user_id: Owner's user ID
            article_id: Article ID
        """
        self._require_token()
        self._request("DELETE", f"/articles/user_articles/{user_id}/{article_id}/")
