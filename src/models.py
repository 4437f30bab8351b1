"""
Data model for the blog article client.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from src.date_coercion import format_instant, parse_instant


class ArticleStatus(str, Enum):
    """Publication status of an article."""

    DRAFT = "draft"
    PUBLISHED = "published"

    @classmethod
    def coerce(cls, value: Union[str, "ArticleStatus"]) -> "ArticleStatus":
        """
        Convert a raw status value to an ArticleStatus.

        Raises:
            ValueError: If the value is not a known status
        """
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


@dataclass(frozen=True)
class Actor:
    """The authenticated user performing an action."""

    id: Any
    username: str = ""


@dataclass
class Article:
    """Client-side copy of an article owned by the server."""

    id: Any
    slug: str = ""
    title: str = ""
    content: str = ""
    status: ArticleStatus = ArticleStatus.DRAFT
    publish_date: Optional[datetime] = None
    author: Any = None
    author_username: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    estimated_read_time: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Article":
        """
        Build an Article from a server JSON object.

        Args:
            data: Decoded JSON object; unknown keys are ignored

        Returns:
            Article instance
        """
        return cls(
            id=data.get("id"),
            slug=data.get("slug") or "",
            title=data.get("title") or "",
            content=data.get("content") or "",
            status=ArticleStatus.coerce(data.get("status") or ArticleStatus.DRAFT),
            publish_date=parse_instant(data.get("publish_date")),
            author=data.get("author"),
            author_username=data.get("author_username") or "",
            created_at=parse_instant(data.get("created_at")),
            updated_at=parse_instant(data.get("updated_at")),
            estimated_read_time=data.get("estimated_read_time"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the article back to its JSON shape."""
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "content": self.content,
            "status": self.status.value,
            "publish_date": format_instant(self.publish_date),
            "author": self.author,
            "author_username": self.author_username,
            "created_at": format_instant(self.created_at),
            "updated_at": format_instant(self.updated_at),
            "estimated_read_time": self.estimated_read_time,
        }


@dataclass
class ArticlePage:
    """One page of an article listing."""

    results: List[Article] = field(default_factory=list)
    count: int = 0
    page: int = 1
    page_size: int = 10

    @classmethod
    def from_response(cls, data: Union[Dict[str, Any], List[Dict[str, Any]]],
                      page: int = 1, page_size: int = 10) -> "ArticlePage":
        """
        Build a page from a paginated response or a bare list.

        Args:
            data: {"results": [...], "count": N} or a list of article objects
            page: Requested page number
            page_size: Requested page size

        Returns:
            ArticlePage instance
        """
        if isinstance(data, list):
            items = data
            count = len(data)
        else:
            items = data.get("results", [])
            count = data.get("count", len(items))
        return cls(
            results=[Article.from_dict(item) for item in items],
            count=int(count),
            page=page,
            page_size=page_size,
        )

    @property
    def total_pages(self) -> int:
        """Number of pages, never less than one."""
        if self.page_size <= 0:
            return 1
        return max(1, math.ceil(self.count / self.page_size))


@dataclass
class FormState:
    """Working copy of the create/edit form fields."""

    title: str = ""
    content: str = ""
    status: ArticleStatus = ArticleStatus.DRAFT
    publish_date_local: str = ""
