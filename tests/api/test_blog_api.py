"""
API tests for the blog API wrapper.
"""
import pytest
import requests
import requests_mock

from src.blog_api import BlogAPI
from src.errors import (
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
    UnknownError,
    ValidationFailedError,
)
from src.models import Actor, ArticleStatus

BASE_URL = "https://blog.example.com/api"


def article_json(**overrides):
    data = {
        "id": 7,
        "slug": "hello-world",
        "title": "Hello World",
        "content": "Some words here",
        "status": "published",
        "publish_date": None,
        "author": 3,
        "author_username": "writer",
        "created_at": "2025-03-01T14:30:00Z",
        "updated_at": "2025-03-01T14:30:00Z",
        "estimated_read_time": 1,
    }
    data.update(overrides)
    return data


class TestBlogAPI:
    """Test suite for BlogAPI class."""

    @pytest.fixture
    def blog_api(self):
        """Create BlogAPI instance for testing."""
        return BlogAPI(base_url=BASE_URL, access_token="test_token")

    @pytest.fixture
    def anonymous_api(self):
        """Create BlogAPI instance without a token."""
        return BlogAPI(base_url=BASE_URL)

    def test_base_url_trailing_slash_is_stripped(self):
        """Test that a trailing slash on the base URL is dropped."""
        api = BlogAPI(base_url=BASE_URL + "/")
        assert api.base_url == BASE_URL

    def test_get_public_articles(self, anonymous_api):
        """Test listing public articles with pagination parameters."""
        with requests_mock.Mocker() as m:
            m.get(
                f"{BASE_URL}/articles/public_articles/",
                json={"results": [article_json()], "count": 25}
            )

            page = anonymous_api.get_public_articles(page=2, page_size=10)

            assert m.last_request.qs == {"page": ["2"], "page_size": ["10"]}
            assert "Authorization" not in m.last_request.headers
            assert page.count == 25
            assert page.total_pages == 3
            assert page.results[0].slug == "hello-world"

    def test_get_public_article(self, anonymous_api):
        """Test fetching a single public article by slug."""
        with requests_mock.Mocker() as m:
            m.get(f"{BASE_URL}/articles/public_articles/hello-world/", json=article_json())

            article = anonymous_api.get_public_article("hello-world")

            assert article.id == 7
            assert article.status == ArticleStatus.PUBLISHED

    def test_get_user_article_sends_token(self, blog_api):
        """Test owner-scoped lookup uses the user path and bearer token."""
        with requests_mock.Mocker() as m:
            m.get(
                f"{BASE_URL}/articles/user_articles/3/hello-world/",
                json=article_json(status="draft")
            )

            article = blog_api.get_user_article(3, "hello-world")

            assert m.last_request.headers["Authorization"] == "Bearer test_token"
            assert article.status == ArticleStatus.DRAFT

    def test_get_my_articles_accepts_bare_list(self, blog_api):
        """Test that an unpaginated list response is accepted."""
        with requests_mock.Mocker() as m:
            m.get(
                f"{BASE_URL}/articles/user_articles/3/",
                json=[article_json(), article_json(id=8, slug="second")]
            )

            page = blog_api.get_my_articles(Actor(id=3, username="writer"))

            assert page.count == 2
            assert [a.id for a in page.results] == [7, 8]

    def test_create_article_posts_payload(self, blog_api):
        """Test creating an article sends the JSON body."""
        payload = {"title": "Hello", "content": "a b c", "status": "published", "publish_date": None}
        with requests_mock.Mocker() as m:
            m.post(f"{BASE_URL}/articles/create/", status_code=201, json=article_json(title="Hello"))

            article = blog_api.create_article(payload)

            assert m.last_request.json() == payload
            assert article.title == "Hello"

    def test_update_article_uses_patch(self, blog_api):
        """Test updating an article uses PATCH on the owner path."""
        with requests_mock.Mocker() as m:
            m.patch(f"{BASE_URL}/articles/user_articles/3/7/", json=article_json(title="Changed"))

            article = blog_api.update_article(3, 7, {"title": "Changed"})

            assert m.last_request.method == "PATCH"
            assert article.title == "Changed"

    def test_delete_article_handles_empty_response(self, blog_api):
        """Test deleting an article with a 204 response."""
        with requests_mock.Mocker() as m:
            m.delete(f"{BASE_URL}/articles/user_articles/3/7/", status_code=204)

            assert blog_api.delete_article(3, 7) is None
            assert m.called_once

    def test_mutations_require_token(self, anonymous_api):
        """Test that mutating calls fail locally without a token."""
        with requests_mock.Mocker() as m:
            with pytest.raises(UnauthenticatedError):
                anonymous_api.create_article({"title": "x"})
            with pytest.raises(UnauthenticatedError):
                anonymous_api.delete_article(3, 7)
            assert not m.called

    def test_not_found_raises_not_found(self, anonymous_api):
        """Test that 404 maps to NotFoundError."""
        with requests_mock.Mocker() as m:
            m.get(
                f"{BASE_URL}/articles/public_articles/missing/",
                status_code=404,
                json={"detail": "Not found."}
            )

            with pytest.raises(NotFoundError) as exc_info:
                anonymous_api.get_public_article("missing")
            assert exc_info.value.status_code == 404
            assert exc_info.value.message == "Not found."

    def test_forbidden_raises_forbidden(self, blog_api):
        """Test that 403 maps to ForbiddenError."""
        with requests_mock.Mocker() as m:
            m.get(f"{BASE_URL}/articles/user_articles/3/7/", status_code=403, json={})

            with pytest.raises(ForbiddenError):
                blog_api.get_user_article(3, 7)

    def test_validation_errors_are_field_keyed(self, blog_api):
        """Test that a 400 body becomes field-keyed validation errors."""
        with requests_mock.Mocker() as m:
            m.post(
                f"{BASE_URL}/articles/create/",
                status_code=400,
                json={"title": ["This field may not be blank."], "publish_date": "Bad date"}
            )

            with pytest.raises(ValidationFailedError) as exc_info:
                blog_api.create_article({"title": ""})
            assert exc_info.value.field_errors == {
                "title": ["This field may not be blank."],
                "publish_date": ["Bad date"],
            }

    def test_unparseable_error_body_is_unknown(self, blog_api):
        """Test that a non-JSON error body maps to UnknownError."""
        with requests_mock.Mocker() as m:
            m.get(f"{BASE_URL}/articles/public_articles/", status_code=500, text="<html>boom</html>")

            with pytest.raises(UnknownError) as exc_info:
                blog_api.get_public_articles()
            assert exc_info.value.status_code == 500

    def test_connection_error_is_unknown(self, blog_api):
        """Test that transport failures map to UnknownError."""
        with requests_mock.Mocker() as m:
            m.get(
                f"{BASE_URL}/articles/public_articles/",
                exc=requests.exceptions.ConnectionError("refused")
            )

            with pytest.raises(UnknownError):
                blog_api.get_public_articles()

    def test_empty_article_body_is_unknown(self, anonymous_api):
        """Test that a successful response with no body maps to UnknownError."""
        with requests_mock.Mocker() as m:
            m.get(f"{BASE_URL}/articles/public_articles/hello-world/", status_code=200, text="")

            with pytest.raises(UnknownError):
                anonymous_api.get_public_article("hello-world")

    def test_unknown_article_status_is_unknown(self, blog_api):
        """Test that an article with an unrecognised status maps to UnknownError."""
        with requests_mock.Mocker() as m:
            m.patch(
                f"{BASE_URL}/articles/user_articles/3/7/",
                json=article_json(status="archived")
            )

            with pytest.raises(UnknownError):
                blog_api.update_article(3, 7, {"title": "Hello"})

    def test_list_with_malformed_items_is_unknown(self, anonymous_api):
        """Test that a listing whose items are not objects maps to UnknownError."""
        with requests_mock.Mocker() as m:
            m.get(f"{BASE_URL}/articles/public_articles/", json={"results": ["hello-world"], "count": 1})

            with pytest.raises(UnknownError):
                anonymous_api.get_public_articles()
