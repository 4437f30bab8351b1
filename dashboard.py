"""
Dashboard server for the blog article client.
Provides a JSON interface for browsing, writing and managing articles.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse

from src.access_resolver import AccessResolver
from src.blog_api import BlogAPI
from src.config import Config
from src.date_coercion import resolve_timezone
from src.errors import (
    ArticleServiceError,
    ForbiddenError,
    NotFoundError,
    UnauthenticatedError,
    ValidationFailedError,
)
from src.lifecycle import LifecycleController, SubmitAction
from src.metrics import estimated_read_time, word_count
from src.session_store import SessionStore
from src.session_store_factory import create_session_store

# Configure dashboard logger
logger = logging.getLogger('dashboard')
logger.setLevel(logging.INFO)

# Add console handler if not already present
if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)


def sanitize_log_input(value: str) -> str:
    """
    Sanitize user input for logging to prevent log injection attacks.
    Removes newlines and other control characters that could be used for log forging.

    Args:
        value: The user input to sanitize

    Returns:
        Sanitized string safe for logging
    """
    if not isinstance(value, str):
        value = str(value)
    sanitized = value.replace('\n', '_').replace('\r', '_').replace('\t', '_')
    # Truncate to reasonable length to prevent log flooding
    return sanitized[:200]


def to_http_exception(error: ArticleServiceError) -> HTTPException:
    """Map a blog API failure to the dashboard's HTTP error."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail="Article not found")
    if isinstance(error, ForbiddenError):
        return HTTPException(status_code=403, detail="Forbidden")
    if isinstance(error, UnauthenticatedError):
        return HTTPException(status_code=401, detail="Authentication required")
    if isinstance(error, ValidationFailedError):
        return HTTPException(status_code=400, detail=error.field_errors)
    return HTTPException(status_code=502, detail="Blog API unavailable")


def create_dashboard_app(blog_api: Optional[BlogAPI] = None,
                         session_store: Optional[SessionStore] = None,
                         config: Optional[Config] = None) -> FastAPI:
    """
    Create a dashboard FastAPI application.

    Args:
        blog_api: Optional BlogAPI instance (defaults to one built from config and session)
        session_store: Optional session store (defaults to factory-created)
        config: Optional Config instance

    Returns:
        FastAPI application instance
    """
    app = FastAPI()  # pylint: disable=redefined-outer-name

    if config is None:
        config = Config()
    if session_store is None:
        session_store = create_session_store(state_dir=config.state_dir)
    if blog_api is None:
        blog_api = BlogAPI(
            base_url=config.blog_api_base_url,
            access_token=session_store.get_access_token(),
            timeout=config.request_timeout
        )

    resolver = AccessResolver(blog_api)
    display_tz = resolve_timezone(config.display_timezone)
    page_size = config.page_size

    def require_actor(route: str):
        actor = session_store.get_current_actor()
        if actor is None:
            logger.warning(f"{route} - 401 Not signed in")
            raise HTTPException(status_code=401, detail="Authentication required")
        return actor

    async def read_form(request: Request, route: str) -> dict:
        try:
            data = await request.json()
        except ValueError as exc:
            logger.warning(f"{route} - 400 Malformed JSON body")
            raise HTTPException(status_code=400, detail="Request body must be JSON") from exc
        if not isinstance(data, dict):
            logger.warning(f"{route} - 400 Body is not an object")
            raise HTTPException(status_code=400, detail="Request body must be a JSON object")
        return data

    def apply_form(controller: LifecycleController, data: dict) -> SubmitAction:
        fields = {name: data[name] for name in LifecycleController.EDITABLE_FIELDS if name in data}
        try:
            controller.update(**fields)
            return SubmitAction(data.get("action", SubmitAction.SUBMIT.value))
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

    # ================== READING ==================
    @app.get("/api/articles")
    async def list_articles(page: int = 1):
        """List published articles."""
        logger.info(f"GET /api/articles?page={page}")
        try:
            result = blog_api.get_public_articles(page=page, page_size=page_size)
        except ArticleServiceError as exc:
            logger.error(f"GET /api/articles - failed: {exc.message}")
            raise to_http_exception(exc) from exc
        return JSONResponse({
            "articles": [a.to_dict() for a in result.results],
            "count": result.count,
            "page": page,
            "total_pages": result.total_pages,
        })

    @app.get("/api/articles/{identifier}")
    async def get_article(identifier: str):
        """Fetch one article, trying the signed-in user's own articles first."""
        sanitized_id = sanitize_log_input(identifier)
        logger.info(f"GET /api/articles/{sanitized_id}")
        actor = session_store.get_current_actor()
        try:
            article = resolver.resolve(identifier, actor)
        except ArticleServiceError as exc:
            logger.warning(f"GET /api/articles/{sanitized_id} - {exc.status_code} {exc.message}")
            raise to_http_exception(exc) from exc
        is_author = actor is not None and str(actor.id) == str(article.author)
        return JSONResponse({"article": article.to_dict(), "is_author": is_author})

    @app.get("/api/my-articles")
    async def my_articles(page: int = 1):
        """List the signed-in user's articles."""
        logger.info(f"GET /api/my-articles?page={page}")
        actor = require_actor("GET /api/my-articles")
        try:
            result = blog_api.get_my_articles(actor, page=page, page_size=page_size)
        except ArticleServiceError as exc:
            raise to_http_exception(exc) from exc
        return JSONResponse({
            "articles": [a.to_dict() for a in result.results],
            "count": result.count,
            "page": page,
            "total_pages": result.total_pages,
        })

    # ================== WRITING ==================
    @app.post("/api/articles")
    async def create_article(request: Request):
        """Create an article from form fields."""
        logger.info("POST /api/articles")
        actor = require_actor("POST /api/articles")
        data = await read_form(request, "POST /api/articles")
        controller = LifecycleController.for_create(blog_api, actor, tz=display_tz)
        action = apply_form(controller, data)
        article = controller.submit(action)
        if article is None:
            logger.warning("POST /api/articles - 400 Article not saved")
            return JSONResponse({"errors": controller.errors}, status_code=400)
        logger.info(f"POST /api/articles - 201 Created {sanitize_log_input(article.slug)}")
        return JSONResponse({"article": article.to_dict()}, status_code=201)

    @app.patch("/api/articles/{identifier}")
    async def edit_article(identifier: str, request: Request):
        """Apply edits to one of the signed-in user's articles."""
        sanitized_id = sanitize_log_input(identifier)
        logger.info(f"PATCH /api/articles/{sanitized_id}")
        actor = require_actor(f"PATCH /api/articles/{sanitized_id}")
        data = await read_form(request, f"PATCH /api/articles/{sanitized_id}")
        try:
            original = resolver.resolve(identifier, actor)
        except ArticleServiceError as exc:
            raise to_http_exception(exc) from exc
        if str(original.author) != str(actor.id):
            logger.warning(f"PATCH /api/articles/{sanitized_id} - 403 Not the author")
            raise HTTPException(status_code=403, detail="Forbidden")

        controller = LifecycleController.for_edit(blog_api, actor, original, tz=display_tz)
        action = apply_form(controller, data)
        article = controller.submit(action)
        if article is None:
            logger.warning(f"PATCH /api/articles/{sanitized_id} - 400 Article not saved")
            return JSONResponse({"errors": controller.errors}, status_code=400)
        logger.info(f"PATCH /api/articles/{sanitized_id} - 200")
        return JSONResponse({"article": article.to_dict()})

    @app.delete("/api/articles/{article_id}")
    async def delete_article(article_id: str):
        """Delete one of the signed-in user's articles."""
        sanitized_id = sanitize_log_input(article_id)
        logger.info(f"DELETE /api/articles/{sanitized_id}")
        actor = require_actor(f"DELETE /api/articles/{sanitized_id}")
        try:
            blog_api.delete_article(actor.id, article_id)
        except ArticleServiceError as exc:
            logger.error(f"DELETE /api/articles/{sanitized_id} - failed: {exc.message}")
            raise to_http_exception(exc) from exc
        logger.info(f"DELETE /api/articles/{sanitized_id} - 200")
        return JSONResponse({"status": "ok", "article_id": article_id})

    @app.post("/api/metrics")
    async def content_metrics(request: Request):
        """Live word count and reading time for draft content."""
        data = await read_form(request, "POST /api/metrics")
        content = data.get("content", "")
        if not isinstance(content, str):
            raise HTTPException(status_code=400, detail="content must be a string")
        return JSONResponse({
            "word_count": word_count(content),
            "estimated_read_time": estimated_read_time(content),
        })

    return app
