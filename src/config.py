"""
Configuration management for the blog article client.
Loads environment variables and provides access to configuration settings.
"""
import logging
import os
from dotenv import load_dotenv

# Configure logging
logger = logging.getLogger(__name__)


class Config:
    """Configuration settings loaded from environment variables."""

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        load_dotenv()

    @property
    def blog_api_base_url(self) -> str:
        """Get the blog API base URL without a trailing slash."""
        return os.getenv("BLOG_API_BASE_URL", "http://127.0.0.1:8000/api").rstrip("/")

    @property
    def request_timeout(self) -> int:
        """Get HTTP request timeout in seconds."""
        return int(os.getenv("REQUEST_TIMEOUT", "30"))

    @property
    def page_size(self) -> int:
        """Get the number of articles per list page."""
        return int(os.getenv("PAGE_SIZE", "10"))

    @property
    def display_timezone(self) -> str:
        """Get the IANA timezone name used for schedule inputs.

        Falls back to UTC when the configured name is empty.
        """
        value = os.getenv("DISPLAY_TIMEZONE", "UTC").strip()
        if not value:
            logger.warning("DISPLAY_TIMEZONE is empty, using UTC")
            return "UTC"
        return value

    @property
    def state_dir(self) -> str:
        """Get the directory for local session state."""
        return os.getenv("STATE_DIR", "state")

    @property
    def dashboard_port(self) -> int:
        """Get dashboard server port."""
        return int(os.getenv("DASHBOARD_PORT", "5000"))

    @property
    def dashboard_host(self) -> str:
        """Get dashboard server host."""
        return os.getenv("DASHBOARD_HOST", "127.0.0.1")
