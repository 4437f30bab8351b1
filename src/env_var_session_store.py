"""
Environment variable session store implementation.

Reads the session directly from environment variables.
The session is read-only here.
"""
import os
from typing import Optional

from src.models import Actor
from src.session_store import SessionStore


class EnvVarSessionStore(SessionStore):
    """Environment variable implementation for session storage."""

    def get_current_actor(self) -> Optional[Actor]:
        """
        Build the actor from BLOG_USER_ID and BLOG_USERNAME.

        Returns:
            Actor, or None if BLOG_USER_ID is not set
        """
        user_id = os.getenv("BLOG_USER_ID")
        if not user_id:
            return None
        return Actor(id=user_id, username=os.getenv("BLOG_USERNAME", ""))

    def get_access_token(self) -> Optional[str]:
        """Return BLOG_ACCESS_TOKEN, or None if not set."""
        return os.getenv("BLOG_ACCESS_TOKEN") or None
