"""
Local disk session store implementation.

Keeps the signed-in user's session in a JSON file.
"""
import logging
import os
from typing import Any, Dict, Optional

from src.file_utils import load_json_file
from src.models import Actor
from src.session_store import SessionStore

logger = logging.getLogger(__name__)


class LocalDiskSessionStore(SessionStore):
    """Local disk implementation for session storage."""

    FILENAME = "session.json"

    def __init__(self, state_dir: str = "state"):
        """
        Initialize the local disk session store.

        Args:
            state_dir: Directory to store the session file (default: "state")
        """
        self.state_dir = state_dir
        self.session_file = os.path.join(state_dir, self.FILENAME)

    def _load(self) -> Optional[Dict[str, Any]]:
        try:
            return load_json_file(self.session_file, None)
        except ValueError:
            logger.warning("Session file %s is not valid JSON, ignoring it", self.session_file)
            return None

    def get_current_actor(self) -> Optional[Actor]:
        """Return the actor recorded in the session file, if any."""
        data = self._load()
        if not data or data.get("user_id") is None:
            return None
        return Actor(id=data["user_id"], username=data.get("username", ""))

    def get_access_token(self) -> Optional[str]:
        """Return the stored token, if any."""
        data = self._load()
        if not data:
            return None
        return data.get("access_token") or None
