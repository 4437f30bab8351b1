"""
Factory function for creating session stores.

Selects the appropriate session storage backend based on environment variable.
"""
import os

from src.session_store import SessionStore
from src.local_disk_session_store import LocalDiskSessionStore
from src.env_var_session_store import EnvVarSessionStore


def create_session_store(state_dir: str = "state") -> SessionStore:
    """
    Create a session store instance based on configuration.

    Args:
        state_dir: Directory for local storage (only used for local implementation)

    Returns:
        SessionStore instance (LocalDiskSessionStore or EnvVarSessionStore)

    Environment Variables:
        SESSION_STORAGE_TYPE: Storage backend ('local' or 'env_var', default: 'local')
        BLOG_ACCESS_TOKEN, BLOG_USER_ID, BLOG_USERNAME: Used by env_var storage
    """
    storage_type = os.getenv("SESSION_STORAGE_TYPE", "local").lower()

    if storage_type == "env_var":
        return EnvVarSessionStore()

    # Default to local for any other value (including "local", "", None, etc.)
    return LocalDiskSessionStore(state_dir=state_dir)
