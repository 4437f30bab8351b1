"""
Unit tests for session stores and their factory.
"""
import json
import os
import tempfile

import pytest

from src.env_var_session_store import EnvVarSessionStore
from src.local_disk_session_store import LocalDiskSessionStore
from src.models import Actor
from src.session_store import SessionStore
from src.session_store_factory import create_session_store


class TestLocalDiskSessionStore:
    """Test suite for LocalDiskSessionStore."""

    @pytest.fixture
    def temp_state_dir(self):
        """Create a temporary state directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield tmpdir

    @pytest.fixture
    def store(self, temp_state_dir):
        return LocalDiskSessionStore(state_dir=temp_state_dir)

    def test_no_session_means_no_actor(self, store):
        """Test that an empty store has no actor or token."""
        assert store.get_current_actor() is None
        assert store.get_access_token() is None

    def write_session(self, state_dir, data):
        with open(os.path.join(state_dir, "session.json"), 'w', encoding='utf-8') as f:
            json.dump(data, f)

    def test_session_file_is_returned(self, store, temp_state_dir):
        """Test that the session file yields the actor and token."""
        self.write_session(temp_state_dir, {"access_token": "token_123", "user_id": 42, "username": "writer"})
        assert store.get_current_actor() == Actor(id=42, username="writer")
        assert store.get_access_token() == "token_123"

    def test_session_without_user_is_anonymous(self, store, temp_state_dir):
        """Test that a token with no user ID gives no actor."""
        self.write_session(temp_state_dir, {"access_token": "token_123"})
        assert store.get_current_actor() is None
        assert store.get_access_token() == "token_123"

    def test_corrupt_file_is_ignored(self, store, temp_state_dir):
        """Test that an unreadable session file counts as signed out."""
        with open(os.path.join(temp_state_dir, "session.json"), 'w', encoding='utf-8') as f:
            f.write("{not json")
        assert store.get_current_actor() is None


class TestSessionStoreInterface:
    """Test suite for the SessionStore base class."""

    def test_read_only_backend_is_complete(self):
        """Test that a backend only needs the actor and token lookups."""
        class FixedSessionStore(SessionStore):
            def get_current_actor(self):
                return Actor(id=1)

            def get_access_token(self):
                return "token"

        store = FixedSessionStore()
        assert store.get_current_actor() == Actor(id=1)
        assert SessionStore.__abstractmethods__ == {"get_current_actor", "get_access_token"}


class TestEnvVarSessionStore:
    """Test suite for EnvVarSessionStore."""

    def test_reads_environment(self, monkeypatch):
        """Test that the session comes from environment variables."""
        monkeypatch.setenv("BLOG_USER_ID", "42")
        monkeypatch.setenv("BLOG_USERNAME", "writer")
        monkeypatch.setenv("BLOG_ACCESS_TOKEN", "env_token")

        store = EnvVarSessionStore()

        assert store.get_current_actor() == Actor(id="42", username="writer")
        assert store.get_access_token() == "env_token"

    def test_missing_user_is_anonymous(self, monkeypatch):
        """Test that no user ID means no actor."""
        monkeypatch.delenv("BLOG_USER_ID", raising=False)
        monkeypatch.delenv("BLOG_ACCESS_TOKEN", raising=False)
        store = EnvVarSessionStore()
        assert store.get_current_actor() is None
        assert store.get_access_token() is None


class TestSessionStoreFactory:
    """Test suite for session store factory."""

    def test_factory_returns_local_by_default(self, monkeypatch, tmp_path):
        """Test that factory returns LocalDiskSessionStore by default."""
        monkeypatch.delenv('SESSION_STORAGE_TYPE', raising=False)
        store = create_session_store(state_dir=str(tmp_path))
        assert isinstance(store, LocalDiskSessionStore)
        assert store.state_dir == str(tmp_path)

    def test_factory_returns_env_var_case_insensitive(self, monkeypatch):
        """Test that factory is case-insensitive for 'env_var'."""
        monkeypatch.setenv('SESSION_STORAGE_TYPE', 'ENV_VAR')
        assert isinstance(create_session_store(), EnvVarSessionStore)

    def test_factory_defaults_to_local_for_unknown_type(self, monkeypatch, tmp_path):
        """Test that factory defaults to local for unknown storage type."""
        monkeypatch.setenv('SESSION_STORAGE_TYPE', 'unknown')
        assert isinstance(create_session_store(state_dir=str(tmp_path)), LocalDiskSessionStore)
