"""
Abstract base class for session stores.

Defines the identity interface the article client needs: who is signed in,
and which token to send. Implementations keep the session locally or read it
from the environment.
"""
from abc import ABC, abstractmethod
from typing import Optional

from src.models import Actor


class SessionStore(ABC):
    """Abstract base class for session storage backends."""

    @abstractmethod
    def get_current_actor(self) -> Optional[Actor]:
        """
        Return the signed-in actor without any network call.

        Returns:
            Actor, or None when nobody is signed in
        """

    @abstractmethod
    def get_access_token(self) -> Optional[str]:
        """
        Return the bearer token for API requests.

        Returns:
            Token string, or None when nobody is signed in
        """
