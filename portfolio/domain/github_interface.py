"""GitHub API interface (port) for fetching profile and repository data.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from typing import List
from portfolio.domain.models import Profile, Repository


class GitHubFetchError(Exception):
    """Base exception for any failed fetch against the GitHub API."""
    pass


class GitHubTransportError(GitHubFetchError):
    """Exception raised when the request never produced a response."""
    pass


class GitHubStatusError(GitHubFetchError):
    """Exception raised when the API answers with a non-success status."""

    def __init__(self, status: int, url: str):
        super().__init__(f"GitHub API returned HTTP {status} for {url}")
        self.status = status
        self.url = url


class MalformedResponseError(GitHubFetchError):
    """Exception raised when a response body cannot be turned into entities."""
    pass


class IGitHubClient(ABC):
    """Abstract interface for GitHub API operations."""

    @abstractmethod
    async def fetch_profile(self) -> Profile:
        """Fetch the configured user's profile.

        Raises:
            GitHubFetchError: On transport, status or parsing failure
        """
        pass

    @abstractmethod
    async def fetch_repositories(self) -> List[Repository]:
        """Fetch one bounded page of the user's repositories.

        Returns:
            Repository entities in API order

        Raises:
            GitHubFetchError: On transport, status or parsing failure
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
