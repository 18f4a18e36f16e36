"""Shared fixtures for portfolio tests."""
import asyncio
from datetime import datetime, timezone
from typing import List, Optional
import pytest
from portfolio.domain.github_interface import IGitHubClient
from portfolio.domain.models import Profile, Repository


def _timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


@pytest.fixture
def make_repository():
    """Factory building Repository entities with sensible defaults."""
    counter = {"id": 0}

    def factory(
        name: str,
        stars: int = 0,
        updated: str = "2024-01-01",
        archived: bool = False,
        topics=(),
        language: Optional[str] = None,
        description: Optional[str] = None,
        homepage: Optional[str] = None,
        forks: int = 0
    ) -> Repository:
        counter["id"] += 1
        return Repository(
            repo_id=counter["id"],
            name=name,
            html_url=f"https://github.com/adam-olser/{name}",
            star_count=stars,
            fork_count=forks,
            created_at=_timestamp("2020-01-01"),
            updated_at=_timestamp(updated),
            description=description,
            homepage=homepage,
            topics=tuple(topics),
            language=language,
            archived=archived
        )

    return factory


@pytest.fixture
def profile():
    return Profile(
        login="adam-olser",
        name="Adam Olser",
        followers=12,
        following=3,
        public_repos=25,
        avatar_url="https://avatars.githubusercontent.com/u/1",
        html_url="https://github.com/adam-olser",
        location="Brno, Czech Republic"
    )


class FakeGitHubClient(IGitHubClient):
    """In-memory IGitHubClient returning queued results or raising queued errors."""

    def __init__(self, profile: Optional[Profile] = None, repositories: Optional[List[Repository]] = None):
        self.profile = profile
        self.repositories = repositories or []
        self.profile_error: Optional[Exception] = None
        self.repositories_error: Optional[Exception] = None
        self.delay = 0.0
        self.profile_calls = 0
        self.repository_calls = 0
        self.closed = False

    async def fetch_profile(self) -> Profile:
        self.profile_calls += 1
        await asyncio.sleep(self.delay)
        if self.profile_error is not None:
            raise self.profile_error
        return self.profile

    async def fetch_repositories(self) -> List[Repository]:
        self.repository_calls += 1
        await asyncio.sleep(self.delay)
        if self.repositories_error is not None:
            raise self.repositories_error
        return list(self.repositories)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_client(profile):
    return FakeGitHubClient(profile=profile)
