"""GitHub REST API client implementation for public profile and repository data."""
import asyncio
import logging
from datetime import datetime
from typing import Any, List, Optional
import aiohttp
from portfolio.domain.github_interface import (
    GitHubStatusError,
    GitHubTransportError,
    IGitHubClient,
    MalformedResponseError,
)
from portfolio.domain.models import Profile, Repository


logger = logging.getLogger(__name__)

GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_ACCEPT_HEADER = "application/vnd.github+json"
REPOSITORIES_PER_PAGE = 100
REPOSITORIES_SORT = "updated"
REQUEST_TIMEOUT_SECONDS = 30.0


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise MalformedResponseError(f"Expected ISO timestamp, got {value!r}")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise MalformedResponseError(f"Invalid timestamp {value!r}") from e


def _required_text(data: dict, field: str) -> str:
    value = data.get(field)
    if not isinstance(value, str) or not value:
        raise MalformedResponseError(f"Expected non-empty string for {field!r}, got {value!r}")
    return value


def _nullable_text(data: dict, field: str) -> Optional[str]:
    value = data.get(field)
    if value is not None and not isinstance(value, str):
        raise MalformedResponseError(f"Expected string or null for {field!r}, got {value!r}")
    return value


def _optional_text(data: dict, field: str) -> Optional[str]:
    # GitHub sends "" for unset homepage/blog fields
    return _nullable_text(data, field) or None


def _count(data: dict, field: str) -> int:
    value = data.get(field, 0)
    # bool is an int subclass
    if not isinstance(value, int) or isinstance(value, bool):
        raise MalformedResponseError(f"Expected integer for {field!r}, got {value!r}")
    return value


def parse_repository(node: Any) -> Repository:
    """Transform one GitHub repository object into a domain entity.

    Values of the wrong type are rejected rather than coerced.

    Raises:
        MalformedResponseError: When required fields are missing or mistyped
    """
    if not isinstance(node, dict):
        raise MalformedResponseError(f"Expected repository object, got {type(node).__name__}")
    repo_id = node.get("id")
    if not isinstance(repo_id, int) or isinstance(repo_id, bool):
        raise MalformedResponseError(f"Expected integer repository id, got {repo_id!r}")
    topics = node.get("topics")
    if topics is None:
        topics = []
    if not isinstance(topics, list) or not all(isinstance(topic, str) for topic in topics):
        raise MalformedResponseError(f"Invalid topics for repository {node.get('name')!r}")
    archived = node.get("archived", False)
    if not isinstance(archived, bool):
        raise MalformedResponseError(f"Expected boolean 'archived', got {archived!r}")
    return Repository(
        repo_id=repo_id,
        name=_required_text(node, "name"),
        html_url=_required_text(node, "html_url"),
        star_count=_count(node, "stargazers_count"),
        fork_count=_count(node, "forks_count"),
        created_at=_parse_timestamp(node.get("created_at")),
        updated_at=_parse_timestamp(node.get("updated_at")),
        description=_nullable_text(node, "description"),
        homepage=_optional_text(node, "homepage"),
        topics=tuple(topics),
        language=_nullable_text(node, "language"),
        archived=archived
    )


def parse_profile(data: Any) -> Profile:
    """Transform a GitHub user object into a domain entity.

    Raises:
        MalformedResponseError: When required fields are missing or mistyped
    """
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected user object, got {type(data).__name__}")
    return Profile(
        login=_required_text(data, "login"),
        name=_nullable_text(data, "name"),
        followers=_count(data, "followers"),
        following=_count(data, "following"),
        public_repos=_count(data, "public_repos"),
        avatar_url=_required_text(data, "avatar_url"),
        html_url=_required_text(data, "html_url"),
        bio=_nullable_text(data, "bio"),
        location=_nullable_text(data, "location"),
        blog=_optional_text(data, "blog")
    )


class GitHubRestClient(IGitHubClient):
    """Unauthenticated GitHub REST client for one user's public data.

    Implements the IGitHubClient port. Every failure is reported as a
    GitHubFetchError subclass; no retries are attempted.
    """

    def __init__(
        self,
        username: str,
        base_url: str = GITHUB_API_BASE_URL,
        timeout_seconds: float = REQUEST_TIMEOUT_SECONDS,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """Initialize GitHub client.

        Args:
            username: GitHub login whose data is fetched
            base_url: API root, without trailing slash
            timeout_seconds: Total timeout per request
            session: Optional pre-built session; the client will not close it
        """
        self._username = username
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._session = session
        self._owns_session = session is None

    @property
    def username(self) -> str:
        return self._username

    def _get_session(self) -> aiohttp.ClientSession:
        """Create the HTTP session on first use (lazy initialization)."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                headers={"Accept": GITHUB_API_ACCEPT_HEADER},
                timeout=self._timeout
            )
        return self._session

    async def _get_json(self, path: str, params: Optional[dict] = None) -> Any:
        """GET a JSON document from the API.

        Raises:
            GitHubTransportError: When the request could not be completed
            GitHubStatusError: When the status is not 2xx
            MalformedResponseError: When the body is not JSON
        """
        url = f"{self._base_url}{path}"
        session = self._get_session()
        try:
            async with session.get(url, params=params) as response:
                if not 200 <= response.status < 300:
                    raise GitHubStatusError(response.status, url)
                try:
                    return await response.json(content_type=None)
                except ValueError as e:
                    raise MalformedResponseError(f"Response from {url} is not valid JSON") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise GitHubTransportError(f"Request to {url} failed: {e!r}") from e

    async def fetch_profile(self) -> Profile:
        """Fetch the user's public profile."""
        data = await self._get_json(f"/users/{self._username}")
        profile = parse_profile(data)
        logger.info(f"Fetched profile for {profile.login}")
        return profile

    async def fetch_repositories(self) -> List[Repository]:
        """Fetch a single page of the user's most recently updated repositories."""
        data = await self._get_json(
            f"/users/{self._username}/repos",
            params={"sort": REPOSITORIES_SORT, "per_page": str(REPOSITORIES_PER_PAGE)}
        )
        if not isinstance(data, list):
            raise MalformedResponseError(
                f"Expected repository list, got {type(data).__name__}"
            )
        repositories = [parse_repository(node) for node in data]
        logger.info(f"Fetched {len(repositories)} repositories for {self._username}")
        return repositories

    async def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None
