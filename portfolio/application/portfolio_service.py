"""Portfolio service running fetch cycles and holding the derived view."""
import asyncio
import logging
import time
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Tuple
from portfolio.application.project_cards import ProjectCard, build_project_card
from portfolio.domain.github_interface import GitHubFetchError, IGitHubClient
from portfolio.domain.models import (
    FetchState,
    Profile,
    RefreshMetrics,
    Repository,
    SkillCategory,
)
from portfolio.domain.repository_pipeline import (
    ProjectPartition,
    filter_and_sort,
    partition_projects,
    self_repository_name,
)
from portfolio.domain.skills import categorize_skills, detect_technologies


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PortfolioView:
    """Snapshot of everything the presentation layer renders."""
    state: FetchState
    loading: bool
    profile: Optional[Profile]
    repositories: Tuple[Repository, ...]
    technologies: FrozenSet[str]
    skill_categories: Tuple[SkillCategory, ...]
    featured: Tuple[ProjectCard, ...]
    other: Tuple[ProjectCard, ...]


class PortfolioService:
    """Application service for refreshing portfolio data.

    The profile and the repositories are fetched concurrently and each
    result replaces its own slot as soon as it arrives; there is no joint
    transaction across the two. Derived data is recomputed whenever the
    repositories slot is replaced.
    """

    def __init__(self, github_client: IGitHubClient, username: str):
        """Initialize portfolio service.

        Args:
            github_client: GitHub API client implementation
            username: Login whose GitHub Pages repository is hidden from "other" projects
        """
        self._github_client = github_client
        self._self_repository = self_repository_name(username)
        self._state = FetchState.IDLE
        self._repositories_loaded = False
        self._profile: Optional[Profile] = None
        self._repositories: Tuple[Repository, ...] = ()
        self._technologies: FrozenSet[str] = frozenset()
        self._skill_categories: Tuple[SkillCategory, ...] = tuple(categorize_skills(frozenset()))
        self._partition = ProjectPartition(featured=(), other=())

    @property
    def state(self) -> FetchState:
        return self._state

    @property
    def loading(self) -> bool:
        """True until both the profile and the repositories have been fetched once."""
        return not self._has_loaded()

    @property
    def profile(self) -> Optional[Profile]:
        return self._profile

    @property
    def repositories(self) -> Tuple[Repository, ...]:
        return self._repositories

    @property
    def technologies(self) -> FrozenSet[str]:
        return self._technologies

    @property
    def skill_categories(self) -> Tuple[SkillCategory, ...]:
        return self._skill_categories

    @property
    def partition(self) -> ProjectPartition:
        return self._partition

    def _has_loaded(self) -> bool:
        return self._profile is not None and self._repositories_loaded

    def view(self) -> PortfolioView:
        """Build a snapshot of the current state for rendering."""
        return PortfolioView(
            state=self._state,
            loading=self.loading,
            profile=self._profile,
            repositories=self._repositories,
            technologies=self._technologies,
            skill_categories=self._skill_categories,
            featured=tuple(build_project_card(repo, featured=True) for repo in self._partition.featured),
            other=tuple(build_project_card(repo) for repo in self._partition.other)
        )

    async def refresh(self, trigger: str = "manual") -> RefreshMetrics:
        """Run one fetch cycle.

        Fetch failures are logged and swallowed: earlier data stays in
        place, and until both slots have been filled once the service stays
        loading. An interrupted cycle never leaves the state at FETCHING.

        Args:
            trigger: Why the cycle runs (initial, interval, visibility, manual)

        Returns:
            RefreshMetrics with cycle statistics
        """
        start_time = time.time()
        self._state = FetchState.FETCHING
        logger.info(f"Starting portfolio refresh (trigger: {trigger})")

        try:
            profile_fetched, repositories_fetched = await asyncio.gather(
                self._refresh_profile(),
                self._refresh_repositories()
            )
        except asyncio.CancelledError:
            logger.info(f"Portfolio refresh cancelled (trigger: {trigger})")
            self._state = FetchState.READY if self._has_loaded() else FetchState.IDLE
            raise
        finally:
            # Stale data remains visible once both slots have been filled
            if self._state is FetchState.FETCHING:
                self._state = FetchState.READY if self._has_loaded() else FetchState.FAILED

        errors = int(not profile_fetched) + int(repositories_fetched is None)

        duration = time.time() - start_time
        metrics = RefreshMetrics(
            trigger=trigger,
            duration_seconds=duration,
            profile_fetched=profile_fetched,
            repositories_fetched=repositories_fetched or 0,
            errors_encountered=errors
        )

        logger.info(
            f"Portfolio refresh finished in {duration:.2f} seconds: "
            f"state={self._state.value}, repositories={len(self._repositories)}, errors={errors}"
        )

        return metrics

    async def _refresh_profile(self) -> bool:
        try:
            profile = await self._github_client.fetch_profile()
        except GitHubFetchError as e:
            logger.error(f"Error fetching GitHub profile: {e}")
            return False
        self._profile = profile
        return True

    async def _refresh_repositories(self) -> Optional[int]:
        try:
            fetched = await self._github_client.fetch_repositories()
        except GitHubFetchError as e:
            logger.error(f"Error fetching GitHub repositories: {e}")
            return None
        self._replace_repositories(fetched)
        return len(fetched)

    def _replace_repositories(self, fetched: List[Repository]) -> None:
        repositories = filter_and_sort(fetched)
        self._repositories = tuple(repositories)
        self._technologies = detect_technologies(repositories)
        self._skill_categories = tuple(categorize_skills(self._technologies))
        self._partition = partition_projects(repositories, self._self_repository)
        self._repositories_loaded = True

    async def close(self) -> None:
        """Close connections."""
        await self._github_client.close()
