"""Repository pipeline: filtering, ordering and display partitions."""
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple
from portfolio.domain.models import Repository


FEATURED_PROJECTS: Tuple[str, ...] = (
    "qr-studio",
    "smart-brain",
    "react-music-player",
    "dapp-chat",
)

OTHER_PROJECTS_LIMIT = 6


def self_repository_name(username: str) -> str:
    """Name of the user's GitHub Pages repository (the portfolio itself)."""
    return f"{username}.github.io"


def filter_and_sort(repositories: Iterable[Repository]) -> List[Repository]:
    """Drop archived repositories and order the rest for display.

    Ordering is by star count descending, then by last update descending.
    Python's sort is stable with ``reverse=True`` as well, so entries with
    equal keys keep their fetch order.

    Args:
        repositories: Raw repositories in fetch order

    Returns:
        New list of non-archived repositories
    """
    active = [repo for repo in repositories if not repo.archived]
    return sorted(
        active,
        key=lambda repo: (repo.star_count, repo.updated_at),
        reverse=True
    )


@dataclass(frozen=True)
class ProjectPartition:
    """Featured and other display views of the sorted repositories."""
    featured: Tuple[Repository, ...]
    other: Tuple[Repository, ...]


def partition_projects(
    repositories: Sequence[Repository],
    self_repository: str,
    featured_names: Sequence[str] = FEATURED_PROJECTS,
    other_limit: int = OTHER_PROJECTS_LIMIT
) -> ProjectPartition:
    """Split sorted repositories into featured and other views.

    Featured keeps the sorted order, filtered by allow-list membership.
    The self repository is only excluded from the other view; it would
    still appear as featured if it were ever allow-listed.

    Args:
        repositories: Output of `filter_and_sort`
        self_repository: Name of the portfolio's own hosting repository
        featured_names: Allow-list of featured repository names
        other_limit: Maximum size of the other view

    Returns:
        ProjectPartition with disjoint views
    """
    allowed = frozenset(featured_names)
    featured = tuple(repo for repo in repositories if repo.name in allowed)
    other = [
        repo for repo in repositories
        if repo.name not in allowed and repo.name != self_repository
    ]
    return ProjectPartition(featured=featured, other=tuple(other[:other_limit]))
