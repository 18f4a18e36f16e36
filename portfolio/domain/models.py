"""Domain models representing core business entities."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class SkillLevel(str, Enum):
    """Proficiency level of a catalog skill."""
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class FetchState(str, Enum):
    """Lifecycle state of the portfolio data."""
    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class Repository:
    """Immutable domain entity representing a GitHub repository.

    Instances are read-only snapshots of one fetch result and are replaced
    wholesale on every refresh.
    """
    repo_id: int
    name: str
    html_url: str
    star_count: int
    fork_count: int
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    homepage: Optional[str] = None
    topics: Tuple[str, ...] = ()
    language: Optional[str] = None
    archived: bool = False


@dataclass(frozen=True)
class Profile:
    """Immutable domain entity representing a GitHub user profile."""
    login: str
    name: Optional[str]
    followers: int
    following: int
    public_repos: int
    avatar_url: str
    html_url: str
    bio: Optional[str] = None
    location: Optional[str] = None
    blog: Optional[str] = None


@dataclass(frozen=True)
class SkillCatalogEntry:
    """Static catalog configuration for one skill.

    `evidence` lists the detected technology names that corroborate the
    skill. An empty tuple means the skill is never repository-evidenced
    unless `always_evidenced` is set.
    """
    name: str
    years: int
    level: SkillLevel
    evidence: Tuple[str, ...] = ()
    always_evidenced: bool = False


@dataclass(frozen=True)
class Skill:
    """Catalog skill merged with its evidenced flag."""
    name: str
    years: int
    level: SkillLevel
    evidenced: bool


@dataclass(frozen=True)
class SkillCategory:
    """Named, ordered group of skills."""
    category: str
    skills: Tuple[Skill, ...]


@dataclass(frozen=True)
class RefreshMetrics:
    """Metrics for a single fetch cycle."""
    trigger: str
    duration_seconds: float
    profile_fetched: bool
    repositories_fetched: int
    errors_encountered: int

    @property
    def succeeded(self) -> bool:
        """True when both fetches of the cycle completed."""
        return self.errors_encountered == 0
