"""Display-ready project cards built from repositories."""
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from portfolio.domain.models import Repository


PROJECT_DESCRIPTIONS: Mapping[str, str] = MappingProxyType({
    "qr-studio": "QR code generator with advanced styling and logo integration",
    "smart-brain": "AI-powered face detection app with user authentication",
    "react-music-player": "Modern music player built with React",
    "dapp-chat": "Decentralized chat application",
})

DEFAULT_PROJECT_DESCRIPTION = "A cool project built with passion"
CARD_TOPIC_LIMIT = 3

_WORD_START = re.compile(r"\b\w")


@dataclass(frozen=True)
class ProjectCard:
    title: str
    description: str
    star_count: int
    fork_count: int
    tech_tags: Tuple[str, ...]
    code_url: str
    demo_url: Optional[str]
    featured: bool = False


def project_title(name: str) -> str:
    """Turn a repository slug into a title, e.g. ``smart-brain`` -> ``Smart Brain``."""
    return _WORD_START.sub(lambda match: match.group().upper(), name.replace("-", " "))


def project_description(repo: Repository) -> str:
    return PROJECT_DESCRIPTIONS.get(repo.name) or repo.description or DEFAULT_PROJECT_DESCRIPTION


def build_project_card(repo: Repository, featured: bool = False) -> ProjectCard:
    tags = ((repo.language,) if repo.language else ()) + repo.topics[:CARD_TOPIC_LIMIT]
    return ProjectCard(
        title=project_title(repo.name),
        description=project_description(repo),
        star_count=repo.star_count,
        fork_count=repo.fork_count,
        tech_tags=tags,
        code_url=repo.html_url,
        demo_url=repo.homepage or None,
        featured=featured
    )
