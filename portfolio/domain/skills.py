"""Technology detection and skill categorization.

Topic tags on GitHub are free-form, so only tags listed in `TOPIC_SKILLS`
contribute to the detected set. Primary languages are taken verbatim.
"""
from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Iterable, List, Mapping, Set, Tuple
from portfolio.domain.models import (
    Repository,
    Skill,
    SkillCatalogEntry,
    SkillCategory,
    SkillLevel,
)


class CanonicalSkill(str, Enum):
    """Every canonical name a topic tag may map to."""
    REACT = "React.js"
    TYPESCRIPT = "TypeScript"
    JAVASCRIPT = "JavaScript"
    NODE = "Node.js"
    PYTHON = "Python"
    DOCKER = "Docker"
    KUBERNETES = "Kubernetes"
    AWS = "AWS"
    GOOGLE_CLOUD = "Google Cloud"
    POSTGRESQL = "PostgreSQL"
    MYSQL = "MySQL"
    REDIS = "Redis"
    GRAPHQL = "GraphQL"
    REST_APIS = "REST APIs"
    JWT = "JWT"
    OAUTH = "OAuth 2.0"
    TAILWIND = "Tailwind CSS"
    NEXT = "Next.js"
    JEST_CYPRESS = "Jest/Cypress"
    WEBPACK_VITE = "Webpack/Vite"
    CSS_SCSS = "CSS/SCSS"
    GITHUB_ACTIONS = "GitHub Actions"
    ESLINT_PRETTIER = "ESLint/Prettier"


# Exhaustive topic allow-list; lookups are exact and case-sensitive.
TOPIC_SKILLS: Mapping[str, CanonicalSkill] = MappingProxyType({
    "react": CanonicalSkill.REACT,
    "reactjs": CanonicalSkill.REACT,
    "typescript": CanonicalSkill.TYPESCRIPT,
    "javascript": CanonicalSkill.JAVASCRIPT,
    "nodejs": CanonicalSkill.NODE,
    "node-js": CanonicalSkill.NODE,
    "python": CanonicalSkill.PYTHON,
    "docker": CanonicalSkill.DOCKER,
    "kubernetes": CanonicalSkill.KUBERNETES,
    "aws": CanonicalSkill.AWS,
    "gcp": CanonicalSkill.GOOGLE_CLOUD,
    "postgresql": CanonicalSkill.POSTGRESQL,
    "mysql": CanonicalSkill.MYSQL,
    "redis": CanonicalSkill.REDIS,
    "graphql": CanonicalSkill.GRAPHQL,
    "rest-api": CanonicalSkill.REST_APIS,
    "restful-api": CanonicalSkill.REST_APIS,
    "jwt": CanonicalSkill.JWT,
    "oauth": CanonicalSkill.OAUTH,
    "oauth2": CanonicalSkill.OAUTH,
    "tailwindcss": CanonicalSkill.TAILWIND,
    "tailwind-css": CanonicalSkill.TAILWIND,
    "tailwind": CanonicalSkill.TAILWIND,
    "nextjs": CanonicalSkill.NEXT,
    "next-js": CanonicalSkill.NEXT,
    "jest": CanonicalSkill.JEST_CYPRESS,
    "cypress": CanonicalSkill.JEST_CYPRESS,
    "testing": CanonicalSkill.JEST_CYPRESS,
    "webpack": CanonicalSkill.WEBPACK_VITE,
    "vite": CanonicalSkill.WEBPACK_VITE,
    "sass": CanonicalSkill.CSS_SCSS,
    "scss": CanonicalSkill.CSS_SCSS,
    "css": CanonicalSkill.CSS_SCSS,
    "github-actions": CanonicalSkill.GITHUB_ACTIONS,
    "ci-cd": CanonicalSkill.GITHUB_ACTIONS,
    "eslint": CanonicalSkill.ESLINT_PRETTIER,
    "prettier": CanonicalSkill.ESLINT_PRETTIER,
})


def detect_technologies(repositories: Iterable[Repository]) -> FrozenSet[str]:
    """Collect canonical technology names evidenced by repositories.

    Args:
        repositories: Filtered repositories of the latest fetch

    Returns:
        Deduplicated set of languages and mapped topic names
    """
    detected: Set[str] = set()
    for repo in repositories:
        if repo.language:
            detected.add(repo.language)
        for topic in repo.topics:
            skill = TOPIC_SKILLS.get(topic)
            if skill is not None:
                detected.add(skill.value)
    return frozenset(detected)


def _entry(name: str, years: int, level: SkillLevel, *evidence: str) -> SkillCatalogEntry:
    return SkillCatalogEntry(name=name, years=years, level=level, evidence=evidence)


SKILL_CATALOG: Tuple[Tuple[str, Tuple[SkillCatalogEntry, ...]], ...] = (
    ("Frontend & Testing", (
        _entry("JavaScript", 6, SkillLevel.EXPERT, CanonicalSkill.JAVASCRIPT.value),
        _entry("TypeScript", 5, SkillLevel.ADVANCED, CanonicalSkill.TYPESCRIPT.value),
        _entry("React.js", 6, SkillLevel.EXPERT, CanonicalSkill.REACT.value),
        _entry("Next.js", 3, SkillLevel.ADVANCED, CanonicalSkill.NEXT.value),
        _entry("CSS/SCSS", 6, SkillLevel.ADVANCED, CanonicalSkill.CSS_SCSS.value, "CSS", "SCSS"),
        _entry("Jest/Cypress", 4, SkillLevel.ADVANCED, CanonicalSkill.JEST_CYPRESS.value),
        _entry("Webpack/Vite", 4, SkillLevel.ADVANCED, CanonicalSkill.WEBPACK_VITE.value),
        _entry("Tailwind CSS", 2, SkillLevel.INTERMEDIATE, CanonicalSkill.TAILWIND.value),
        _entry("Storybook", 2, SkillLevel.INTERMEDIATE),
    )),
    ("Backend & APIs", (
        _entry("GraphQL", 4, SkillLevel.ADVANCED, CanonicalSkill.GRAPHQL.value),
        _entry("REST APIs", 6, SkillLevel.EXPERT, CanonicalSkill.REST_APIS.value),
        _entry("Node.js", 4, SkillLevel.INTERMEDIATE, CanonicalSkill.NODE.value),
        _entry("Python", 3, SkillLevel.INTERMEDIATE, CanonicalSkill.PYTHON.value),
        _entry("OAuth 2.0", 3, SkillLevel.ADVANCED, CanonicalSkill.OAUTH.value),
        _entry("JWT", 3, SkillLevel.ADVANCED, CanonicalSkill.JWT.value),
        _entry("PostgreSQL", 4, SkillLevel.ADVANCED, CanonicalSkill.POSTGRESQL.value),
        _entry("Redis", 2, SkillLevel.INTERMEDIATE, CanonicalSkill.REDIS.value),
    )),
    ("Infrastructure & Security", (
        _entry("AWS/GCP", 3, SkillLevel.INTERMEDIATE,
               CanonicalSkill.AWS.value, CanonicalSkill.GOOGLE_CLOUD.value),
        _entry("Docker", 3, SkillLevel.ADVANCED, CanonicalSkill.DOCKER.value),
        _entry("Kubernetes", 2, SkillLevel.INTERMEDIATE, CanonicalSkill.KUBERNETES.value),
        _entry("Payment Systems", 3, SkillLevel.ADVANCED),
        _entry("PCI DSS", 2, SkillLevel.INTERMEDIATE),
        _entry("GitHub Actions", 3, SkillLevel.ADVANCED, CanonicalSkill.GITHUB_ACTIONS.value),
    )),
    ("Development Tools", (
        SkillCatalogEntry(name="Git", years=6, level=SkillLevel.EXPERT, always_evidenced=True),
        _entry("ESLint/Prettier", 4, SkillLevel.ADVANCED, CanonicalSkill.ESLINT_PRETTIER.value),
        _entry("Postman", 4, SkillLevel.ADVANCED),
        _entry("Figma", 3, SkillLevel.INTERMEDIATE),
    )),
)


def categorize_skills(detected: FrozenSet[str]) -> List[SkillCategory]:
    """Merge the static catalog with detected technologies.

    Every catalog entry is returned in catalog order; detection only
    decides each skill's `evidenced` flag.

    Args:
        detected: Output of `detect_technologies`

    Returns:
        Categories in catalog order
    """
    categories = []
    for category, entries in SKILL_CATALOG:
        skills = tuple(
            Skill(
                name=entry.name,
                years=entry.years,
                level=entry.level,
                evidenced=entry.always_evidenced or any(
                    name in detected for name in entry.evidence
                )
            )
            for entry in entries
        )
        categories.append(SkillCategory(category=category, skills=skills))
    return categories
