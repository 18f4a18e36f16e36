"""Tests for technology detection and skill categorization."""
import itertools
from portfolio.domain.skills import (
    SKILL_CATALOG,
    TOPIC_SKILLS,
    CanonicalSkill,
    categorize_skills,
    detect_technologies,
)


def test_detects_languages_and_mapped_topics(make_repository):
    """Test that languages are kept verbatim and topics are mapped."""
    repos = [
        make_repository("qr-studio", topics=["react", "vite"], language="TypeScript"),
        make_repository("tool-x", topics=["docker", "reactjs"], language="Go"),
    ]

    detected = detect_technologies(repos)

    assert detected == {"TypeScript", "Go", "React.js", "Webpack/Vite", "Docker"}


def test_end_to_end_detection_example(make_repository):
    """Test detection for the qr-studio/tool-x example."""
    repos = [
        make_repository("tool-x", stars=5, updated="2024-06-01", topics=["docker"]),
        make_repository("qr-studio", stars=5, updated="2024-01-01", topics=["react"]),
    ]

    detected = detect_technologies(repos)

    assert "React.js" in detected
    assert "Docker" in detected


def test_unmapped_topics_are_ignored(make_repository):
    """Test that free-form topics outside the table contribute nothing."""
    repos = [make_repository("x", topics=["foobar-unmapped", "hacktoberfest"])]

    assert detect_technologies(repos) == frozenset()


def test_topic_lookup_is_case_sensitive(make_repository):
    """Test that topics must match the table exactly."""
    repos = [make_repository("x", topics=["React", "DOCKER"])]

    assert detect_technologies(repos) == frozenset()


def test_detection_is_order_independent(make_repository):
    """Test that permuting repositories yields the same set."""
    repos = [
        make_repository("a", topics=["nextjs", "tailwind"], language="JavaScript"),
        make_repository("b", topics=["python", "aws"], language="Python"),
        make_repository("c", topics=["gcp", "ci-cd", "css"]),
    ]

    results = {detect_technologies(permutation) for permutation in itertools.permutations(repos)}

    assert len(results) == 1


def test_detection_is_idempotent(make_repository):
    """Test that repeated calls do not accumulate state."""
    repos = [make_repository("a", topics=["redis"])]

    first = detect_technologies(repos)
    second = detect_technologies(repos)

    assert first == second == {"Redis"}
    assert detect_technologies([]) == frozenset()


def test_topic_table_is_many_to_one():
    """Test aliases mapping to the same canonical name."""
    assert TOPIC_SKILLS["react"] is TOPIC_SKILLS["reactjs"] is CanonicalSkill.REACT
    assert TOPIC_SKILLS["oauth"] is TOPIC_SKILLS["oauth2"] is CanonicalSkill.OAUTH
    assert {TOPIC_SKILLS[t] for t in ("jest", "cypress", "testing")} == {CanonicalSkill.JEST_CYPRESS}
    assert len(TOPIC_SKILLS) == 37
    assert set(TOPIC_SKILLS.values()) == set(CanonicalSkill)


def test_categories_are_fixed_regardless_of_detection():
    """Test that detection never changes which skills are listed."""
    for detected in (frozenset(), frozenset({"Docker", "Python", "Unrelated"})):
        categories = categorize_skills(detected)

        assert [c.category for c in categories] == [
            "Frontend & Testing",
            "Backend & APIs",
            "Infrastructure & Security",
            "Development Tools",
        ]
        assert [len(c.skills) for c in categories] == [9, 8, 6, 4]


def test_empty_detection_only_git_is_evidenced():
    """Test that only the always-evidenced entry is flagged without detection."""
    categories = categorize_skills(frozenset())

    evidenced = [skill.name for c in categories for skill in c.skills if skill.evidenced]

    assert evidenced == ["Git"]


def test_evidenced_flags_follow_detection():
    """Test evidenced flags, including alias evidence."""
    detected = frozenset({"React.js", "Google Cloud", "CSS", "Storybook"})

    skills = {skill.name: skill for c in categorize_skills(detected) for skill in c.skills}

    assert skills["React.js"].evidenced
    assert skills["AWS/GCP"].evidenced
    assert skills["CSS/SCSS"].evidenced
    assert not skills["Storybook"].evidenced
    assert not skills["TypeScript"].evidenced
    assert skills["Git"].evidenced


def test_catalog_literal_values():
    """Test a sample of the catalog's years and levels."""
    skills = {skill.name: skill for c in categorize_skills(frozenset()) for skill in c.skills}

    assert (skills["JavaScript"].years, skills["JavaScript"].level.value) == (6, "Expert")
    assert (skills["Tailwind CSS"].years, skills["Tailwind CSS"].level.value) == (2, "Intermediate")
    assert (skills["PCI DSS"].years, skills["PCI DSS"].level.value) == (2, "Intermediate")
    assert (skills["Figma"].years, skills["Figma"].level.value) == (3, "Intermediate")
    assert len(SKILL_CATALOG) == 4
