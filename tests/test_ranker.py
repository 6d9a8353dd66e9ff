"""Tests for ranking matched skills."""

import random

from skill_activation.ranker import Match, find_matches, rank_matches, rank_skills
from skill_activation.rules import parse_rule_table


def make_table(skills, **settings):
    return parse_rule_table({"skills": skills, "settings": settings})


class TestFindMatches:
    """Tests for find_matches function."""

    def test_records_priority_and_enforcement(self):
        """Each fired rule yields a Match carrying its priority and enforcement."""
        table = make_table(
            {
                "testing": {"triggers": {"prompt": ["test"]}, "enforcement": "auto", "priority": 1},
                "docs": {"triggers": {"prompt": ["readme"]}, "priority": 2},
            }
        )
        assert find_matches(table, "add a test", []) == [
            Match(name="testing", priority=1, enforcement="auto")
        ]

    def test_rules_without_triggers_never_match(self):
        """Rules with empty trigger lists never appear, whatever the input."""
        table = make_table({"empty": {"triggers": {"prompt": [], "files": []}}, "bare": {}})
        assert find_matches(table, "empty bare everything", ["a.py", "empty"]) == []

    def test_file_trigger_without_prompt_match(self):
        """A file trigger fires even when the prompt text has no match."""
        table = make_table({"styling": {"triggers": {"prompt": ["css"], "files": ["**/*.css"]}}})
        matches = find_matches(table, "make the header blue", ["app/styles/main.css"])
        assert [m.name for m in matches] == ["styling"]


class TestRankMatches:
    """Tests for rank_matches function."""

    def test_lower_priority_first(self):
        """Matches are ordered by ascending priority number."""
        matches = [Match("c", 5, "suggest"), Match("a", 2, "auto"), Match("b", 9, "manual")]
        assert [m.name for m in rank_matches(matches, 10)] == ["a", "c", "b"]

    def test_truncates_to_limit(self):
        """Output length never exceeds the limit."""
        matches = [Match(str(i), i, "suggest") for i in range(10)]
        assert [m.name for m in rank_matches(matches, 3)] == ["0", "1", "2"]

    def test_zero_or_negative_limit(self):
        """A limit of zero or less yields nothing."""
        matches = [Match("a", 1, "auto")]
        assert rank_matches(matches, 0) == []
        assert rank_matches(matches, -1) == []

    def test_ties_broken_by_name(self):
        """Equal priorities are ordered by skill name, independent of input order."""
        matches = [Match(name, 1, "suggest") for name in ["delta", "alpha", "charlie", "bravo"]]
        expected = ["alpha", "bravo", "charlie", "delta"]
        for seed in range(5):
            shuffled = matches[:]
            random.Random(seed).shuffle(shuffled)
            assert [m.name for m in rank_matches(shuffled, 10)] == expected


class TestRankSkills:
    """Tests for rank_skills function."""

    def test_max_skills_per_prompt(self):
        """Two rules fire with priorities 5 and 2; limit 1 keeps only priority 2."""
        table = make_table(
            {
                "low": {"triggers": {"prompt": ["deploy"]}, "priority": 5},
                "high": {"triggers": {"prompt": ["deploy"]}, "priority": 2},
            },
            maxSkillsPerPrompt=1,
        )
        assert rank_skills(table, "deploy the app", []) == ["high"]

    def test_idempotent(self):
        """Repeated calls give identical results."""
        table = make_table(
            {name: {"triggers": {"prompt": ["go"]}, "priority": 1} for name in "zyxw"}
        )
        first = rank_skills(table, "go", [])
        assert first == ["w", "x", "y"]
        assert all(rank_skills(table, "go", []) == first for _ in range(5))
