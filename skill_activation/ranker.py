"""Collect the rules that fire for a prompt and rank them."""

from dataclasses import dataclass
from typing import List, Sequence

from skill_activation.matcher import rule_fires
from skill_activation.rules import RuleTable


@dataclass(frozen=True)
class Match:
    """A rule that fired, with what the ranker needs to order it."""

    name: str
    priority: int
    enforcement: str


def find_matches(table: RuleTable, prompt: str, paths: Sequence[str]) -> List[Match]:
    """
    Evaluate every rule against the prompt and candidate paths.

    Args:
        table: Loaded rule table
        prompt: User prompt text
        paths: Explicit plus recent file paths (duplicates are harmless)

    Returns:
        Unordered list of matches
    """
    return [
        Match(name=rule.name, priority=rule.priority, enforcement=rule.enforcement)
        for rule in table.rules.values()
        if rule_fires(rule, prompt, paths)
    ]


def rank_matches(matches: Sequence[Match], limit: int) -> List[Match]:
    """
    Order matches by priority and keep at most `limit` of them.

    Lower priority numbers come first. Ties are broken by skill name so the
    output is the same for the same input regardless of rule-file order.
    A limit of zero or less yields an empty list.
    """
    if limit <= 0:
        return []
    ordered = sorted(matches, key=lambda m: (m.priority, m.name))
    return ordered[:limit]


def rank_skills(table: RuleTable, prompt: str, paths: Sequence[str]) -> List[str]:
    """Skill names that fire for this input, highest priority first."""
    matches = find_matches(table, prompt, paths)
    ranked = rank_matches(matches, table.settings.max_skills_per_prompt)
    return [m.name for m in ranked]
