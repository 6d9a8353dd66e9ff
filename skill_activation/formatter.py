"""Render ranked skills into the advisory message and result payload."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from skill_activation.rules import AUTO, SUGGEST, RuleTable

BANNER_WIDTH = 60
MANUAL_HINT = "Use the Skill tool to activate any other relevant skill manually."


@dataclass
class ActivationResult:
    """Ranked skill names, the rendered message, and the auto-activated subset."""

    suggestions: List[str]
    message: str
    auto_activate: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suggestions": list(self.suggestions),
            "message": self.message,
            "autoActivate": list(self.auto_activate),
        }


def _skill_label(name: str, description: str) -> str:
    if description:
        return f"{name} - {description}"
    return name


def format_skill_line(name: str, description: str, enforcement: str) -> Optional[str]:
    """
    Render one skill line, or None for skills that are not listed individually.

    Manual skills are only covered by the generic hint.
    """
    label = _skill_label(name, description)
    if enforcement == AUTO:
        return f"  AUTO-ACTIVATE: {label}"
    if enforcement == SUGGEST:
        return f"  SUGGESTED: {label}"
    return None


def format_activation(ranked: Sequence[str], table: RuleTable) -> Optional[ActivationResult]:
    """
    Build the activation result for a ranked list of skill names.

    Args:
        ranked: Skill names, highest priority first
        table: Rule table the names came from

    Returns:
        ActivationResult, or None when nothing was ranked
    """
    if not ranked:
        return None

    skill_lines = []
    auto_activate = []
    for name in ranked:
        rule = table.get(name)
        description = rule.description if rule else ""
        enforcement = table.enforcement_of(name)
        if enforcement == AUTO:
            auto_activate.append(name)
        line = format_skill_line(name, description, enforcement)
        if line:
            skill_lines.append(line)

    lines = [
        "=" * BANNER_WIDTH,
        "SKILL ACTIVATION CHECK",
        "=" * BANNER_WIDTH,
    ]
    lines.extend(skill_lines)
    if table.settings.show_skill_suggestions:
        if skill_lines:
            lines.append("")
        lines.append(MANUAL_HINT)
    lines.append("=" * BANNER_WIDTH)

    return ActivationResult(
        suggestions=list(ranked),
        message="\n".join(lines),
        auto_activate=auto_activate,
    )
