"""
Locations and defaults for skill-activation.

The rule file is looked up fresh on every call; nothing is cached between
invocations so edits to skill-rules.json take effect on the next prompt.
"""

import os
from pathlib import Path
from typing import Any, Optional

RULES_ENV_VAR = "SKILL_RULES_PATH"
LOG_ENV_VAR = "SKILL_ACTIVATION_LOG"
PROJECT_DIR_ENV_VAR = "CLAUDE_PROJECT_DIR"

# Relative location of the rule file inside a project
RULES_RELATIVE_PATH = Path(".claude") / "skills" / "skill-rules.json"

# Default global settings, applied when the rule file omits them
DEFAULTS = {
    "maxSkillsPerPrompt": 3,
    "defaultEnforcement": "suggest",
    "showSkillSuggestions": True,
    "logActivations": False,
    "activationLogFile": None,
}

# Priority given to rules that do not declare one
DEFAULT_PRIORITY = 100


def get(key: str, default: Any = None) -> Any:
    """
    Get a default setting value.

    Args:
        key: Setting name as written in the rule file
        default: Returned when the key has no default

    Returns:
        Default value
    """
    return DEFAULTS.get(key, default)


def project_dir() -> Path:
    """Project root: $CLAUDE_PROJECT_DIR when Claude Code sets it, else cwd."""
    env_dir = os.environ.get(PROJECT_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir)
    return Path.cwd()


def resolve_rules_path(explicit: Optional[str] = None) -> Path:
    """
    Resolve which rule file to load.

    Order: explicit path, $SKILL_RULES_PATH, then
    <project>/.claude/skills/skill-rules.json.

    Args:
        explicit: Path given on the command line, if any

    Returns:
        Path to the rule file (it may not exist)
    """
    if explicit:
        return Path(explicit).expanduser()
    env_path = os.environ.get(RULES_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return project_dir() / RULES_RELATIVE_PATH


def activation_log_path(setting: Optional[str] = None) -> Optional[Path]:
    """Activation log file: $SKILL_ACTIVATION_LOG overrides the rule-file setting."""
    env_path = os.environ.get(LOG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    if setting:
        path = Path(setting).expanduser()
        if not path.is_absolute():
            path = project_dir() / path
        return path
    return None
