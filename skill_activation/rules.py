"""
Rule table for skill activation.

A rule file maps skill names to their triggers, enforcement mode and
priority, plus a block of global settings:

    {
      "skills": {
        "testing": {
          "description": "Write and run tests",
          "triggers": {"prompt": ["test"], "files": ["tests/**/*.py"]},
          "enforcement": "auto",
          "priority": 1
        }
      },
      "settings": {"maxSkillsPerPrompt": 3, "showSkillSuggestions": true}
    }

Files ending in .yaml/.yml are read with PyYAML, anything else as JSON.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml

from skill_activation import config
from skill_activation.errors import ConfigMalformed, ConfigUnavailable

AUTO = "auto"
SUGGEST = "suggest"
MANUAL = "manual"
ENFORCEMENT_MODES = (AUTO, SUGGEST, MANUAL)

YAML_SUFFIXES = {".yaml", ".yml"}


@dataclass(frozen=True)
class Triggers:
    """Prompt phrases and file patterns that make a rule relevant."""

    prompt: Tuple[str, ...] = ()
    files: Tuple[str, ...] = ()

    def is_empty(self) -> bool:
        return not self.prompt and not self.files


@dataclass(frozen=True)
class Rule:
    """A single skill rule."""

    name: str
    description: str = ""
    triggers: Triggers = field(default_factory=Triggers)
    enforcement: str = SUGGEST
    priority: int = config.DEFAULT_PRIORITY


@dataclass(frozen=True)
class Settings:
    """Global settings from the rule file."""

    max_skills_per_prompt: int = config.DEFAULTS["maxSkillsPerPrompt"]
    default_enforcement: str = config.DEFAULTS["defaultEnforcement"]
    show_skill_suggestions: bool = config.DEFAULTS["showSkillSuggestions"]
    log_activations: bool = config.DEFAULTS["logActivations"]
    activation_log_file: Optional[str] = config.DEFAULTS["activationLogFile"]


@dataclass(frozen=True)
class RuleTable:
    """Parsed rule file: rules keyed by name plus global settings."""

    rules: Dict[str, Rule] = field(default_factory=dict)
    settings: Settings = field(default_factory=Settings)
    source: Optional[Path] = None

    def get(self, name: str) -> Optional[Rule]:
        return self.rules.get(name)

    def enforcement_of(self, name: str) -> str:
        rule = self.rules.get(name)
        if rule is None:
            return self.settings.default_enforcement
        return rule.enforcement


def normalize_enforcement(value: Any, default: str) -> str:
    """Map an enforcement value to a known mode; anything unrecognized becomes default."""
    if isinstance(value, str) and value.strip().lower() in ENFORCEMENT_MODES:
        return value.strip().lower()
    return default


def _require_bool(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigMalformed(f"'{key}' must be true or false, got {value!r}")
    return value


def _require_int(value: Any, key: str) -> int:
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigMalformed(f"'{key}' must be an integer, got {value!r}")
    return value


def _string_list(value: Any, key: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigMalformed(f"'{key}' must be a list of strings")
    for item in value:
        if not isinstance(item, str):
            raise ConfigMalformed(f"'{key}' must contain only strings, got {item!r}")
    return tuple(value)


def parse_settings(data: Any) -> Settings:
    """Build Settings from the 'settings' block of a rule file."""
    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigMalformed("'settings' must be a mapping")

    max_skills = _require_int(
        data.get("maxSkillsPerPrompt", config.get("maxSkillsPerPrompt")),
        "settings.maxSkillsPerPrompt",
    )
    default_enforcement = normalize_enforcement(
        data.get("defaultEnforcement"), config.get("defaultEnforcement")
    )
    show_hint = _require_bool(
        data.get("showSkillSuggestions", config.get("showSkillSuggestions")),
        "settings.showSkillSuggestions",
    )
    log_activations = _require_bool(
        data.get("logActivations", config.get("logActivations")),
        "settings.logActivations",
    )
    log_file = data.get("activationLogFile")
    if log_file is not None and not isinstance(log_file, str):
        raise ConfigMalformed("'settings.activationLogFile' must be a string")

    return Settings(
        max_skills_per_prompt=max_skills,
        default_enforcement=default_enforcement,
        show_skill_suggestions=show_hint,
        log_activations=log_activations,
        activation_log_file=log_file,
    )


def parse_rule(name: str, data: Any, settings: Settings) -> Rule:
    """Build one Rule from its entry under 'skills'."""
    if not isinstance(data, dict):
        raise ConfigMalformed(f"skill '{name}' must be a mapping")

    description = data.get("description", "")
    if not isinstance(description, str):
        raise ConfigMalformed(f"'skills.{name}.description' must be a string")

    triggers_data = data.get("triggers")
    if triggers_data is None:
        triggers_data = {}
    if not isinstance(triggers_data, dict):
        raise ConfigMalformed(f"'skills.{name}.triggers' must be a mapping")
    triggers = Triggers(
        prompt=_string_list(triggers_data.get("prompt"), f"skills.{name}.triggers.prompt"),
        files=_string_list(triggers_data.get("files"), f"skills.{name}.triggers.files"),
    )

    priority = _require_int(
        data.get("priority", config.DEFAULT_PRIORITY), f"skills.{name}.priority"
    )

    return Rule(
        name=name,
        description=description,
        triggers=triggers,
        enforcement=normalize_enforcement(
            data.get("enforcement"), settings.default_enforcement
        ),
        priority=priority,
    )


def parse_rule_table(data: Any, source: Optional[Path] = None) -> RuleTable:
    """
    Build a RuleTable from a decoded rule document.

    Args:
        data: Decoded JSON/YAML document
        source: Path it was read from, for error messages

    Returns:
        RuleTable

    Raises:
        ConfigMalformed: If the document does not have the expected shape
    """
    try:
        if not isinstance(data, dict):
            raise ConfigMalformed("rule file must contain a mapping at top level")
        skills = data.get("skills")
        if not isinstance(skills, dict):
            raise ConfigMalformed("'skills' must be a mapping of skill name to rule")

        settings = parse_settings(data.get("settings"))
        rules = {
            str(name): parse_rule(str(name), rule_data, settings)
            for name, rule_data in skills.items()
        }
    except ConfigMalformed as e:
        if source is not None and e.path is None:
            raise ConfigMalformed(str(e), path=source) from None
        raise

    return RuleTable(rules=rules, settings=settings, source=source)


def _decode(text: str, path: Path) -> Any:
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigMalformed(f"invalid YAML: {e}", path=path) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigMalformed(f"invalid JSON: {e}", path=path) from e


def load_rules(path: Union[str, Path]) -> RuleTable:
    """
    Read and parse a rule file.

    Args:
        path: Path to skill-rules.json (or .yaml)

    Returns:
        RuleTable

    Raises:
        ConfigUnavailable: If the file is missing or unreadable
        ConfigMalformed: If the content cannot be parsed into a rule table
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise ConfigMalformed(f"not valid UTF-8: {e}", path=path) from e
    except OSError as e:
        raise ConfigUnavailable(f"cannot read rule file: {e.strerror or e}", path=path) from e

    return parse_rule_table(_decode(text, path), source=path)


def sorted_rules(table: RuleTable) -> List[Rule]:
    """All rules in rank order (priority, then name)."""
    return sorted(table.rules.values(), key=lambda r: (r.priority, r.name))
