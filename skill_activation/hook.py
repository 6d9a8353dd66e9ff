"""
UserPromptSubmit hook: classify a prompt and emit skill activations.

Input (stdin): JSON with "prompt", optional "files" and "context.recentFiles"
Output (stdout): JSON {"suggestions", "message", "autoActivate"} when any
skill matches, nothing otherwise.

Exit codes: 1 if the rule file cannot be loaded, 0 in every other case.
Bad hook input is reported on stderr and ignored so the user's prompt is
never blocked.
"""

import json
import sys
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from skill_activation import config
from skill_activation.activation_log import log_activation
from skill_activation.errors import ConfigError, InputMalformed
from skill_activation.formatter import ActivationResult, format_activation
from skill_activation.ranker import rank_skills
from skill_activation.rules import RuleTable, load_rules


@dataclass
class Invocation:
    """One hook call: the prompt plus the file paths in play."""

    prompt: str
    files: List[str] = field(default_factory=list)
    recent_files: List[str] = field(default_factory=list)

    @property
    def candidate_paths(self) -> List[str]:
        return self.files + self.recent_files


def _path_list(value, key: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InputMalformed(f"'{key}' must be a list of paths")
    return [p for p in value if isinstance(p, str)]


def parse_invocation(data) -> Invocation:
    """Validate a decoded hook payload."""
    if not isinstance(data, dict):
        raise InputMalformed("hook input must be a JSON object")
    prompt = data.get("prompt")
    if not isinstance(prompt, str):
        raise InputMalformed("hook input has no 'prompt' string")

    context = data.get("context")
    if context is None:
        context = {}
    elif not isinstance(context, dict):
        raise InputMalformed("'context' must be a JSON object")

    return Invocation(
        prompt=prompt,
        files=_path_list(data.get("files"), "files"),
        recent_files=_path_list(context.get("recentFiles"), "context.recentFiles"),
    )


def read_invocation(stream: TextIO) -> Invocation:
    """
    Read the whole stream and parse it as a hook payload.

    Raises:
        InputMalformed: If the payload is not JSON or lacks a prompt
    """
    try:
        raw = stream.read()
    except UnicodeDecodeError as e:
        raise InputMalformed(f"hook input is not UTF-8: {e}") from e
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InputMalformed(f"hook input is not UTF-8: {e}") from e
    if not raw.strip():
        raise InputMalformed("hook input is empty")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InputMalformed(f"hook input is not valid JSON: {e}") from e
    return parse_invocation(data)


def classify(table: RuleTable, invocation: Invocation) -> Optional[ActivationResult]:
    """Match, rank and format; None when no skill fires."""
    ranked = rank_skills(table, invocation.prompt, invocation.candidate_paths)
    return format_activation(ranked, table)


def run(
    stdin: TextIO,
    stdout: TextIO,
    stderr: TextIO,
    rules_path: Optional[str] = None,
) -> int:
    """
    Run one hook invocation.

    Returns:
        Process exit code
    """
    try:
        invocation = read_invocation(stdin)
    except InputMalformed as e:
        # Never interrupt the user over bad hook input
        print(f"skill-activation: ignoring hook input: {e}", file=stderr)
        return 0

    try:
        table = load_rules(config.resolve_rules_path(rules_path))
    except ConfigError as e:
        print(f"skill-activation: {e}", file=stderr)
        return 1

    result = classify(table, invocation)
    if result is None:
        return 0

    if table.settings.log_activations:
        log_activation(
            result,
            invocation.prompt,
            log_file=config.activation_log_path(table.settings.activation_log_file),
            stderr=stderr,
        )

    stdout.write(json.dumps(result.to_dict()) + "\n")
    stdout.flush()
    return 0


def main(rules_path: Optional[str] = None) -> None:
    sys.exit(run(sys.stdin, sys.stdout, sys.stderr, rules_path))


if __name__ == "__main__":
    main()
