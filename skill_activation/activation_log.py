"""Record activations when the rule file sets logActivations."""

import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, TextIO

from skill_activation.formatter import ActivationResult

PROMPT_EXCERPT_CHARS = 200


def build_record(result: ActivationResult, prompt: str, now: Optional[datetime] = None) -> dict:
    """One log entry for an activation."""
    now = now or datetime.now(timezone.utc)
    return {
        "timestamp": now.isoformat(),
        "prompt": prompt[:PROMPT_EXCERPT_CHARS],
        "suggestions": list(result.suggestions),
        "autoActivate": list(result.auto_activate),
    }


def log_activation(
    result: ActivationResult,
    prompt: str,
    log_file: Optional[Path] = None,
    stderr: TextIO = sys.stderr,
) -> None:
    """
    Note an activation on stderr and, if log_file is set, append it as a JSON line.

    A log file that cannot be written is reported on stderr; it never fails
    the hook.
    """
    print(
        f"skill-activation: activated {', '.join(result.suggestions)}",
        file=stderr,
    )
    if log_file is None:
        return

    record = build_record(result, prompt)
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(record) + "\n")
    except OSError as e:
        print(f"skill-activation: cannot write activation log {log_file}: {e}", file=stderr)
