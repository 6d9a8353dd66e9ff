"""
Trigger matching for skill rules.

Prompt triggers are case-insensitive substring tests. File triggers use a
two-token pattern language:

    **  any run of characters, including "/"
    *   any run of characters except "/"

Every other character is literal. Patterns are searched anywhere in the
path (not anchored), so "**/*.css" matches "app/styles/main.css".
There are no character classes, brace expansion or negation.
"""

import re
from functools import lru_cache
from typing import Iterable, List, Pattern, Sequence, Tuple

from skill_activation.rules import Rule

_TOKEN_RE = re.compile(r"\*\*|\*")


@lru_cache(maxsize=512)
def compile_file_pattern(pattern: str) -> Pattern[str]:
    """
    Compile a file trigger pattern to a regular expression.

    Args:
        pattern: Pattern using * and ** wildcards

    Returns:
        Compiled regex, to be used with .search()

    Example:
        >>> bool(compile_file_pattern("src/**/*.ts").search("src/a/b/c.ts"))
        True
    """
    parts = []
    pos = 0
    for token in _TOKEN_RE.finditer(pattern):
        parts.append(re.escape(pattern[pos:token.start()]))
        parts.append(".*" if token.group() == "**" else "[^/]*")
        pos = token.end()
    parts.append(re.escape(pattern[pos:]))
    return re.compile("".join(parts))


def prompt_matches(prompt: str, phrases: Iterable[str]) -> bool:
    """True if any non-empty phrase occurs in prompt, ignoring case."""
    if not prompt:
        return False
    prompt_folded = prompt.casefold()
    for phrase in phrases:
        if phrase and phrase.casefold() in prompt_folded:
            return True
    return False


def path_matches(path: str, pattern: str) -> bool:
    """True if pattern matches anywhere in path."""
    return compile_file_pattern(pattern).search(path) is not None


def files_match(paths: Sequence[str], patterns: Iterable[str]) -> bool:
    """True if any candidate path matches any pattern."""
    if not paths:
        return False
    for pattern in patterns:
        if not pattern:
            continue
        regex = compile_file_pattern(pattern)
        if any(regex.search(path) for path in paths):
            return True
    return False


def rule_fires(rule: Rule, prompt: str, paths: Sequence[str]) -> bool:
    """A rule fires when its prompt triggers or its file triggers match."""
    if rule.triggers.is_empty():
        return False
    return prompt_matches(prompt, rule.triggers.prompt) or files_match(
        paths, rule.triggers.files
    )


def matched_phrases(prompt: str, phrases: Iterable[str]) -> List[str]:
    """Phrases from the list that occur in prompt."""
    prompt_folded = (prompt or "").casefold()
    return [p for p in phrases if p and p.casefold() in prompt_folded]


def matched_files(paths: Sequence[str], patterns: Iterable[str]) -> List[Tuple[str, str]]:
    """(pattern, path) pairs for every pattern that matches a candidate path."""
    hits = []
    for pattern in patterns:
        if not pattern:
            continue
        regex = compile_file_pattern(pattern)
        for path in paths:
            if regex.search(path):
                hits.append((pattern, path))
                break
    return hits
