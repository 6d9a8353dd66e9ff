#!/usr/bin/env python3
"""
Skill activation hook for Claude Code.

Register in .claude/settings.json:

    "hooks": {
      "UserPromptSubmit": [
        {"hooks": [{"type": "command",
                    "command": "$CLAUDE_PROJECT_DIR/hooks/skill_activation_hook.py"}]}
      ]
    }

Rules are read from $SKILL_RULES_PATH or
$CLAUDE_PROJECT_DIR/.claude/skills/skill-rules.json.
"""
from skill_activation.hook import main

if __name__ == "__main__":
    main()
