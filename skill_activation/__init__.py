"""Classify user prompts into skill activations for Claude Code hooks."""

__version__ = "0.1.0"
