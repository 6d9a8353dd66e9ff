"""Exceptions raised while loading rules or reading hook input."""


class SkillActivationError(Exception):
    """Base class for skill-activation errors."""


class ConfigError(SkillActivationError):
    """The rule table could not be produced. Fatal for the invocation."""

    def __init__(self, message: str, path=None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class ConfigUnavailable(ConfigError):
    """The rule file is missing or cannot be read."""


class ConfigMalformed(ConfigError):
    """The rule file was read but does not have the expected shape."""


class InputMalformed(SkillActivationError):
    """The hook payload is not valid JSON or lacks a prompt."""
