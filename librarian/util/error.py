"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Configuration error.

    Raised at start-up when a configured media server account cannot be
    used, for example because it is not an administrator.
    """

    pass
