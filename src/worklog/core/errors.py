"""Error types raised by the worklog core.

Errors carry a message key and its parameters instead of finished text, so
the CLI can print them in the user's language. ``str(error)`` is the
English message.
"""

from typing import Any, Optional

from worklog.i18n import Translator

_ENGLISH = Translator("en")


class WorklogError(Exception):
    """Base class for all errors surfaced to the user.

    Args:
        message_key: Catalog key of the message
        **params: Values substituted into the message
    """

    def __init__(self, message_key: str, **params: Any):
        self.message_key = message_key
        self.params = params
        super().__init__(self.describe(_ENGLISH))

    def describe(self, t: Translator) -> str:
        """Render the message with a translator."""
        return t(self.message_key, **self.params)


class ValidationError(WorklogError):
    """Invalid user input (missing field, bad date, out-of-range value)."""

    pass


class ConfigError(WorklogError):
    """Configuration file could not be read or failed validation."""

    pass


class StoreError(WorklogError):
    """Backing store failure, wrapped with the operation that failed.

    Args:
        operation: Catalog key naming the operation, e.g. ``store.save_entry``
        cause: Underlying driver or ORM exception
    """

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        super().__init__("error.store")

    def describe(self, t: Translator) -> str:
        message = t("error.store", operation=t(self.operation))
        if self.cause is not None:
            message += f" ({self.cause})"
        return message


class RenderError(WorklogError):
    """Output could not be written."""

    pass
