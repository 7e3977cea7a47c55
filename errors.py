"""
Exceptions raised by the clipboard zalgo tool.
"""


class ZalgoError(Exception):
    """Base class for all errors raised by this application."""


class ConfigParseError(ZalgoError, ValueError):
    """A count, frequency, max or interval setting could not be parsed."""

    def __init__(self, key, value, reason=None):
        self.key = key
        self.value = value
        message = f"Invalid value for '{key}': {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ClipboardAccessError(ZalgoError):
    """The system clipboard could not be read or written."""
