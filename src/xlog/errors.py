"""
Exception hierarchy.

Programming errors (bad levels, bad placeholder keys, changes to a closed
logger) raise immediately. Resource errors only surface when the file-error
policy asks for it. LoggerPanic is the panic-level escalation path.
"""


class XlogError(Exception):
    """Base class for every error raised by xlog."""


class InvalidLevelError(XlogError, ValueError): pass


class PlaceholderError(XlogError, ValueError): pass


class LoggerClosedError(XlogError, RuntimeError): pass


class DestinationOpenError(XlogError):
    """A file destination could not be opened and the policy says raise."""

    def __init__(self, target: str, cause: OSError):
        super().__init__(f"Cannot open log destination '{target}': {cause}")
        self.target = target
        self.cause = cause


class LoggerPanic(XlogError, RuntimeError):
    """Raised after delivery when a message is logged at a panic level."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
