"""Failure taxonomy for model calls."""
from typing import Optional


class ModelInvocationError(Exception):
    """The model client rejected, or its payload failed the output-shape check.

    `message` keeps the raw upstream text: the dispatcher classifies on it.
    """

    def __init__(self, message: str, model: Optional[str] = None):
        self.message = message or ""
        self.model = model
        super().__init__(self.message)


class TransientModelError(ModelInvocationError):
    """A failure whose message matches one of the transient markers."""


class TerminalModelError(ModelInvocationError):
    """A failure that ends the invocation: not transient, or no tier left to try."""

    def __init__(self, message: str, model: Optional[str] = None, transient_cause: bool = False):
        super().__init__(message, model=model)
        self.transient_cause = transient_cause


class MalformedOutputError(ModelInvocationError):
    """The reply arrived but is unusable: empty, not JSON, or the wrong shape.

    Always terminal. Its message is written locally and may contain offsets or
    list indexes, so it is never matched against the transient markers.
    """
