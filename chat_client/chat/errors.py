from typing import Optional


class ChatError(Exception):
    """Base error for a single chat turn."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ValidationError(ChatError):
    """Rejected input: bad attachment, unknown model or an empty turn."""


class NetworkError(ChatError):
    """Non-2xx response or transport failure from the completion API."""


class FormatError(ChatError):
    """2xx response whose body is not a usable completion."""


class TurnInProgressError(ChatError):
    """A request is already in flight for this session."""
