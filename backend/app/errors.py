"""Error types raised by the answer service."""
from typing import Optional


class AnswerServiceError(Exception):
    """Base class for errors converted into JSON error responses.

    Attributes:
        message: Short context shown to the caller (e.g. "Error fetching answers")
        error: Underlying error text, echoed verbatim
    """

    status_code = 500

    def __init__(self, message: str, error: Optional[str] = None):
        super().__init__(error or message)
        self.message = message
        self.error = error


class ConfigurationError(AnswerServiceError):
    """Required configuration (the connection string) is missing."""


class StoreConnectionError(AnswerServiceError):
    """The document store could not be reached."""


class NotFoundError(AnswerServiceError):
    """A record or stored file does not exist."""

    status_code = 404


class PersistenceError(AnswerServiceError):
    """A read, write or delete against the store or disk failed."""
