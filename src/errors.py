"""Error types shared by the extractors, the relay and its client."""

from typing import Optional


class PlainsumError(Exception):
    """Base error for plainsum."""


class ExtractionError(PlainsumError):
    """Raised when expected page content is missing (caption track, article container, embedded JSON)."""


class MalformedResponseError(ExtractionError):
    """Raised when fetched JSON or XML does not have the expected shape."""


class ServiceError(PlainsumError):
    """Raised when the summarization service cannot be reached or answers with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
