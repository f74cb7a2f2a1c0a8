"""Errors raised by the meal analysis workflow."""


class GoutCareError(Exception):
    """Base class for application errors."""


class InvalidInputError(GoutCareError):
    """Caller supplied empty or unusable input."""


class MalformedResponseError(GoutCareError):
    """The analysis service replied with output that failed validation."""


class AnalysisUnavailableError(GoutCareError):
    """The analysis service could not be reached or rejected the call."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
