"""Search error hierarchy. Each class maps to one ErrorKind."""

from introlink.orchestrators.search.constants import ErrorKind, ValidationReason


class SearchError(Exception):
    """Base for every failure a search can settle into."""

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class FilterValidationError(SearchError):
    """Raw form input cannot become a request. Never sent over the network."""

    kind = ErrorKind.VALIDATION

    def __init__(self, field: str, reason: ValidationReason, message: str | None = None):
        super().__init__(message or f"{field}: {reason}")
        self.field = field
        self.reason = reason


class ProtocolError(SearchError):
    """Response body is empty, not JSON, or not the expected shape."""

    kind = ErrorKind.PROTOCOL


class RejectedError(SearchError):
    """Backend answered with a non-2xx status."""

    kind = ErrorKind.REJECTED

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class TransportError(SearchError):
    """No response was received."""

    kind = ErrorKind.TRANSPORT
