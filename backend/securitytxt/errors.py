"""Errors that abort processing of a whole security.txt document."""


class SecurityTxtError(Exception):
    pass


class SizeExceededError(SecurityTxtError):
    """Raised when a streamed body grows past its byte ceiling."""

    def __init__(self, url: str, limit: int):
        self.url = url
        self.limit = limit
        super().__init__(f"content size at {url} over limit of {limit} bytes")


class DuplicateFieldError(SecurityTxtError):
    """Raised when a single-occurrence field shows up a second time."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"There can only be one {field} field")
