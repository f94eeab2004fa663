"""
Domain errors.

Filtering and extraction never fail; these exceptions cover the parse and
fetch collaborators and indexed access into an empty or short result.
"""

from typing import Optional


class ScraperError(Exception):
    """Base class for all sitescraper errors."""


class ParseError(ScraperError, ValueError):
    """Raised when raw input cannot be turned into a document tree."""


class FetchError(ScraperError):
    """Raised when remote markup cannot be retrieved."""

    def __init__(
        self, url: str, message: str, status_code: Optional[int] = None
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"{base} (url={self.url}, status={self.status_code})"
        return f"{base} (url={self.url})"


class IndexOutOfRange(ScraperError, IndexError):
    """Raised on indexed access past the end of a filtered result."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"index {index} out of range for result of size {size}")
        self.index = index
        self.size = size
