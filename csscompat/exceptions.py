"""Exception types for pycsscompat."""

from __future__ import annotations


class CsscompatError(Exception):
    """Base exception for expected application errors."""


class NetworkError(CsscompatError):
    """Raised when a network operation fails."""

    def __init__(self, url: str, *, cause: str | None = None) -> None:
        detail = f"Unable to download compatibility data from {url}"
        if cause:
            detail = f"{detail} ({cause})"
        super().__init__(detail)


class RequestTimeoutError(CsscompatError):
    """Raised when a request times out."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Request timed out for {url}")


class HttpStatusError(CsscompatError):
    """Raised when a non-200 HTTP response is returned."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"Request failed with HTTP {status_code} for {url}")


class ContentError(CsscompatError):
    """Raised when a response body is invalid or unexpectedly empty."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Received unusable compatibility data from {url}")


class CompatDataError(CsscompatError):
    """Raised when the compatibility dataset cannot be read or has the wrong shape."""

    def __init__(self, detail: str, *, source: str | None = None) -> None:
        self.source = source
        message = f"Invalid compatibility data: {detail}"
        if source:
            message = f"{message} ({source})"
        super().__init__(message)


class ConfigError(CsscompatError):
    """Raised when an environment setting holds an unusable value."""

    def __init__(self, name: str, value: str) -> None:
        super().__init__(f"Invalid value for {name}: {value!r}")


class StylesheetParseError(CsscompatError):
    """Raised when the style-sheet parser cannot produce a syntax tree."""
