"""Exceptions raised by the GitHub API client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ghrepos.github_api import Response


class GitHubError(RuntimeError):
    """Base exception for GitHub API errors.

    ``response`` holds whatever response metadata was available when the
    error was raised (status, headers, rate limit), or None when the
    request never reached the server.
    """

    response: Response | None = None

    def __init__(self, message: str = "", response: Response | None = None) -> None:
        super().__init__(message)
        self.response = response


class GitHubAuthError(GitHubError):
    """Raised when authentication is required but not available."""


class GitHubOptionsError(GitHubError):
    """Raised when a request path or options value cannot be encoded."""


class GitHubDecodeError(GitHubError):
    """Raised when a response body does not decode into the expected type."""


@dataclass
class GitHubHTTPError(GitHubError):
    """Raised for non-2xx responses from the GitHub API."""

    status_code: int
    url: str
    response_text: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    message: str | None = None
    errors: list[Any] = field(default_factory=list)
    response: Response | None = None

    def __str__(self) -> str:
        detail = self.message or (self.response_text[:200] if self.response_text else "No response body")
        return f"GitHub API error {self.status_code} for {self.url}: {detail}"
