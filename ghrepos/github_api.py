"""GitHub API transport: request construction, execution and response metadata."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, is_dataclass
from datetime import UTC, datetime
from typing import Any, Callable, Literal
from urllib.parse import parse_qs, urljoin, urlsplit

import requests

from ghrepos.errors import (
    GitHubAuthError,
    GitHubDecodeError,
    GitHubError,
    GitHubHTTPError,
)
from ghrepos.models import to_json
from ghrepos.repos import RepositoriesService

Json = Any
AuthMode = Literal["auto", "required", "none"]
Decoder = Callable[[Json], Any]

DEFAULT_BASE_URL = "https://api.github.com/"
DEFAULT_USER_AGENT = "ghrepos"
MEDIA_TYPE = "application/vnd.github.v3+json"

HEADER_RATE_LIMIT = "X-RateLimit-Limit"
HEADER_RATE_REMAINING = "X-RateLimit-Remaining"
HEADER_RATE_RESET = "X-RateLimit-Reset"

logger = logging.getLogger(__name__)


@dataclass
class Rate:
    """Rate limit counters reported with every API response."""

    limit: int | None = None
    remaining: int | None = None
    reset: datetime | None = None


@dataclass
class Response:
    """Metadata and decoded body of a GitHub API response."""

    url: str
    status_code: int
    headers: dict[str, str]
    text: str
    data: Any = None
    next_page: int | None = None
    prev_page: int | None = None
    first_page: int | None = None
    last_page: int | None = None
    rate: Rate = field(default_factory=Rate)

    def json(self) -> Json:
        return json.loads(self.text)


def parse_rate(headers: Any) -> Rate:
    """Read rate limit counters from response headers."""
    rate = Rate()
    limit = headers.get(HEADER_RATE_LIMIT)
    remaining = headers.get(HEADER_RATE_REMAINING)
    reset = headers.get(HEADER_RATE_RESET)
    try:
        if limit:
            rate.limit = int(limit)
        if remaining:
            rate.remaining = int(remaining)
        if reset:
            rate.reset = datetime.fromtimestamp(int(reset), UTC)
    except (ValueError, OverflowError, OSError):
        logger.debug("Ignoring malformed rate limit headers: %s/%s/%s", limit, remaining, reset)
    return rate


def parse_link_pages(link_header: str) -> dict[str, int]:
    """Map each rel in a Link header to the page number it points at.

    ``<https://api.github.com/user/repos?page=3>; rel="next"`` yields
    ``{"next": 3}``. Links without a numeric page parameter are skipped.
    """
    pages: dict[str, int] = {}
    if not link_header:
        return pages

    for part in link_header.split(","):
        segments = part.strip().split(";")
        if len(segments) < 2:
            continue
        target = segments[0].strip()
        if not (target.startswith("<") and target.endswith(">")):
            continue
        page_values = parse_qs(urlsplit(target[1:-1]).query).get("page")
        if not page_values:
            continue
        try:
            page = int(page_values[0])
        except ValueError:
            continue
        for segment in segments[1:]:
            segment = segment.strip()
            if segment.startswith("rel="):
                pages[segment[4:].strip('"')] = page
    return pages


class GitHubClient:
    """GitHub API client.

    The client builds and sends requests and decodes responses. It does
    not retry, cache or throttle; those decisions are left to the caller.
    Endpoint groups are exposed as services, e.g. ``client.repositories``.
    """

    def __init__(
        self,
        *,
        token: str | None = None,
        token_env: tuple[str, ...] = ("GITHUB_TOKEN", "GH_TOKEN"),
        auth: AuthMode = "auto",
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_s: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.user_agent = user_agent
        self.timeout_s = timeout_s
        self._auth = auth

        self._token = token
        if self._token is None:
            for env_var in token_env:
                if env_var in os.environ:
                    self._token = os.environ[env_var]
                    break

        if auth == "required" and not self._token:
            raise GitHubAuthError(
                f"GitHub token required but not found in environment variables: {token_env}"
            )

        self._session = session if session is not None else requests.Session()
        self.repositories = RepositoriesService(self)

    def new_request(
        self, method: str, path: str, body: Any | None = None
    ) -> requests.PreparedRequest:
        """Build a request for ``path`` relative to the base URL.

        ``body`` may be a resource dataclass or any JSON-serializable value
        and is sent as the JSON request body.
        """
        url = urljoin(self.base_url, path.lstrip("/"))

        headers = {
            "Accept": MEDIA_TYPE,
            "User-Agent": self.user_agent,
        }
        if self._auth != "none" and self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        data: str | None = None
        if body is not None:
            payload = to_json(body) if is_dataclass(body) else body
            try:
                data = json.dumps(payload)
            except (TypeError, ValueError) as e:
                raise GitHubError(f"Cannot encode request body for {method} {url}: {e}") from e
            headers["Content-Type"] = "application/json"

        request = requests.Request(method.upper(), url, headers=headers, data=data)
        return self._session.prepare_request(request)

    def do(self, request: requests.PreparedRequest, decode: Decoder | None = None) -> Response:
        """Send a request and return its response metadata.

        When ``decode`` is given it is called with the parsed JSON body and
        its result is stored on ``Response.data``. Errors raised after a
        response arrived carry that response on their ``response``
        attribute.
        """
        logger.debug("%s %s", request.method, request.url)
        settings = self._session.merge_environment_settings(request.url, {}, None, None, None)
        try:
            raw = self._session.send(request, timeout=self.timeout_s, **settings)
        except requests.RequestException as e:
            raise GitHubError(f"Request failed: {e}") from e

        response = self._build_response(raw)
        logger.debug(
            "%s %s -> %d (rate limit remaining: %s)",
            request.method,
            response.url,
            response.status_code,
            response.rate.remaining,
        )

        if not 200 <= response.status_code < 300:
            raise self._http_error(response)

        if decode is not None and response.text:
            try:
                response.data = decode(response.json())
            except (TypeError, ValueError) as e:
                raise GitHubDecodeError(
                    f"Cannot decode response from {response.url}: {e}", response=response
                ) from e

        return response

    def _build_response(self, raw: requests.Response) -> Response:
        pages = parse_link_pages(raw.headers.get("Link", ""))
        return Response(
            url=raw.url,
            status_code=raw.status_code,
            headers=dict(raw.headers),
            text=raw.text,
            next_page=pages.get("next"),
            prev_page=pages.get("prev"),
            first_page=pages.get("first"),
            last_page=pages.get("last"),
            rate=parse_rate(raw.headers),
        )

    def _http_error(self, response: Response) -> GitHubHTTPError:
        message: str | None = None
        errors: list[Any] = []
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message")
            errors = body.get("errors") or []

        logger.warning(
            "GitHub API error %d for %s: %s", response.status_code, response.url, message
        )
        return GitHubHTTPError(
            status_code=response.status_code,
            url=response.url,
            response_text=response.text,
            headers=response.headers,
            message=message,
            errors=errors,
            response=response,
        )

    def close(self) -> None:
        """Close the session."""
        self._session.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        self.close()
