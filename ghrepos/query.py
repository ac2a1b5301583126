"""Encode option dataclasses as URL query strings."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import datetime
from typing import Any, Iterator
from urllib.parse import urlencode, urlsplit, urlunsplit

from ghrepos.dates import format_timestamp
from ghrepos.errors import GitHubOptionsError


def add_options(path: str, opts: Any | None) -> str:
    """Append the query parameters described by ``opts`` to ``path``.

    Parameters appear in field declaration order, with embedded option
    fields flattened in place. Fields holding their zero value are
    skipped. Returns ``path`` unchanged when ``opts`` is None or every
    field is zero.

    Raises:
        GitHubOptionsError: If ``path`` is malformed or ``opts`` is not
            an options dataclass instance.
    """
    if opts is None:
        return path

    if not is_dataclass(opts) or isinstance(opts, type):
        raise GitHubOptionsError(f"Options must be a dataclass instance, got {type(opts).__name__}")

    try:
        parts = urlsplit(path)
    except ValueError as e:
        raise GitHubOptionsError(f"Malformed path {path!r}: {e}") from e

    params = list(query_params(opts))
    if not params:
        return path

    encoded = urlencode(params)
    if parts.query:
        encoded = f"{parts.query}&{encoded}"
    return urlunsplit(parts._replace(query=encoded))


def query_params(opts: Any) -> Iterator[tuple[str, str]]:
    """Yield (name, value) pairs for the non-zero fields of ``opts``."""
    for f in fields(opts):
        value = getattr(opts, f.name)

        if f.metadata.get("embed"):
            if value is not None:
                yield from query_params(value)
            continue

        name = f.metadata.get("query")
        if not name or not value:
            continue

        if isinstance(value, (list, tuple)):
            for item in value:
                yield name, _format(item)
        else:
            yield name, _format(value)


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_timestamp(value)
    return str(value)
