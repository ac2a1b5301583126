"""Typed GitHub resources and request options.

Resource fields are all optional and default to None, which means the
field was absent from the JSON document. Any other value, including
False, 0 and "", was explicitly present. That distinction survives
encoding and decoding in both directions.
"""

from __future__ import annotations

import types
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from functools import cache
from typing import Any, TypeVar, Union, get_args, get_origin, get_type_hints

from ghrepos.dates import format_timestamp, parse_timestamp

Json = Any
T = TypeVar("T")


def nullable() -> Any:
    """Field that is written as JSON null instead of being omitted when unset."""
    return field(default=None, metadata={"omitempty": False})


def query(name: str, default: Any = "") -> Any:
    """Option field encoded as the query parameter ``name``."""
    return field(default=default, metadata={"query": name})


def embedded(factory: Any) -> Any:
    """Option field whose own fields are flattened into the parent's query."""
    return field(default_factory=factory, metadata={"embed": True})


def stringify(obj: Any) -> str:
    """Render a resource showing only the fields that are set."""
    parts = []
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        rendered = stringify(value) if is_dataclass(value) else repr(value)
        parts.append(f"{f.name}={rendered}")
    return f"{type(obj).__name__}({', '.join(parts)})"


class Resource:
    """Mixin for GitHub resources."""

    def __str__(self) -> str:
        return stringify(self)


@dataclass
class User(Resource):
    """A GitHub user or organization account."""

    login: str | None = None
    id: int | None = None
    avatar_url: str | None = None
    gravatar_id: str | None = None
    url: str | None = None
    html_url: str | None = None
    type: str | None = None
    site_admin: bool | None = nullable()
    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    bio: str | None = None
    public_repos: int | None = None
    followers: int | None = None
    following: int | None = None
    created_at: datetime | None = None


@dataclass
class Commit(Resource):
    """A commit reference as embedded in tags and branches."""

    sha: str | None = None
    url: str | None = None
    message: str | None = None


@dataclass
class Team(Resource):
    """A team within an organization."""

    id: int | None = None
    name: str | None = None
    url: str | None = None
    slug: str | None = None
    permission: str | None = None
    members_count: int | None = None
    repos_count: int | None = None


@dataclass
class Repository(Resource):
    """A GitHub repository."""

    id: int | None = None
    owner: User | None = None
    name: str | None = None
    description: str | None = None
    homepage: str | None = None
    default_branch: str | None = None
    master_branch: str | None = None
    created_at: datetime | None = None
    pushed_at: datetime | None = None
    updated_at: datetime | None = None
    url: str | None = None
    html_url: str | None = None
    clone_url: str | None = None
    git_url: str | None = None
    mirror_url: str | None = None
    ssh_url: str | None = None
    svn_url: str | None = None
    language: str | None = None
    fork: bool | None = nullable()
    forks_count: int | None = None
    watchers_count: int | None = None
    open_issues_count: int | None = None
    size: int | None = None

    # Mutable when creating and editing a repository.
    private: bool | None = nullable()
    has_issues: bool | None = nullable()
    has_wiki: bool | None = nullable()


@dataclass
class Contributor(Resource):
    """A repository contributor."""

    login: str | None = None
    id: int | None = None
    avatar_url: str | None = None
    gravatar_id: str | None = None
    url: str | None = None
    html_url: str | None = None
    followers_url: str | None = None
    following_url: str | None = None
    gists_url: str | None = None
    starred_url: str | None = None
    subscriptions_url: str | None = None
    organizations_url: str | None = None
    repos_url: str | None = None
    events_url: str | None = None
    received_events_url: str | None = None
    type: str | None = None
    site_admin: bool | None = nullable()
    contributions: int | None = None


@dataclass
class RepositoryTag(Resource):
    """A repository tag."""

    name: str | None = None
    commit: Commit | None = None
    zipball_url: str | None = None
    tarball_url: str | None = None


@dataclass
class Branch(Resource):
    """A repository branch."""

    name: str | None = None
    commit: Commit | None = None


@dataclass
class ListOptions:
    """Pagination parameters shared by list endpoints."""

    page: int = query("page", 0)
    per_page: int = query("per_page", 0)


@dataclass
class RepositoryListOptions:
    """Parameters for RepositoriesService.list.

    type: all, owner, public, private or member. Defaults to all.
    sort: created, updated, pushed or full_name. Defaults to full_name.
    direction: asc or desc. Defaults to asc when sorting by full_name,
    desc otherwise.
    """

    type: str = query("type")
    sort: str = query("sort")
    direction: str = query("direction")
    list_options: ListOptions = embedded(ListOptions)


@dataclass
class RepositoryListByOrgOptions:
    """Parameters for RepositoriesService.list_by_org.

    type: all, public, private, forks, sources or member. Defaults to all.
    """

    type: str = query("type")
    list_options: ListOptions = embedded(ListOptions)


@dataclass
class RepositoryListAllOptions:
    """Parameters for RepositoriesService.list_all."""

    # ID of the last repository seen
    since: int = query("since", 0)
    list_options: ListOptions = embedded(ListOptions)


@dataclass
class ListContributorsOptions:
    """Parameters for RepositoriesService.list_contributors."""

    # Include anonymous contributors
    anon: str = query("anon")


@cache
def _field_types(cls: type) -> dict[str, Any]:
    return get_type_hints(cls)


def to_json(obj: Any) -> dict[str, Json]:
    """Convert a resource to a JSON-serializable dictionary.

    Unset fields are omitted, except nullable() fields which are written
    as None.
    """
    data: dict[str, Json] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            if not f.metadata.get("omitempty", True):
                data[f.name] = None
            continue
        data[f.name] = _encode(value)
    return data


def _encode(value: Any) -> Json:
    if is_dataclass(value) and not isinstance(value, type):
        return to_json(value)
    if isinstance(value, datetime):
        return format_timestamp(value)
    if isinstance(value, list):
        return [_encode(v) for v in value]
    if isinstance(value, dict):
        return {k: _encode(v) for k, v in value.items()}
    return value


def from_json(cls: type[T], data: Json) -> T:
    """Build a resource from a decoded JSON object.

    Missing keys leave fields unset and unknown keys are ignored.

    Raises:
        TypeError: If ``data`` or one of its values has the wrong JSON type.
        ValueError: If a timestamp cannot be parsed.
    """
    if not isinstance(data, dict):
        raise TypeError(f"expected JSON object for {cls.__name__}, got {type(data).__name__}")

    hints = _field_types(cls)
    kwargs = {}
    for f in fields(cls):
        if f.name in data:
            kwargs[f.name] = decode(hints[f.name], data[f.name])
    return cls(**kwargs)


def decode(tp: Any, value: Json) -> Any:
    """Decode a JSON value into the type described by ``tp``.

    ``tp`` may be a resource class, ``list[...]``, ``dict[str, ...]``,
    an optional type, datetime, or one of str, int, float and bool.
    """
    if value is None:
        return None

    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(tp) if a is not type(None)]
        return decode(args[0], value)
    if origin is list:
        if not isinstance(value, list):
            raise TypeError(f"expected JSON array, got {type(value).__name__}")
        (item_type,) = get_args(tp)
        return [decode(item_type, v) for v in value]
    if origin is dict:
        if not isinstance(value, dict):
            raise TypeError(f"expected JSON object, got {type(value).__name__}")
        _, item_type = get_args(tp)
        return {k: decode(item_type, v) for k, v in value.items()}

    if is_dataclass(tp):
        return from_json(tp, value)
    if tp is datetime:
        return parse_timestamp(value)
    if tp is bool:
        if not isinstance(value, bool):
            raise TypeError(f"expected boolean, got {type(value).__name__}")
    elif tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected integer, got {type(value).__name__}")
    elif tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"expected number, got {type(value).__name__}")
        return float(value)
    elif tp is str:
        if not isinstance(value, str):
            raise TypeError(f"expected string, got {type(value).__name__}")
    return value
