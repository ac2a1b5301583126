"""Tests for option encoding."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import parse_qsl, urlsplit

import pytest

from ghrepos import (
    GitHubOptionsError,
    ListContributorsOptions,
    ListOptions,
    RepositoryListAllOptions,
    RepositoryListByOrgOptions,
    RepositoryListOptions,
    add_options,
)
from ghrepos.models import query


def params_of(url: str) -> list[tuple[str, str]]:
    return parse_qsl(urlsplit(url).query)


class TestAddOptions:
    def test_no_options(self):
        assert add_options("user/repos", None) == "user/repos"

    @pytest.mark.parametrize(
        "opts",
        [
            RepositoryListOptions(),
            RepositoryListByOrgOptions(),
            RepositoryListAllOptions(),
            ListContributorsOptions(),
            ListOptions(),
        ],
    )
    def test_zero_options_leave_path_unchanged(self, opts):
        assert add_options("user/repos", opts) == "user/repos"

    @pytest.mark.parametrize(
        "opts, expected",
        [
            (RepositoryListOptions(type="owner"), ("type", "owner")),
            (RepositoryListOptions(sort="updated"), ("sort", "updated")),
            (RepositoryListOptions(direction="desc"), ("direction", "desc")),
            (RepositoryListOptions(list_options=ListOptions(page=2)), ("page", "2")),
            (RepositoryListByOrgOptions(list_options=ListOptions(per_page=50)), ("per_page", "50")),
            (RepositoryListAllOptions(since=364), ("since", "364")),
            (ListContributorsOptions(anon="true"), ("anon", "true")),
        ],
    )
    def test_single_field(self, opts, expected):
        url = add_options("user/repos", opts)

        assert url.startswith("user/repos?")
        assert params_of(url) == [expected]

    def test_declaration_order_with_embedded_pagination(self):
        opts = RepositoryListOptions(
            type="owner",
            sort="created",
            direction="asc",
            list_options=ListOptions(page=3, per_page=10),
        )

        assert add_options("user/repos", opts) == (
            "user/repos?type=owner&sort=created&direction=asc&page=3&per_page=10"
        )

    def test_values_are_escaped(self):
        url = add_options("user/repos", RepositoryListOptions(type="a b&c"))

        assert url == "user/repos?type=a+b%26c"
        assert params_of(url) == [("type", "a b&c")]

    def test_existing_query_is_kept(self):
        url = add_options("repositories?visibility=all", RepositoryListAllOptions(since=5))

        assert params_of(url) == [("visibility", "all"), ("since", "5")]

    def test_existing_query_is_not_rewritten(self):
        url = add_options("repositories?flag&q=a%2Fb", RepositoryListAllOptions(since=5))

        assert url == "repositories?flag&q=a%2Fb&since=5"

    def test_deterministic(self):
        opts = RepositoryListOptions(type="all", list_options=ListOptions(page=1))

        assert add_options("user/repos", opts) == add_options("user/repos", opts)

    def test_malformed_path(self):
        with pytest.raises(GitHubOptionsError) as exc_info:
            add_options("http://[::1/repos", RepositoryListOptions(type="all"))

        assert exc_info.value.response is None

    def test_options_must_be_dataclass_instance(self):
        with pytest.raises(GitHubOptionsError):
            add_options("user/repos", {"type": "all"})

        with pytest.raises(GitHubOptionsError):
            add_options("user/repos", RepositoryListOptions)


@dataclass
class ExtraOptions:
    labels: list = query("labels", None)
    draft: bool = query("draft", False)
    note: str = ""


class TestQueryValueFormats:
    def test_bool_and_list_values(self):
        url = add_options("issues", ExtraOptions(labels=["bug", "ui"], draft=True))

        assert params_of(url) == [("labels", "bug"), ("labels", "ui"), ("draft", "true")]

    def test_fields_without_query_name_are_skipped(self):
        assert add_options("issues", ExtraOptions(note="ignored")) == "issues"
