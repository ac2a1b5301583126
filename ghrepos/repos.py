"""Repository endpoints of the GitHub API.

GitHub API docs: https://docs.github.com/en/rest/repos
"""

from __future__ import annotations

from functools import partial
from typing import TYPE_CHECKING, Any

from ghrepos.models import (
    Branch,
    Contributor,
    ListContributorsOptions,
    Repository,
    RepositoryListAllOptions,
    RepositoryListByOrgOptions,
    RepositoryListOptions,
    RepositoryTag,
    Team,
    decode,
)
from ghrepos.query import add_options

if TYPE_CHECKING:
    from ghrepos.github_api import GitHubClient, Response

RepositoryList = list[Repository]
ContributorList = list[Contributor]
TeamList = list[Team]
TagList = list[RepositoryTag]
BranchList = list[Branch]
LanguageBytes = dict[str, int]


class RepositoriesService:
    """Repository related methods of the GitHub API.

    Every method returns ``(result, response)``. Failures raise a
    GitHubError whose ``response`` attribute holds the response metadata
    when the server answered.
    """

    def __init__(self, client: GitHubClient) -> None:
        self.client = client

    def _call(
        self, method: str, path: str, result_type: Any, body: Any | None = None
    ) -> tuple[Any, Response]:
        request = self.client.new_request(method, path, body)
        response = self.client.do(request, partial(decode, result_type))
        return response.data, response

    def list(
        self, user: str = "", opts: RepositoryListOptions | None = None
    ) -> tuple[RepositoryList, Response]:
        """List repositories for a user.

        An empty ``user`` lists repositories for the authenticated user.
        """
        if user:
            path = f"users/{user}/repos"
        else:
            path = "user/repos"
        path = add_options(path, opts)
        return self._call("GET", path, RepositoryList)

    def list_by_org(
        self, org: str, opts: RepositoryListByOrgOptions | None = None
    ) -> tuple[RepositoryList, Response]:
        """List repositories for an organization."""
        path = add_options(f"orgs/{org}/repos", opts)
        return self._call("GET", path, RepositoryList)

    def list_all(
        self, opts: RepositoryListAllOptions | None = None
    ) -> tuple[RepositoryList, Response]:
        """List all public repositories in the order they were created.

        Use ``opts.since`` with the ID of the last repository seen to page
        through the results.
        """
        path = add_options("repositories", opts)
        return self._call("GET", path, RepositoryList)

    def create(self, org: str, repo: Repository) -> tuple[Repository, Response]:
        """Create a repository.

        With a non-empty ``org`` the repository is created in that
        organization, otherwise for the authenticated user.
        """
        if org:
            path = f"orgs/{org}/repos"
        else:
            path = "user/repos"
        return self._call("POST", path, Repository, repo)

    def get(self, owner: str, repo: str) -> tuple[Repository, Response]:
        return self._call("GET", f"repos/{owner}/{repo}", Repository)

    def edit(
        self, owner: str, repo: str, repository: Repository
    ) -> tuple[Repository, Response]:
        """Update a repository. Only fields that are set are sent."""
        return self._call("PATCH", f"repos/{owner}/{repo}", Repository, repository)

    def delete(self, owner: str, repo: str) -> Response:
        request = self.client.new_request("DELETE", f"repos/{owner}/{repo}")
        return self.client.do(request)

    def list_contributors(
        self, owner: str, repo: str, opts: ListContributorsOptions | None = None
    ) -> tuple[ContributorList, Response]:
        path = add_options(f"repos/{owner}/{repo}/contributors", opts)
        return self._call("GET", path, ContributorList)

    def list_languages(self, owner: str, repo: str) -> tuple[LanguageBytes, Response]:
        """List languages for a repository.

        The result maps each language to the number of bytes of code
        written in it, e.g. ``{"C": 78769, "Python": 7769}``.
        """
        return self._call("GET", f"repos/{owner}/{repo}/languages", LanguageBytes)

    def list_teams(self, owner: str, repo: str) -> tuple[TeamList, Response]:
        return self._call("GET", f"repos/{owner}/{repo}/teams", TeamList)

    def list_tags(self, owner: str, repo: str) -> tuple[TagList, Response]:
        return self._call("GET", f"repos/{owner}/{repo}/tags", TagList)

    def list_branches(self, owner: str, repo: str) -> tuple[BranchList, Response]:
        return self._call("GET", f"repos/{owner}/{repo}/branches", BranchList)

    def get_branch(self, owner: str, repo: str, branch: str) -> tuple[Branch, Response]:
        return self._call("GET", f"repos/{owner}/{repo}/branches/{branch}", Branch)
