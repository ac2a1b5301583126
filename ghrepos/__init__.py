"""ghrepos - Typed client for the GitHub repositories API."""

from ghrepos.errors import (
    GitHubError,
    GitHubAuthError,
    GitHubDecodeError,
    GitHubHTTPError,
    GitHubOptionsError,
)
from ghrepos.github_api import GitHubClient, Rate, Response
from ghrepos.models import (
    Branch,
    Commit,
    Contributor,
    ListContributorsOptions,
    ListOptions,
    Repository,
    RepositoryListAllOptions,
    RepositoryListByOrgOptions,
    RepositoryListOptions,
    RepositoryTag,
    Team,
    User,
)
from ghrepos.query import add_options
from ghrepos.repos import RepositoriesService

__all__ = [
    "GitHubClient",
    "GitHubError",
    "GitHubAuthError",
    "GitHubDecodeError",
    "GitHubHTTPError",
    "GitHubOptionsError",
    "Rate",
    "Response",
    "RepositoriesService",
    "add_options",
    "Branch",
    "Commit",
    "Contributor",
    "ListContributorsOptions",
    "ListOptions",
    "Repository",
    "RepositoryListAllOptions",
    "RepositoryListByOrgOptions",
    "RepositoryListOptions",
    "RepositoryTag",
    "Team",
    "User",
]
