"""Repository selection state machine."""

from .controller import RepositorySelectController
from .resolver import choose_repo, load_status, sort_repos
from .status import FAILURE, LOADING, NO_REPOS, Failure, Loading, NoRepos, Status, StatusType, Valid

__all__ = [
    "choose_repo",
    "FAILURE",
    "Failure",
    "load_status",
    "LOADING",
    "Loading",
    "NO_REPOS",
    "NoRepos",
    "RepositorySelectController",
    "sort_repos",
    "Status",
    "StatusType",
    "Valid",
]
