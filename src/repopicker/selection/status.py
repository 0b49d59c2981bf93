"""Resolution outcome of the repository selection."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import ClassVar

from repopicker.errors import ValidationError
from repopicker.repo import Repo, format_repo


class StatusType(str, Enum):
    LOADING = "LOADING"
    VALID = "VALID"
    NO_REPOS = "NO_REPOS"
    FAILURE = "FAILURE"


@dataclass(frozen=True)
class Loading:
    type: ClassVar[StatusType] = StatusType.LOADING


@dataclass(frozen=True)
class Valid:
    available_repos: tuple[Repo, ...]
    selected_repo: Repo
    type: ClassVar[StatusType] = StatusType.VALID

    def __post_init__(self) -> None:
        if self.selected_repo not in self.available_repos:
            raise ValidationError(
                f"Selected repository is not available: {format_repo(self.selected_repo)}",
                hint="Select one of the repositories listed by the registry.",
            )

    def with_selection(self, repo: Repo) -> Valid:
        return replace(self, selected_repo=repo)


@dataclass(frozen=True)
class NoRepos:
    type: ClassVar[StatusType] = StatusType.NO_REPOS


@dataclass(frozen=True)
class Failure:
    type: ClassVar[StatusType] = StatusType.FAILURE


Status = Loading | Valid | NoRepos | Failure

LOADING = Loading()
NO_REPOS = NoRepos()
FAILURE = Failure()
