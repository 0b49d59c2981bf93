"""Framework-neutral view model for the repository selector."""

from __future__ import annotations

from dataclasses import dataclass

from typing_extensions import assert_never

from repopicker.repo import format_repo
from repopicker.selection.status import Failure, Loading, NoRepos, Status, Valid

SELECT_LABEL = "Please choose a repository to inspect:"
NO_REPOS_MESSAGE = "Error: No repositories found."
FAILURE_MESSAGE = "Error: Unable to load repository registry. See logs for details."


@dataclass(frozen=True)
class SelectorView:
    label: str = SELECT_LABEL
    options: tuple[str, ...] = ()
    selected: str | None = None
    error: str = ""

    @property
    def enabled(self) -> bool:
        return not self.error and self.selected is not None

    def lines(self) -> list[str]:
        if self.error:
            return [self.error]
        lines = [self.label]
        for option in self.options:
            marker = "*" if option == self.selected else " "
            lines.append(f"  {marker} {option}")
        return lines


def render_status(status: Status) -> SelectorView:
    if isinstance(status, Loading):
        # Empty select while the registry is loading.
        return SelectorView()
    if isinstance(status, Valid):
        return SelectorView(
            options=tuple(format_repo(repo) for repo in status.available_repos),
            selected=format_repo(status.selected_repo),
        )
    if isinstance(status, NoRepos):
        return SelectorView(error=NO_REPOS_MESSAGE)
    if isinstance(status, Failure):
        return SelectorView(error=FAILURE_MESSAGE)
    assert_never(status)
