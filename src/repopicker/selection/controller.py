"""Selection state holder wired to the preference store and host callback."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable

from repopicker.errors import ExitCode, RepoPickerError
from repopicker.registry import RegistryClient
from repopicker.repo import Repo, format_repo, parse_repo
from repopicker.selection.resolver import load_status
from repopicker.selection.status import LOADING, Loading, Status, Valid
from repopicker.store import REPO_KEY, PreferenceStore

logger = py_logging.getLogger(__name__)


class RepositorySelectController:
    def __init__(
        self,
        *,
        registry: RegistryClient,
        store: PreferenceStore,
        on_change: Callable[[Repo], None],
    ) -> None:
        self.registry = registry
        self.store = store
        self.on_change = on_change
        self.status: Status = LOADING

    async def start(self) -> Status:
        status = await load_status(self.registry, self.store)
        self.apply_status(status)
        return status

    def apply_status(self, status: Status) -> None:
        """Leave ``LOADING`` with the resolved status; allowed exactly once."""
        if not isinstance(self.status, Loading):
            raise RepoPickerError(
                "Repository selection is already resolved.",
                code=ExitCode.RUNTIME_ERROR,
                hint="Create a new controller to resolve again.",
            )
        if isinstance(status, Loading):
            raise RepoPickerError(
                "Resolution must finish with a terminal status.",
                code=ExitCode.RUNTIME_ERROR,
            )
        self.status = status
        logger.info("Repository selection resolved status=%s", status.type.value)
        if isinstance(status, Valid):
            self.on_change(status.selected_repo)

    def on_user_select(self, repo: Repo) -> None:
        status = self.status
        if isinstance(status, Valid) and repo not in status.available_repos:
            logger.warning("Selected repository is not listed repo=%s", format_repo(repo))
        elif isinstance(status, Valid):
            self.status = status.with_selection(repo)
            self.store.set(REPO_KEY, repo.to_dict())
            logger.info("Repository selected repo=%s", format_repo(repo))
        else:
            logger.debug("Selection received before resolution status=%s", status.type.value)
        self.on_change(repo)

    def select_token(self, token: str) -> Repo:
        repo = parse_repo(token)
        self.on_user_select(repo)
        return repo
