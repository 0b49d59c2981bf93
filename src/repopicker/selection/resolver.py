"""Resolve which repository is selected from registry and stored preference."""

from __future__ import annotations

import logging as py_logging

from repopicker.registry import RegistryClient
from repopicker.repo import Repo
from repopicker.selection.status import FAILURE, NO_REPOS, Status, Valid
from repopicker.store import REPO_KEY, PreferenceStore

logger = py_logging.getLogger(__name__)


def _matches(candidate: Repo, stored: object) -> bool:
    if isinstance(stored, Repo):
        return candidate == stored
    return candidate.to_dict() == stored


def choose_repo(available_repos: list[Repo], stored: object) -> Repo:
    """Pick the stored repository if listed, else the last one in registry order."""
    for candidate in available_repos:
        if _matches(candidate, stored):
            return candidate
    return available_repos[-1]


def sort_repos(repos: list[Repo]) -> tuple[Repo, ...]:
    return tuple(sorted(repos, key=lambda repo: (repo.owner, repo.name)))


async def load_status(registry: RegistryClient, store: PreferenceStore) -> Status:
    """Fetch the registry and resolve the selection status.

    Never raises: transport, decoding and store errors are logged and
    reported as ``FAILURE``.
    """
    try:
        response = await registry.fetch()
        if not response.ok:
            logger.error(
                "Repository registry request failed url=%s status=%s body=%s",
                getattr(registry, "url", "<unknown>"),
                response.status,
                response.body[:200],
            )
            return FAILURE

        try:
            available_repos = registry.decode(response.body)
        except Exception as exc:
            logger.error("Repository registry could not be decoded: %s", exc)
            return FAILURE

        if not available_repos:
            logger.warning("Repository registry is empty")
            return NO_REPOS

        stored = store.get(REPO_KEY, None)
        selected_repo = choose_repo(available_repos, stored)
        logger.debug(
            "Resolved repository selection repos=%s selected=%s/%s stored=%r",
            len(available_repos),
            selected_repo.owner,
            selected_repo.name,
            stored,
        )
        return Valid(available_repos=sort_repos(available_repos), selected_repo=selected_repo)
    except Exception:
        logger.exception("Unexpected failure while loading repository registry")
        return FAILURE
