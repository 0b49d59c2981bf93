from __future__ import annotations

import asyncio

import pytest

from repopicker.errors import ParseError, RepoPickerError, ValidationError
from repopicker.registry import RegistryResponse, decode_registry, encode_registry
from repopicker.repo import Repo
from repopicker.selection.controller import RepositorySelectController
from repopicker.selection.status import FAILURE, LOADING, NO_REPOS, Valid
from repopicker.store import REPO_KEY, MemoryPreferenceStore

REGISTRY = [Repo("a", "z"), Repo("a", "a"), Repo("b", "m")]


class StaticRegistry:
    def __init__(self, repos: list[Repo], *, status: int = 200) -> None:
        self.response = RegistryResponse(status=status, body=encode_registry(repos))

    async def fetch(self) -> RegistryResponse:
        return self.response

    def decode(self, body: str) -> list[Repo]:
        return decode_registry(body)


def _controller(
    repos: list[Repo],
    *,
    status: int = 200,
    store: MemoryPreferenceStore | None = None,
) -> tuple[RepositorySelectController, list[Repo], MemoryPreferenceStore]:
    changes: list[Repo] = []
    store = store or MemoryPreferenceStore()
    controller = RepositorySelectController(
        registry=StaticRegistry(repos, status=status),
        store=store,
        on_change=changes.append,
    )
    return controller, changes, store


def test_controller_starts_loading() -> None:
    controller, changes, _ = _controller(REGISTRY)
    assert controller.status is LOADING
    assert changes == []


def test_start_notifies_host_with_resolved_selection() -> None:
    controller, changes, store = _controller(REGISTRY)

    status = asyncio.run(controller.start())

    assert isinstance(status, Valid)
    assert controller.status == status
    assert changes == [Repo("a", "z")]
    assert store.get(REPO_KEY, None) is None


@pytest.mark.parametrize(("repos", "status_code", "expected"), [([], 200, NO_REPOS), (REGISTRY, 500, FAILURE)])
def test_start_without_repos_does_not_notify(repos: list[Repo], status_code: int, expected: object) -> None:
    controller, changes, _ = _controller(repos, status=status_code)

    assert asyncio.run(controller.start()) is expected
    assert controller.status is expected
    assert changes == []


def test_user_select_updates_status_store_and_host() -> None:
    controller, changes, store = _controller(REGISTRY)
    asyncio.run(controller.start())
    before = controller.status

    controller.on_user_select(Repo("b", "m"))

    assert isinstance(controller.status, Valid)
    assert isinstance(before, Valid)
    assert controller.status.selected_repo == Repo("b", "m")
    assert controller.status.available_repos == before.available_repos
    assert store.get(REPO_KEY, None) == {"owner": "b", "name": "m"}
    assert changes == [Repo("a", "z"), Repo("b", "m")]


def test_user_select_can_repeat() -> None:
    controller, changes, store = _controller(REGISTRY)
    asyncio.run(controller.start())

    controller.on_user_select(Repo("a", "a"))
    controller.on_user_select(Repo("a", "z"))

    assert store.get(REPO_KEY, None) == {"owner": "a", "name": "z"}
    assert changes[-2:] == [Repo("a", "a"), Repo("a", "z")]


def test_user_select_before_resolution_still_forwards_to_host() -> None:
    controller, changes, store = _controller(REGISTRY)

    controller.on_user_select(Repo("a", "a"))

    assert controller.status is LOADING
    assert store.get(REPO_KEY, None) is None
    assert changes == [Repo("a", "a")]


def test_user_select_after_failure_forwards_without_persisting() -> None:
    controller, changes, store = _controller(REGISTRY, status=404)
    asyncio.run(controller.start())

    controller.on_user_select(Repo("a", "a"))

    assert controller.status is FAILURE
    assert store.get(REPO_KEY, None) is None
    assert changes == [Repo("a", "a")]


def test_user_select_of_unlisted_repo_forwards_without_persisting() -> None:
    controller, changes, store = _controller([Repo("a", "a")])
    asyncio.run(controller.start())
    before = controller.status

    controller.on_user_select(Repo("x", "y"))

    assert controller.status == before
    assert store.get(REPO_KEY, None) is None
    assert changes == [Repo("a", "a"), Repo("x", "y")]


def test_selection_survives_new_session() -> None:
    store = MemoryPreferenceStore()
    first, _, _ = _controller(REGISTRY, store=store)
    asyncio.run(first.start())
    first.on_user_select(Repo("a", "a"))

    second, changes, _ = _controller(REGISTRY, store=store)
    asyncio.run(second.start())

    assert changes == [Repo("a", "a")]


def test_select_token_parses_and_selects() -> None:
    controller, changes, _ = _controller(REGISTRY)
    asyncio.run(controller.start())

    assert controller.select_token("b/m") == Repo("b", "m")
    assert changes[-1] == Repo("b", "m")


@pytest.mark.parametrize(("token", "error"), [("b-m", ParseError), ("b/m!", ValidationError)])
def test_select_token_propagates_codec_errors(token: str, error: type[Exception]) -> None:
    controller, changes, _ = _controller(REGISTRY)
    asyncio.run(controller.start())

    with pytest.raises(error):
        controller.select_token(token)
    assert changes == [Repo("a", "z")]


def test_resolution_is_applied_only_once() -> None:
    controller, _, _ = _controller(REGISTRY)
    asyncio.run(controller.start())

    with pytest.raises(RepoPickerError):
        controller.apply_status(NO_REPOS)


def test_apply_status_rejects_loading() -> None:
    controller, _, _ = _controller(REGISTRY)
    with pytest.raises(RepoPickerError):
        controller.apply_status(LOADING)
    assert controller.status is LOADING
