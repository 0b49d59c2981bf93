from __future__ import annotations

import logging as py_logging
from collections.abc import Iterator
from pathlib import Path

import pytest

_NETWORK_TEST_FILES = {
    "test_registry.py",
}


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        name = path.name

        if "integration" in path.parts:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.slow)

        if name in _NETWORK_TEST_FILES:
            item.add_marker(pytest.mark.network)


@pytest.fixture(autouse=True)
def _isolate_registry_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REPOPICKER_REGISTRY_URL", raising=False)


@pytest.fixture(autouse=True)
def _propagate_app_logs() -> Iterator[None]:
    logger = py_logging.getLogger("repopicker")
    selection_logger = py_logging.getLogger("repopicker.selection")
    previous = logger.propagate
    previous_selection_level = selection_logger.level
    logger.propagate = True
    yield
    logger.propagate = previous
    selection_logger.setLevel(previous_selection_level)
