"""Public CLI contract and entrypoint."""

from __future__ import annotations

import argparse
import asyncio
import logging as py_logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import MAX_TIMEOUT_SECONDS, AppConfig, load_config, registry_url_for
from .errors import ExitCode, RepoPickerError, ValidationError, user_facing_error
from .logging import configure_from_config, configure_logging, default_log_path, log_path_for
from .registry import HttpRegistryClient
from .repo import Repo, format_repo
from .selection import Failure, NoRepos, RepositorySelectController, Status, Valid
from .store import ConfigPreferenceStore
from .ui.selector import render_status

_VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


def _log_level_type(value: str) -> str:
    normalized = value.upper()
    if normalized == "WARNING":
        normalized = "WARN"
    if normalized not in _VALID_LOG_LEVELS:
        accepted = ", ".join(_VALID_LOG_LEVELS)
        raise argparse.ArgumentTypeError(f"--log-level must be one of: {accepted}")
    return normalized


def _timeout_type(value: str) -> float:
    try:
        timeout = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--timeout must be a number") from exc
    if timeout <= 0 or timeout > MAX_TIMEOUT_SECONDS:
        raise argparse.ArgumentTypeError(f"--timeout must be in (0, {MAX_TIMEOUT_SECONDS:g}]")
    return timeout


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="repopicker")
    parser.add_argument("--config", type=Path, default=None)
    parser.add_argument("--registry-url", default=None)
    parser.add_argument("--timeout", type=_timeout_type, default=None)
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--list", action="store_true", help="Print available repositories and exit")
    mode.add_argument("--select", metavar="OWNER/NAME", default=None, help="Select and persist a repository")
    parser.add_argument("--log-level", type=_log_level_type, default=None)
    parser.add_argument("--log-file", type=Path, default=None)
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    return parser.parse_args(argv)


def build_controller(
    namespace: argparse.Namespace,
    config: AppConfig,
    *,
    on_change: Callable[[Repo], None],
) -> RepositorySelectController:
    registry = HttpRegistryClient(
        registry_url_for(config, namespace.registry_url),
        timeout_seconds=namespace.timeout or config.request_timeout_seconds,
    )
    store = ConfigPreferenceStore(namespace.config)
    return RepositorySelectController(registry=registry, store=store, on_change=on_change)


def launch_gui(controller: RepositorySelectController) -> int:
    from repopicker.ui.qt_selector import launch_selector

    return launch_selector(controller)


def status_exit_code(status: Status) -> int:
    if isinstance(status, NoRepos):
        return int(ExitCode.NO_REPOS)
    if isinstance(status, Failure):
        return int(ExitCode.REGISTRY_ERROR)
    return int(ExitCode.SUCCESS)


def run_cli_flow(namespace: argparse.Namespace, controller: RepositorySelectController) -> int:
    status = asyncio.run(controller.start())
    if namespace.select is not None:
        repo = controller.select_token(namespace.select)
        status = controller.status
        if isinstance(status, Valid) and status.selected_repo != repo:
            raise ValidationError(
                f"Repository is not available: {format_repo(repo)}",
                hint="Run with --list to see the registry repositories.",
            )
    for line in render_status(status).lines():
        print(line)
    return status_exit_code(status)


def main(
    argv: Sequence[str] | None = None,
    *,
    gui_launcher: Callable[[RepositorySelectController], int | None] | None = None,
) -> int:
    log_path = default_log_path()
    logger = configure_logging(log_file=log_path)
    parser = build_parser()
    try:
        namespace = parser.parse_args(argv)
    except SystemExit as exc:
        if exc.code not in (None, 0):
            logger.warning("Argument parsing failed with exit code %s", exc.code)
        return int(exc.code or 0)

    config = load_config(namespace.config)
    log_path = log_path_for(config, namespace.log_file)
    logger = configure_from_config(config, level=namespace.log_level, log_file=log_path)

    def on_change(repo: Repo) -> None:
        logger.info("Active repository changed repo=%s", format_repo(repo))

    try:
        controller = build_controller(namespace, config, on_change=on_change)
        if namespace.list or namespace.select is not None:
            logger.debug("Starting CLI flow")
            return run_cli_flow(namespace, controller)

        launcher = gui_launcher or launch_gui
        logger.debug("Starting GUI flow")
        result = launcher(controller)
        if isinstance(result, int):
            return result
        return int(ExitCode.SUCCESS)
    except RepoPickerError as exc:
        logger.error(
            "Handled RepoPickerError (code=%s): %s",
            int(exc.code),
            exc.message,
            exc_info=logger.isEnabledFor(py_logging.DEBUG),
        )
        print(user_facing_error(exc.message, hint=exc.hint), file=sys.stderr)
        return int(exc.code)
    except Exception:
        logger.exception("Unhandled exception in CLI entrypoint")
        try:
            hint = f"Inspect logs: {log_path}"
            print(user_facing_error("Unexpected runtime failure", hint=hint), file=sys.stderr)
        except Exception:
            pass
        return int(ExitCode.RUNTIME_ERROR)


def run(argv: Sequence[str] | None = None) -> int:
    return main(argv)
