"""Deterministic error model and exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4
    REGISTRY_ERROR = 5
    VALIDATION_ERROR = 7
    NO_REPOS = 9


@dataclass
class RepoPickerError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class ValidationError(RepoPickerError):
    """Owner or name does not match the allowed character class."""

    code: ExitCode = ExitCode.VALIDATION_ERROR


@dataclass
class ParseError(RepoPickerError):
    """Selector token is not of the form ``owner/name``."""

    code: ExitCode = ExitCode.VALIDATION_ERROR


@dataclass
class TransportError(RepoPickerError):
    """Registry endpoint could not be reached."""

    code: ExitCode = ExitCode.REGISTRY_ERROR


@dataclass
class DecodeError(RepoPickerError):
    """Registry payload could not be turned into a repository list."""

    code: ExitCode = ExitCode.REGISTRY_ERROR


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
