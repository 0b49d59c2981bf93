from __future__ import annotations

from repopicker.errors import (
    DecodeError,
    ExitCode,
    ParseError,
    RepoPickerError,
    TransportError,
    ValidationError,
    user_facing_error,
)


def test_error_string_includes_hint() -> None:
    error = RepoPickerError("Registry failed", hint="Check the URL.")
    assert str(error) == "Registry failed Hint: Check the URL."


def test_error_string_without_hint_is_message() -> None:
    assert str(RepoPickerError("Plain")) == "Plain"


def test_error_kinds_carry_default_codes() -> None:
    assert ValidationError("x").code == ExitCode.VALIDATION_ERROR
    assert ParseError("x").code == ExitCode.VALIDATION_ERROR
    assert TransportError("x").code == ExitCode.REGISTRY_ERROR
    assert DecodeError("x").code == ExitCode.REGISTRY_ERROR
    assert RepoPickerError("x").code == ExitCode.RUNTIME_ERROR


def test_error_kinds_share_base_class() -> None:
    for kind in (ValidationError, ParseError, TransportError, DecodeError):
        assert issubclass(kind, RepoPickerError)


def test_user_facing_error_formats_next_step() -> None:
    assert user_facing_error("Bad token", hint="Use owner/name") == "Error: Bad token. Next step: Use owner/name"
    assert user_facing_error("Bad token") == "Error: Bad token."
