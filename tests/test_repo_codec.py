from __future__ import annotations

import pytest

from repopicker.errors import DecodeError, ExitCode, ParseError, ValidationError
from repopicker.repo import Repo, format_repo, parse_repo, repo_from_dict, validate_repo


def test_parse_repo_splits_owner_and_name() -> None:
    assert parse_repo("sourcecred/example-github") == Repo(owner="sourcecred", name="example-github")


def test_format_repo_joins_with_slash() -> None:
    assert format_repo(Repo(owner="a_b", name="c-1")) == "a_b/c-1"


def test_repos_compare_structurally() -> None:
    first = Repo(owner="octo", name="cat")
    second = Repo(owner="octo", name="cat")
    assert first == second
    assert first is not second


@pytest.mark.parametrize("token", ["", "owner", "a/b/c", "/name", "owner/", "/", "owner//name"])
def test_parse_repo_rejects_wrong_shape(token: str) -> None:
    with pytest.raises(ParseError) as exc:
        parse_repo(token)
    assert exc.value.code == ExitCode.VALIDATION_ERROR


@pytest.mark.parametrize("token", ["own er/name", "owner/na.me", "ow$ner/name", "owner/näme"])
def test_parse_repo_rejects_invalid_characters(token: str) -> None:
    with pytest.raises(ValidationError):
        parse_repo(token)


def test_validate_repo_names_offending_field() -> None:
    with pytest.raises(ValidationError) as owner_exc:
        validate_repo(Repo(owner="bad owner", name="ok"))
    assert "owner" in owner_exc.value.message

    with pytest.raises(ValidationError) as name_exc:
        validate_repo(Repo(owner="ok", name=""))
    assert "name" in name_exc.value.message


def test_validate_repo_rejects_trailing_newline() -> None:
    with pytest.raises(ValidationError):
        validate_repo(Repo(owner="owner\n", name="name"))


def test_repo_from_dict_builds_validated_repo() -> None:
    assert repo_from_dict({"owner": "a", "name": "b"}) == Repo(owner="a", name="b")


@pytest.mark.parametrize(
    "record",
    [
        "a/b",
        {"owner": "a"},
        {"owner": 1, "name": "b"},
        {"owner": "a", "name": "b/c"},
    ],
)
def test_repo_from_dict_rejects_malformed_records(record: object) -> None:
    with pytest.raises(DecodeError):
        repo_from_dict(record)
