"""Repository identifier model and ``owner/name`` token codec."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass

from repopicker.errors import DecodeError, ParseError, ValidationError

_VALID_SEGMENT = re.compile(r"[A-Za-z0-9_-]+")


@dataclass(frozen=True)
class Repo:
    owner: str
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"owner": self.owner, "name": self.name}


def validate_repo(repo: Repo) -> None:
    if not isinstance(repo.owner, str) or not _VALID_SEGMENT.fullmatch(repo.owner):
        raise ValidationError(
            f"Invalid repository owner: {json.dumps(repo.owner)}",
            hint="Use letters, digits, '_' or '-' only.",
        )
    if not isinstance(repo.name, str) or not _VALID_SEGMENT.fullmatch(repo.name):
        raise ValidationError(
            f"Invalid repository name: {json.dumps(repo.name)}",
            hint="Use letters, digits, '_' or '-' only.",
        )


def parse_repo(token: str) -> Repo:
    """Parse an ``owner/name`` selector token.

    Raises :class:`ParseError` when the token does not split into exactly
    two non-empty pieces, and :class:`ValidationError` when either piece
    contains characters outside ``[A-Za-z0-9_-]``.
    """
    pieces = token.split("/")
    if len(pieces) != 2 or not all(pieces):
        raise ParseError(
            f"Invalid repo string: {token}",
            hint="Use the owner/name format.",
        )
    repo = Repo(owner=pieces[0], name=pieces[1])
    validate_repo(repo)
    return repo


def format_repo(repo: Repo) -> str:
    return f"{repo.owner}/{repo.name}"


def repo_from_dict(record: object) -> Repo:
    if not isinstance(record, Mapping):
        raise DecodeError(f"Repository record must be an object, got {type(record).__name__}.")
    owner = record.get("owner")
    name = record.get("name")
    if not isinstance(owner, str) or not isinstance(name, str):
        raise DecodeError(
            f"Repository record needs string owner and name: {record!r}",
        )
    repo = Repo(owner=owner, name=name)
    try:
        validate_repo(repo)
    except ValidationError as exc:
        raise DecodeError(exc.message, hint=exc.hint) from exc
    return repo
