"""Repository registry client and wire format."""

from __future__ import annotations

import asyncio
import json
import logging as py_logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol
from urllib.error import HTTPError, URLError
from urllib.parse import urlparse
from urllib.request import Request, urlopen

from repopicker.errors import DecodeError, TransportError, ValidationError
from repopicker.repo import Repo, repo_from_dict, validate_repo

logger = py_logging.getLogger(__name__)

DEFAULT_REGISTRY_URL = "http://127.0.0.1:8080/api/v1/data/repositoryRegistry.json"
DEFAULT_TIMEOUT_SECONDS = 20.0
REGISTRY_FORMAT = "repopicker/registry"
REGISTRY_VERSION = 1

_ALLOWED_SCHEMES = {"http", "https", "file"}

HttpResponse = tuple[int, str, dict[str, str]]


class HttpRequester(Protocol):
    def __call__(self, url: str, headers: dict[str, str], timeout: float) -> HttpResponse: ...


@dataclass(frozen=True)
class RegistryResponse:
    status: int
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class RegistryClient(Protocol):
    async def fetch(self) -> RegistryResponse: ...

    def decode(self, body: str) -> list[Repo]: ...


def _validate_registry_url(url: str) -> None:
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        raise ValidationError(
            f"Unsupported registry URL: {url}",
            hint="Use an http, https or file URL.",
        )


def _default_requester(url: str, headers: dict[str, str], timeout: float) -> HttpResponse:
    _validate_registry_url(url)
    request = Request(url, headers=headers, method="GET")
    try:
        with urlopen(request, timeout=timeout) as response:  # nosec B310
            status = int(getattr(response, "status", None) or 200)
            body = response.read().decode("utf-8")
            response_headers = {key.lower(): value for key, value in response.headers.items()}
            return status, body, response_headers
    except HTTPError as exc:
        payload = ""
        if exc.fp is not None:
            payload = exc.read().decode("utf-8", errors="replace")
        response_headers = {key.lower(): value for key, value in (exc.headers.items() if exc.headers else [])}
        return exc.code, payload, response_headers
    except URLError as exc:
        raise TransportError(
            "Repository registry is unreachable.",
            hint=str(exc.reason) or "Check the registry URL and network access.",
        ) from exc


def decode_registry(payload: str) -> list[Repo]:
    """Decode a registry document into repositories, keeping their order."""
    try:
        document = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise DecodeError(
            "Repository registry is not valid JSON.",
            hint=str(exc),
        ) from exc

    if not isinstance(document, dict):
        raise DecodeError("Repository registry must be a JSON object.")
    if document.get("format") != REGISTRY_FORMAT:
        raise DecodeError(f"Unexpected registry format: {document.get('format')!r}")
    if document.get("version") != REGISTRY_VERSION:
        raise DecodeError(
            f"Unsupported registry version: {document.get('version')!r}",
            hint=f"Expected version {REGISTRY_VERSION}.",
        )

    entries = document.get("repositories")
    if not isinstance(entries, list):
        raise DecodeError("Registry 'repositories' must be a list.")
    return [repo_from_dict(entry) for entry in entries]


def encode_registry(repos: Iterable[Repo]) -> str:
    document = {
        "format": REGISTRY_FORMAT,
        "version": REGISTRY_VERSION,
        "repositories": [repo.to_dict() for repo in repos],
    }
    return json.dumps(document, indent=2, sort_keys=True)


def add_repo(repos: Iterable[Repo], repo: Repo) -> list[Repo]:
    validate_repo(repo)
    result = list(repos)
    if repo not in result:
        result.append(repo)
    return result


class HttpRegistryClient:
    def __init__(
        self,
        url: str = DEFAULT_REGISTRY_URL,
        *,
        requester: HttpRequester | None = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._requester = requester or _default_requester

    async def fetch(self) -> RegistryResponse:
        headers = {"Accept": "application/json", "User-Agent": "repopicker"}
        logger.debug("Fetching repository registry url=%s", self.url)
        status, body, _ = await asyncio.to_thread(
            self._requester, self.url, headers, self.timeout_seconds
        )
        logger.debug("Registry responded url=%s status=%s", self.url, status)
        return RegistryResponse(status=status, body=body)

    def decode(self, body: str) -> list[Repo]:
        return decode_registry(body)
