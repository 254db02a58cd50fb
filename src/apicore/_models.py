"""Define dataclasses and types for the request runtime.

'why': capture configuration, declared calls, and outcomes in typed, testable shapes
"""
from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Union

import httpx

if TYPE_CHECKING:
    from ._auth import TokenResolver


HeadersResolver = Callable[["ApiRequestOptions"], Union[Awaitable[Mapping[str, str]], Mapping[str, str]]]
HeadersSource = Union[Mapping[str, str], HeadersResolver]


def _empty_mapping() -> Mapping[Any, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class ClientConfig:
    """Capture immutable client settings shared by every request.

    At most one auth mechanism applies per request: `token` takes precedence over
    `username`/`password` when both are configured.
    """

    base_url: str
    version: str | None = None
    token: TokenResolver | None = field(default=None, repr=False)
    username: str | None = None
    password: str | None = field(default=None, repr=False)
    headers: HeadersSource | None = None
    error_messages: Mapping[int, str] = field(default_factory=_empty_mapping)
    encode_path: Callable[[str], str] | None = None
    log_level: str = "INFO"


@dataclass(frozen=True)
class ApiRequestOptions:
    """Describe one generated call: its route and arguments grouped by location."""

    method: str
    url: str
    path: Mapping[str, Any] = field(default_factory=_empty_mapping)
    query: Mapping[str, Any] = field(default_factory=_empty_mapping)
    headers: Mapping[str, Any] = field(default_factory=_empty_mapping)
    cookies: Mapping[str, Any] = field(default_factory=_empty_mapping)
    form_data: Mapping[str, Any] = field(default_factory=_empty_mapping)
    body: Any = None
    media_type: str | None = None
    response_header: str | None = None
    errors: Mapping[int, str] = field(default_factory=_empty_mapping)
    success_statuses: frozenset[int] | None = None


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully resolved, pre-dispatch representation of one outgoing request."""

    method: str
    url: str
    query: tuple[tuple[str, str], ...] = ()
    headers: Mapping[str, str] = field(default_factory=_empty_mapping)
    form_data: Mapping[str, list[str]] | None = None
    content: bytes | None = None


@dataclass(frozen=True)
class RawResponse:
    """Carry the untouched outcome of one network exchange."""

    url: str
    status: int
    status_text: str
    headers: httpx.Headers
    content: bytes
    encoding: str = "utf-8"


@dataclass(frozen=True)
class ApiResult:
    """Communicate a classified response in a consistent shape."""

    url: str
    ok: bool
    status: int
    status_text: str
    body: Any
    headers: httpx.Headers = field(default_factory=httpx.Headers)


class RequestState(str, Enum):
    """Lifecycle of a CancelableRequest; every state but PENDING is final."""

    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"
    CANCELLED = "cancelled"
