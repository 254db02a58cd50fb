"""Resolve the Authorization header for one outgoing request.

'why': keep credential precedence in one place and re-resolve tokens on every call
"""
from __future__ import annotations

import base64
import inspect
from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from ._models import ClientConfig


@runtime_checkable
class TokenResolver(Protocol):
    """Produce a bearer token; may do network or interactive work."""

    async def resolve_token(self) -> str: ...


class StaticTokenResolver:
    """Return the same token for every request."""

    def __init__(self, token: str) -> None:
        self._token: str = token

    async def resolve_token(self) -> str:
        return self._token

    def __repr__(self) -> str:
        return "StaticTokenResolver(token=***)"


class CallableTokenResolver:
    """Adapt a zero-argument async callable to the TokenResolver interface."""

    def __init__(self, func: Callable[[], Awaitable[str] | str]) -> None:
        self._func: Callable[[], Awaitable[str] | str] = func

    async def resolve_token(self) -> str:
        result = self._func()
        if inspect.isawaitable(result):
            return await result
        return result

    def __repr__(self) -> str:
        return f"CallableTokenResolver({self._func!r})"


async def resolve_authorization(config: ClientConfig) -> str | None:
    """Return the Authorization header value for `config`, or None.

    The token resolver is awaited exactly once per call; there is no cache.
    """

    if config.token is not None:
        token = await config.token.resolve_token()
        if token:
            return f"Bearer {token}"
        return None
    if config.username is not None and config.password is not None:
        return basic_credentials(config.username, config.password)
    return None


def basic_credentials(username: str, password: str) -> str:
    """Format `username`/`password` as a Basic Authorization value."""

    raw = f"{username}:{password}".encode("utf-8")
    return f"Basic {base64.b64encode(raw).decode('ascii')}"
