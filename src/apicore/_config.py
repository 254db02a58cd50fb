"""Build and validate immutable client configuration.

'why': reject bad settings once at client construction instead of on every request
"""
from __future__ import annotations

import inspect
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Final
from urllib.parse import quote

import httpx
from dotenv import dotenv_values

from ._auth import CallableTokenResolver, StaticTokenResolver, TokenResolver
from ._errors import ClientConfigurationError
from ._logging import LOG_LEVELS
from ._models import ClientConfig, HeadersSource


ENV_PREFIX: Final[str] = "APICORE_"
_ENV_FIELDS: Final[tuple[str, ...]] = (
    "base_url",
    "version",
    "token",
    "username",
    "password",
    "log_level",
)
# Characters encodeURI leaves untouched besides alphanumerics.
_URI_SAFE: Final[str] = ";,/?:@&=+$#-_.!~*'()"
_URL_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})


def encode_uri(value: str) -> str:
    """Percent-encode `value` while keeping URI reserved characters."""

    return quote(value, safe=_URI_SAFE)


def _normalized_base_url(base_url: str | None) -> str:
    url = (base_url or "").strip()
    if not url:
        raise ClientConfigurationError("base_url must be a non-empty string")
    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise ClientConfigurationError(f"base_url is not a valid URL: {exc}") from exc
    if parsed.scheme not in _URL_SCHEMES or not parsed.host:
        raise ClientConfigurationError(f"base_url must be an absolute http(s) URL, got {url!r}")
    if parsed.port is not None and not 0 < parsed.port <= 65535:
        raise ClientConfigurationError(f"base_url port out of range: {parsed.port}")
    return url.rstrip("/")


def _normalized_level(level: str | None) -> str:
    if not level:
        return "INFO"
    upper = level.upper()
    if upper not in LOG_LEVELS:
        raise ClientConfigurationError(f"unsupported log_level: {level}")
    return upper


def _normalized_optional(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def _token_resolver(token: object) -> TokenResolver | None:
    if token is None:
        return None
    if isinstance(token, str):
        trimmed = token.strip()
        return StaticTokenResolver(trimmed) if trimmed else None
    if inspect.iscoroutinefunction(token):
        return CallableTokenResolver(token)
    if isinstance(token, TokenResolver):
        return token
    if callable(token):
        return CallableTokenResolver(token)  # pyright: ignore[reportUnknownArgumentType]
    raise ClientConfigurationError(
        "token must be a string, a TokenResolver, or a zero-argument async callable"
    )


def _validated_credentials(
    username: str | None, password: str | None
) -> tuple[str | None, str | None]:
    if (username is None) != (password is None):
        raise ClientConfigurationError("username and password must be provided together")
    return username, password


def _validated_headers(headers: HeadersSource | None) -> HeadersSource | None:
    if headers is None:
        return None
    if isinstance(headers, Mapping):
        return MappingProxyType({str(k): str(v) for k, v in headers.items()})
    if callable(headers):
        return headers
    raise ClientConfigurationError("headers must be a mapping or a callable returning one")


def _validated_error_messages(messages: Mapping[int, str] | None) -> Mapping[int, str]:
    if not messages:
        return MappingProxyType({})
    normalized: dict[int, str] = {}
    for status, message in messages.items():
        if isinstance(status, bool) or not isinstance(status, int) or not 100 <= status <= 599:
            raise ClientConfigurationError(
                f"error_messages keys must be HTTP status codes, got {status!r}"
            )
        normalized[status] = str(message)
    return MappingProxyType(normalized)


def build_config(
    *,
    base_url: str,
    version: str | None = None,
    token: TokenResolver | Callable[[], Any] | str | None = None,
    username: str | None = None,
    password: str | None = None,
    headers: HeadersSource | None = None,
    error_messages: Mapping[int, str] | None = None,
    encode_path: Callable[[str], str] | None = None,
    log_level: str | None = None,
) -> ClientConfig:
    """Validate inputs and return a frozen ClientConfig.

    'why': normalize client setup without exposing transport internals
    """

    user, secret = _validated_credentials(username, password)
    return ClientConfig(
        base_url=_normalized_base_url(base_url),
        version=_normalized_optional(version),
        token=_token_resolver(token),
        username=user,
        password=secret,
        headers=_validated_headers(headers),
        error_messages=_validated_error_messages(error_messages),
        encode_path=encode_path or encode_uri,
        log_level=_normalized_level(log_level),
    )


def load_config(env_path: Path | None = None, **overrides: Any) -> ClientConfig:
    """Build a ClientConfig from a `.env` file, the environment, and overrides.

    Precedence, lowest first: `env_path` values, `APICORE_*` environment
    variables, keyword overrides. Blank values are treated as unset.
    """

    settings: dict[str, Any] = {}
    file_values = dotenv_values(env_path) if env_path is not None else {}
    for name in _ENV_FIELDS:
        key = f"{ENV_PREFIX}{name.upper()}"
        for source in (file_values.get(key), os.environ.get(key)):
            if source is not None and source.strip():
                settings[name] = source.strip()
    settings.update({k: v for k, v in overrides.items() if v is not None})
    if "base_url" not in settings:
        raise ClientConfigurationError(
            f"base_url must be configured; set {ENV_PREFIX}BASE_URL or pass base_url=..."
        )
    return build_config(**settings)
