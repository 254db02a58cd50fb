"""Assemble a RequestDescriptor from a declared call and its arguments.

'why': keep parameter placement and serialization independent of dispatch
"""
from __future__ import annotations

import json
import re
from collections.abc import Iterator, Mapping
from typing import Any, Final

from ._logging import get_logger
from ._models import ApiRequestOptions, ClientConfig, RequestDescriptor


_logger = get_logger("request")

_PLACEHOLDER: Final[re.Pattern[str]] = re.compile(r"\{(.*?)\}")
_API_VERSION: Final[str] = "{api-version}"
JSON_MEDIA_TYPE: Final[str] = "application/json"


def build_request(
    options: ApiRequestOptions,
    config: ClientConfig,
    *,
    authorization: str | None = None,
    client_headers: Mapping[str, str] | None = None,
) -> RequestDescriptor:
    """Return the fully resolved descriptor for one call."""

    form_data = build_form_data(options.form_data)
    content, content_type = (None, None) if form_data else encode_body(options)
    if form_data and options.body is not None:
        _logger.warning("body ignored for %s %s: form parameters take precedence", options.method, options.url)

    headers = build_headers(
        options,
        authorization=authorization,
        client_headers=client_headers,
        content_type=content_type,
    )
    return RequestDescriptor(
        method=options.method.upper(),
        url=build_url(options, config),
        query=tuple(iter_query(options.query)),
        headers=headers,
        form_data=form_data,
        content=content,
    )


def build_url(options: ApiRequestOptions, config: ClientConfig) -> str:
    """Join the base URL with the interpolated path template (no query string)."""

    path = options.url
    if config.version is not None:
        path = path.replace(_API_VERSION, config.version)
    encode = config.encode_path or str

    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        value = options.path.get(name)
        if value is None:
            _logger.warning("unresolved path parameter %r in %s", name, options.url)
            return match.group(0)
        return encode(_stringify(value))

    return f"{config.base_url}{_PLACEHOLDER.sub(substitute, path)}"


def iter_query(params: Mapping[str, Any]) -> Iterator[tuple[str, str]]:
    """Yield query pairs; None is omitted, sequences repeat, mappings nest as key[sub]."""

    for key, value in params.items():
        yield from _query_pairs(key, value)


def _query_pairs(key: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, (list, tuple)):
        for item in value:  # pyright: ignore[reportUnknownVariableType]
            yield from _query_pairs(key, item)
        return
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():  # pyright: ignore[reportUnknownVariableType]
            yield from _query_pairs(f"{key}[{sub_key}]", sub_value)
        return
    yield key, _stringify(value)


def build_form_data(params: Mapping[str, Any]) -> dict[str, list[str]] | None:
    """Return form fields as lists of strings, or None when no field is present."""

    fields: dict[str, list[str]] = {}
    for key, value in params.items():
        if value is None:
            continue
        items: list[Any] = list(value) if isinstance(value, (list, tuple)) else [value]  # pyright: ignore[reportUnknownArgumentType]
        encoded = [_form_value(item) for item in items if item is not None]
        if encoded:
            fields[key] = encoded
    return fields or None


def _form_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def encode_body(options: ApiRequestOptions) -> tuple[bytes | None, str | None]:
    """Serialize the call body and pick its content type.

    Nested structures are kept as-is; only the outermost value is encoded.
    """

    body = options.body
    if body is None:
        return None, None
    if isinstance(body, (bytes, bytearray)):
        return bytes(body), options.media_type or "application/octet-stream"
    if isinstance(body, str):
        return body.encode("utf-8"), options.media_type or "text/plain"
    payload = json.dumps(body, ensure_ascii=False).encode("utf-8")
    return payload, options.media_type or JSON_MEDIA_TYPE


def build_headers(
    options: ApiRequestOptions,
    *,
    authorization: str | None,
    client_headers: Mapping[str, str] | None,
    content_type: str | None,
) -> dict[str, str]:
    """Merge default, client, and call headers; call values win, None is dropped."""

    merged: dict[str, str] = {"Accept": JSON_MEDIA_TYPE}
    for source in (client_headers or {}, options.headers):
        for key, value in source.items():
            if value is None:
                continue
            _set_header(merged, key, _stringify(value))

    cookie = build_cookie_header(options.cookies)
    if cookie:
        _set_header(merged, "Cookie", cookie)
    if authorization:
        _set_header(merged, "Authorization", authorization)
    if content_type:
        _set_header(merged, "Content-Type", content_type)
    return merged


def build_cookie_header(cookies: Mapping[str, Any]) -> str | None:
    """Render present cookie params as a single Cookie header value."""

    pairs = [f"{name}={_stringify(value)}" for name, value in cookies.items() if value is not None]
    return "; ".join(pairs) or None


def _set_header(headers: dict[str, str], name: str, value: str) -> None:
    for existing in [key for key in headers if key.lower() == name.lower()]:
        del headers[existing]
    headers[name] = value


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
