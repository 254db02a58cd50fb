"""Classify raw responses into results or ApiError.

'why': keep status handling and message overrides independent of transport
"""
from __future__ import annotations

import json
from typing import Any, Final

from ._errors import ApiError
from ._logging import get_logger
from ._models import ApiRequestOptions, ApiResult, ClientConfig, RawResponse


_logger = get_logger("response")

GENERIC_ERROR_MESSAGE: Final[str] = "Generic Error"


def is_success(status: int, options: ApiRequestOptions) -> bool:
    """Return True when `status` is accepted by the call (2xx unless declared otherwise)."""

    if options.success_statuses is not None:
        return status in options.success_statuses
    return 200 <= status < 300


def decode_body(raw: RawResponse) -> Any:
    """Return parsed JSON for JSON content types, text otherwise, None when empty.

    Text is decoded with the charset httpx resolved for the response.
    """

    if raw.status == 204 or not raw.content:
        return None
    content_type = raw.headers.get("content-type", "").split(";", 1)[0].strip().lower()
    text = raw.content.decode(raw.encoding, errors="replace")
    if content_type == "application/json" or content_type.endswith("+json"):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            _logger.warning("invalid JSON body from %s; returning text", raw.url)
            return text
    return text


def error_message(status: int, options: ApiRequestOptions, config: ClientConfig) -> str:
    """Pick the call override, then the client override, then the generic message."""

    message = options.errors.get(status)
    if message is None:
        message = config.error_messages.get(status)
    return message if message is not None else GENERIC_ERROR_MESSAGE


def process_response(
    raw: RawResponse, options: ApiRequestOptions, config: ClientConfig
) -> ApiResult:
    """Return an ApiResult for accepted statuses; raise ApiError otherwise."""

    result = ApiResult(
        url=raw.url,
        ok=is_success(raw.status, options),
        status=raw.status,
        status_text=raw.status_text,
        body=decode_body(raw),
        headers=raw.headers,
    )
    if result.ok:
        return result

    message = error_message(result.status, options, config)
    _logger.info("api error: status=%s url=%s message=%s", result.status, result.url, message)
    raise ApiError(result, message, request=options)


def response_value(result: ApiResult, options: ApiRequestOptions) -> Any:
    """Return the declared response header when present, else the body."""

    if options.response_header:
        value = result.headers.get(options.response_header)
        if value is not None:
            return value
    return result.body
