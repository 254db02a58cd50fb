"""Dispatch resolved requests over HTTP.

'why': isolate httpx so the rest of the runtime only sees RequestDescriptor and RawResponse
"""
from __future__ import annotations

import httpx

from ._cancelable import AbortSignal
from ._errors import TransportError
from ._logging import get_logger
from ._models import RawResponse, RequestDescriptor


_logger = get_logger("http")


async def send_request(descriptor: RequestDescriptor, signal: AbortSignal) -> RawResponse:
    """Perform one exchange and return the raw response.

    A fresh AsyncClient is opened per call and no timeout is applied; callers
    end long-running requests by cancelling. Task cancellation interrupts the
    exchange immediately.
    """

    signal.raise_if_aborted()
    _logger.debug("dispatch start: method=%s url=%s", descriptor.method, descriptor.url)
    try:
        async with httpx.AsyncClient(timeout=httpx.Timeout(None)) as client:
            response = await client.request(
                descriptor.method,
                descriptor.url,
                params=list(descriptor.query) or None,
                headers=dict(descriptor.headers),
                data=descriptor.form_data,
                content=descriptor.content,
            )
    except httpx.HTTPError as exc:
        _logger.error(
            "dispatch failed: method=%s url=%s err=%s",
            descriptor.method,
            descriptor.url,
            type(exc).__name__,
        )
        raise TransportError(f"transport failure: {exc}", url=descriptor.url) from exc
    signal.raise_if_aborted()

    _logger.debug("dispatch complete: url=%s status=%s", response.url, response.status_code)
    return RawResponse(
        url=str(response.url),
        status=response.status_code,
        status_text=response.reason_phrase,
        headers=response.headers,
        content=response.content,
        encoding=response.encoding or "utf-8",
    )
