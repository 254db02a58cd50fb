"""Expose the request runtime shared by every generated service method.

'why': one entry point that chains auth, building, dispatch, and classification per call
"""
from __future__ import annotations

import asyncio
import inspect
from collections.abc import Mapping
from typing import Any

from ._auth import resolve_authorization
from ._cancelable import AbortSignal, CancelableRequest
from ._config import build_config
from ._http import send_request
from ._logging import get_logger, set_log_level
from ._models import ApiRequestOptions, ClientConfig
from ._request import build_request
from ._response import process_response, response_value


_logger = get_logger()


class ApiClient:
    """Execute declared calls against one configured API.

    The config is frozen; concurrent requests share it read-only and each
    resolves its own credentials.
    """

    def __init__(self, config: ClientConfig | None = None, **settings: Any) -> None:
        if config is not None and settings:
            raise TypeError("pass either a ClientConfig or keyword settings, not both")
        self._config: ClientConfig = config if config is not None else build_config(**settings)
        set_log_level(self._config.log_level)

    @property
    def config(self) -> ClientConfig:
        return self._config

    def request(self, options: ApiRequestOptions) -> CancelableRequest[Any]:
        """Start `options` on the running loop and return its cancellable handle."""

        return CancelableRequest(lambda signal: self._execute(options, signal))

    def request_sync(self, options: ApiRequestOptions) -> Any:
        """Run `options` to completion on a fresh event loop.

        'why': let scripts call the runtime without managing an event loop
        """

        return asyncio.run(self._await_request(options))

    async def _await_request(self, options: ApiRequestOptions) -> Any:
        return await self.request(options)

    async def _execute(self, options: ApiRequestOptions, signal: AbortSignal) -> Any:
        signal.raise_if_aborted()
        authorization = await resolve_authorization(self._config)
        signal.raise_if_aborted()
        client_headers = await self._client_headers(options)
        signal.raise_if_aborted()

        descriptor = build_request(
            options,
            self._config,
            authorization=authorization,
            client_headers=client_headers,
        )
        raw = await send_request(descriptor, signal)
        result = process_response(raw, options, self._config)
        return response_value(result, options)

    async def _client_headers(self, options: ApiRequestOptions) -> Mapping[str, str] | None:
        source = self._config.headers
        if source is None or isinstance(source, Mapping):
            return source
        resolved = source(options)
        if inspect.isawaitable(resolved):
            return await resolved
        return resolved
