"""Expose the request runtime used by generated API clients.

'why': provide a small, explicit surface for configuration, calls, and error handling
"""
from ._auth import CallableTokenResolver, StaticTokenResolver, TokenResolver
from ._cancelable import AbortSignal, CancelableRequest
from ._client import ApiClient
from ._config import build_config, load_config
from ._errors import (
    ApiClientError,
    ApiError,
    ClientConfigurationError,
    RequestAbortedError,
    TransportError,
)
from ._models import (
    ApiRequestOptions,
    ApiResult,
    ClientConfig,
    RawResponse,
    RequestDescriptor,
    RequestState,
)
from ._response import GENERIC_ERROR_MESSAGE

__all__ = [
    "AbortSignal",
    "ApiClient",
    "ApiClientError",
    "ApiError",
    "ApiRequestOptions",
    "ApiResult",
    "CallableTokenResolver",
    "CancelableRequest",
    "ClientConfig",
    "ClientConfigurationError",
    "GENERIC_ERROR_MESSAGE",
    "RawResponse",
    "RequestAbortedError",
    "RequestDescriptor",
    "RequestState",
    "StaticTokenResolver",
    "TokenResolver",
    "TransportError",
    "build_config",
    "load_config",
]

__version__ = "0.0.1"
