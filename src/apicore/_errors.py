"""Define the exception taxonomy raised by the request runtime.

'why': let callers branch on cancellation, transport failure, and API failure without parsing messages
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from ._models import ApiRequestOptions, ApiResult


ABORTED_MESSAGE: Final[str] = "Request aborted"


class ApiClientError(Exception):
    """Base class for every error raised by apicore."""


class ClientConfigurationError(ApiClientError):
    """Raised when client configuration is missing or invalid."""


class RequestAbortedError(ApiClientError):
    """Raised when a pending request is cancelled by its caller."""

    def __init__(self, message: str = ABORTED_MESSAGE) -> None:
        super().__init__(message)
        self.message: str = message


class TransportError(ApiClientError):
    """Raised when the network exchange cannot complete.

    The originating httpx exception is available as `__cause__`.
    """

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.message: str = message
        self.url: str = url

    def __reduce__(self) -> tuple[Any, ...]:
        return (_rebuild_transport_error, (self.message, self.url), self.__dict__)


def _rebuild_transport_error(message: str, url: str) -> TransportError:
    return TransportError(message, url=url)


class ApiError(ApiClientError):
    """Raised when the server answers with a status the call does not accept.

    The structural fields are read-only; copies and pickles keep them intact.

    'why': keep the structural fields verbatim while the message stays caller-controlled
    """

    name: Final[str] = "ApiError"

    def __init__(
        self,
        result: ApiResult,
        message: str,
        *,
        request: ApiRequestOptions | None = None,
    ) -> None:
        super().__init__(message)
        self._result: ApiResult = result
        self._message: str = message
        self._request: ApiRequestOptions | None = request

    @property
    def message(self) -> str:
        return self._message

    @property
    def url(self) -> str:
        return self._result.url

    @property
    def status(self) -> int:
        return self._result.status

    @property
    def status_text(self) -> str:
        return self._result.status_text

    @property
    def body(self) -> object:
        return self._result.body

    @property
    def request(self) -> ApiRequestOptions | None:
        return self._request

    def __reduce__(self) -> tuple[Any, ...]:
        return (self.__class__, (self._result, self._message), self.__dict__)

    def to_dict(self) -> dict[str, object]:
        """Return the stable wire-compatible error shape."""

        return {
            "name": self.name,
            "message": self.message,
            "url": self.url,
            "status": self.status,
            "statusText": self.status_text,
            "body": self.body,
        }

    def __repr__(self) -> str:
        return f"ApiError(status={self.status}, url={self.url!r}, message={self.message!r})"
