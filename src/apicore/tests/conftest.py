"""Provide shared pytest fixtures.

'why': centralize client construction so scenarios only vary what they test
"""
from __future__ import annotations

import pytest

from apicore import ApiClient

from ._services import AppClient
from ._utils import API_VERSION, BASE_URL


@pytest.fixture
def configured_client() -> ApiClient:
    """Return an unauthenticated client pointed at the fixture base URL.

    'why': match the default client used by the fixture scenarios
    """

    return ApiClient(base_url=BASE_URL, version=API_VERSION, log_level="DEBUG")


@pytest.fixture
def app_client(configured_client: ApiClient) -> AppClient:
    """Return the generated services bound to `configured_client`."""

    return AppClient(configured_client)


@pytest.fixture(autouse=True)
def _clear_apicore_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host APICORE_* variables from leaking into configuration tests."""

    for name in ("BASE_URL", "VERSION", "TOKEN", "USERNAME", "PASSWORD", "LOG_LEVEL"):
        monkeypatch.delenv(f"APICORE_{name}", raising=False)
