"""Minimal live smoke harness for the request runtime.

Expects an API server exposing the fixture routes; settings come from a `.env`
next to this file (APICORE_BASE_URL, APICORE_VERSION, APICORE_TOKEN, ...).
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

from .. import ApiClient, ApiError, ApiRequestOptions, RequestAbortedError, load_config

ROOT = Path(__file__).resolve().parent
ENV_FILE = ROOT / ".env"


async def _run(client: ApiClient) -> int:
    simple = ApiRequestOptions(method="GET", url="/api/v{api-version}/simple")
    print(f"simple: {await client.request(simple)!r}")

    pending = client.request(simple)
    pending.cancel()
    try:
        await pending
    except RequestAbortedError as exc:
        print(f"cancel: {exc}")

    failing = ApiRequestOptions(
        method="GET",
        url="/api/v{api-version}/error",
        query={"status": 409},
    )
    try:
        await client.request(failing)
    except ApiError as exc:
        print(f"error: {exc.to_dict()}")
        return 0
    print("error: expected ApiError for status 409")
    return 1


def main() -> int:
    config = load_config(ENV_FILE if ENV_FILE.exists() else None)
    return asyncio.run(_run(ApiClient(config)))


if __name__ == "__main__":
    sys.exit(main())
