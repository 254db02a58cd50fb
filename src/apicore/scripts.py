"""Console entry points for apicore's test suite and live smoke harness.

'why': `check` gates a change on the mocked-transport suite, lint, and typing of `src`;
`live_check` exercises a real fixture server only when one is configured
"""
from __future__ import annotations

import logging
import os
import subprocess
import sys
from collections.abc import Sequence
from typing import Final

from dotenv import dotenv_values

from ._config import ENV_PREFIX
from .live_test import test as live_harness

_LOGGER = logging.getLogger("apicore.scripts")
_CHECK_STEPS: Final[tuple[tuple[str, tuple[str, ...]], ...]] = (
    ("unit tests", ("pytest", "src/apicore/tests")),
    ("lint", ("ruff", "check", ".")),
    ("types", ("basedpyright", "src")),
)
_LIVE_COMMAND: Final[tuple[str, ...]] = (sys.executable, "-m", "apicore.live_test.test")
_BASE_URL_KEY: Final[str] = f"{ENV_PREFIX}BASE_URL"
# Exit status when the live harness has no server to talk to.
_NOT_CONFIGURED: Final[int] = 2


def check() -> None:
    """Run each check step in order; exit with the first failing step's status."""

    _ensure_logging()
    for label, command in _CHECK_STEPS:
        exit_code = _run_command(command)
        if exit_code != 0:
            _LOGGER.error("check failed at %s (exit %s)", label, exit_code)
            raise SystemExit(exit_code)


def live_check() -> None:
    """Run the live harness once a fixture server base URL is configured.

    The URL is read from the environment or from the harness `.env` file.
    """

    _ensure_logging()
    if not _live_base_url_configured():
        _LOGGER.error("live check skipped: set %s or add it to %s", _BASE_URL_KEY, live_harness.ENV_FILE)
        raise SystemExit(_NOT_CONFIGURED)
    exit_code = _run_command(_LIVE_COMMAND)
    if exit_code != 0:
        raise SystemExit(exit_code)


def _live_base_url_configured() -> bool:
    if os.environ.get(_BASE_URL_KEY, "").strip():
        return True
    if not live_harness.ENV_FILE.exists():
        return False
    return bool((dotenv_values(live_harness.ENV_FILE).get(_BASE_URL_KEY) or "").strip())


def _ensure_logging() -> None:
    if not _LOGGER.handlers:
        logging.basicConfig(level=logging.INFO, format="%(message)s")


def _run_command(command: Sequence[str]) -> int:
    _LOGGER.info("→ %s", " ".join(command))
    completed = subprocess.run(list(command), check=False)
    return completed.returncode
