"""Pytest configuration for the chatwire test suite.

Environment-driven configuration is isolated per test so a developer's real
keys, ``.env`` file or log level never leak into assertions.
"""

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from chatwire.base.logging import get_logger
from chatwire.config import reset_config_cache
from chatwire.tests.helpers import RecordingHandler


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip provider and chatwire variables and point .env at an empty path."""
    for provider in ("OPENAI", "OPENROUTER", "DEEPSEEK", "XAI", "GROK"):
        for suffix in ("API_KEY", "BASE_URL", "MODEL", "ORGANIZATION"):
            monkeypatch.delenv(f"{provider}_{suffix}", raising=False)
    for name in (
        "CHATWIRE_CONFIG_FILE",
        "CHATWIRE_LOG_LEVEL",
        "CHATWIRE_TIMEOUT_CONNECT_SECONDS",
        "CHATWIRE_TIMEOUT_READ_SECONDS",
        "CHATWIRE_TIMEOUT_STREAM_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CHATWIRE_DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def log_records() -> Iterator[RecordingHandler]:
    """Attach a recording handler to the shared ``chatwire`` logger."""
    logger = get_logger()
    handler = RecordingHandler()
    logger.addHandler(handler)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(logging.INFO)
