from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import pytest

from mcp_log_layout_server.core.config import (
    DATE_STYLE_ENV,
    STRICT_LEVELS_ENV,
    UNKNOWN_LEVEL_NAME_ENV,
)
from mcp_log_layout_server.core.models import Level, LogEvent

FIXED_TS = datetime(2025, 12, 30, 8, 12, 4, tzinfo=UTC)


@pytest.fixture(autouse=True)
def _clean_layout_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (DATE_STYLE_ENV, UNKNOWN_LEVEL_NAME_ENV, STRICT_LEVELS_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def make_event() -> Callable[..., LogEvent]:
    def _make(
        payload: Any = "boot complete",
        *,
        logger_name: str = "root",
        level: int = Level.INFO,
        timestamp: datetime = FIXED_TS,
    ) -> LogEvent:
        return LogEvent(
            logger_name=logger_name,
            timestamp=timestamp,
            level=int(level),
            payload=payload,
        )

    return _make
