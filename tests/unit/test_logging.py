import logging

import pytest
from infrastructure.logging import get_log_level


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [("debug", logging.DEBUG), ("WARNING", logging.WARNING), ("bogus", logging.INFO)],
)
def test_get_log_level(
    monkeypatch: pytest.MonkeyPatch, value: str, expected: int
) -> None:
    """Test get log level."""
    monkeypatch.setenv("LOG_LEVEL", value)
    assert get_log_level() == expected


@pytest.mark.unit
def test_get_log_level_default(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test get log level default."""
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    assert get_log_level() == logging.INFO
