"""Pytest configuration and fixtures."""

from collections.abc import Callable, Iterator
from unittest.mock import patch

import pytest

from notifs.common.settings import Settings, get_settings

NOW = 1_700_000_000


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Iterator[None]:
    """Keep cached settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        webhook_secret="whsec_test",
        signature_tolerance_seconds=300,
        log_level="DEBUG",
    )


@pytest.fixture
def secret() -> str:
    return "whsec_test"


@pytest.fixture
def payload() -> bytes:
    """Sample notification body."""
    return b'{"title":"hi"}'


@pytest.fixture
def freeze_now() -> Iterator[Callable[[int], None]]:
    """Freeze the verifier clock; call the fixture value to move it."""
    current = {"now": NOW}
    with patch("notifs.signature._now", side_effect=lambda: current["now"]):

        def _set(value: int) -> None:
            current["now"] = value

        yield _set
