from __future__ import annotations

import numpy as np
import pytest

from dotsketch.config.settings import get_settings
from dotsketch.core.random_source import RandomSource


class FixedSource(RandomSource):
    """Random source whose uniform draws always return one value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.fixed = float(value)
        self.calls: list[tuple[float, float, object]] = []

    def range(self, min_value, max_value, size=None):
        self.calls.append((min_value, max_value, size))
        if size is None:
            return self.fixed
        return np.full(size, self.fixed)


@pytest.fixture
def fixed_source():
    return FixedSource


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
