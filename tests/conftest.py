from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # Monday 2024-03-04, mid-morning
    return datetime(2024, 3, 4, 11, 30, 0)
