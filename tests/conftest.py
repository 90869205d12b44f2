from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.pod_builder import PodBuilder


@pytest.fixture
def pod_builder(tmp_path: Path) -> PodBuilder:
    """Provide a reusable pod builder rooted at the pytest tmp_path."""
    return PodBuilder(tmp_path)
