from typing import Any

import pytest

from tests.fakes import STEW


@pytest.fixture
def stew() -> dict[str, Any]:
    return dict(STEW)
