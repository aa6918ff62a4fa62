from __future__ import annotations

import pytest
import respx

from sitefixtures import FakeClock


@pytest.fixture()
def mock_http():
    """Patch httpx at the transport layer; every test wires its own routes."""
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def fake_clock():
    return FakeClock()
