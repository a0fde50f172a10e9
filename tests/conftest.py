import pytest

from vercel_api.services.request_context import request_id_var

# Fixed "now" for tests that depend on the clock (epoch seconds).
_NOW = 1_700_000_000.0


@pytest.fixture
def now() -> float:
    return _NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture(autouse=True)
def _clear_request_id():
    """Make sure no request ID leaks between tests."""
    token = request_id_var.set("")
    yield
    request_id_var.reset(token)
