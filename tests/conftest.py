import pytest

from floxy_server.service import resources


@pytest.fixture(autouse=True)
def fresh_configs():
    resources.reset_configs()
    yield
    resources.reset_configs()
