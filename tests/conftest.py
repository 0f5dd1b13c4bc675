import pytest


@pytest.fixture
def call_log():
    return []
