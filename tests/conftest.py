import logging

import pytest


@pytest.fixture(autouse=True)
def quiet_root_logger():
    """Start every test with argnest's default (quiet) log level."""
    root = logging.getLogger()
    previous = root.level
    root.setLevel(logging.WARNING)
    yield
    root.setLevel(previous)
