"""Pytest configuration.

Run pytest from this project's root. pythonpath in pyproject.toml puts
src/ and the project root on sys.path so tests import the declint package
and the shared helpers in tests/structure_fixtures.py.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def _quiet_root_logger():
    """Keep the CLI's logging.basicConfig from leaking handlers between tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
