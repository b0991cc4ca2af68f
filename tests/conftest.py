import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mazegen import create_app  # noqa: E402


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: coarse timing guardrails for the generator")


@pytest.fixture(autouse=True)
def _quiet_logs(monkeypatch):
    """Start every test from default log settings regardless of the shell env."""
    monkeypatch.delenv("MAZEGEN_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MAZEGEN_LOG_JSON", raising=False)
    yield


@pytest.fixture()
def app():
    app = create_app({"TESTING": True})
    return app


@pytest.fixture()
def client(app):
    return app.test_client()
