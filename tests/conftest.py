"""
Pytest configuration and fixtures for the makeup store.

Every test gets its own data file and local product cache under
``tmp_path``.  The HTTP client is pointed at the in-process application
by passing FastAPI's ``TestClient`` as its session.
"""

import os
import tempfile

# The module-level app in ``main`` loads its store on import; keep it
# away from the project's real data file.
os.environ.setdefault("DATA_FILE", os.path.join(tempfile.mkdtemp(prefix="makeup-store-"), "store.json"))

import pytest
import requests
from fastapi.testclient import TestClient

from makeup_store_api.app.main import create_app
from makeup_store_client import LocalProductCache, MakeupStoreAPI


API_URL = "http://testserver/api"


class OfflineSession:
    """Session stand-in for a backend that cannot be reached."""

    def __init__(self):
        self.calls = []

    def request(self, **kwargs):
        self.calls.append((kwargs["method"], kwargs["url"]))
        raise requests.ConnectionError("connection refused")


@pytest.fixture(autouse=True)
def local_storage_env(tmp_path, monkeypatch):
    monkeypatch.setenv("STORE_LOCAL_STORAGE", str(tmp_path / "env-local-storage.json"))


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "data" / "store.json"


@pytest.fixture
def app(data_file):
    return create_app(str(data_file))


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def store(app):
    return app.state.store


@pytest.fixture
def api(client):
    return MakeupStoreAPI(base_url=API_URL, session=client)


@pytest.fixture
def offline_api():
    return MakeupStoreAPI(base_url="http://localhost:3000/api", session=OfflineSession())


@pytest.fixture
def cache(tmp_path):
    return LocalProductCache(tmp_path / "local_storage.json")
