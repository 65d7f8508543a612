import pytest
from fastapi.testclient import TestClient

from kasir_api.config import Settings
from kasir_api.main import create_app


@pytest.fixture
def settings():
    return Settings(database_path="", api_prefix="/api", enable_reset=True, log_level="WARNING")


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture(params=["memory", "sqlite"])
def backend_client(request, tmp_path):
    db_path = str(tmp_path / "kasir.db") if request.param == "sqlite" else ""
    app = create_app(Settings(database_path=db_path, log_level="WARNING"))
    return TestClient(app)
