import pytest
from fastapi.testclient import TestClient

from potion_server.config import Settings
from potion_server.main import create_app


@pytest.fixture
def settings():
    """Settings pointing at a fresh in-memory database."""
    return Settings(jwt_secret="test-secret", cookie_name="potion_token", database_url="sqlite://")


@pytest.fixture
def credentials():
    return {"name": "harry", "password": "patronus123"}


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_client(client, credentials):
    """A client holding a valid session cookie."""
    assert client.post("/auth/register", json=credentials).status_code == 201
    assert client.post("/auth/login", json=credentials).status_code == 200
    return client


@pytest.fixture
def sample_potion():
    return {
        "name": "Potion de vie",
        "price": 50,
        "vendor": "vendor-a",
        "category": "Soins",
        "strength": 7.5,
        "flavor": 5.0,
        "score": 8.2,
    }
