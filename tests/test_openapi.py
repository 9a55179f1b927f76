from fastapi.testclient import TestClient

from potion_server.config import Settings
from potion_server.main import create_app


GATED = [
    ("/potions", "post"),
    ("/potions/{potion_id}", "put"),
    ("/potions/{potion_id}", "delete"),
    ("/auth/me", "get"),
]


def test_docs_declare_cookie_scheme(client, settings):
    schema = client.get("/openapi.json").json()
    assert schema["components"]["securitySchemes"]["cookieAuth"] == {
        "type": "apiKey",
        "in": "cookie",
        "name": settings.cookie_name,
    }


def test_gated_routes_require_cookie_in_docs(client):
    paths = client.get("/openapi.json").json()["paths"]
    for path, method in GATED:
        assert paths[path][method]["security"] == [{"cookieAuth": []}]


def test_public_routes_carry_no_security(client):
    paths = client.get("/openapi.json").json()["paths"]
    assert "security" not in paths["/potions"]["get"]
    assert "security" not in paths["/potions/{potion_id}"]["get"]
    assert "security" not in paths["/auth/login"]["post"]


def test_docs_follow_configured_cookie_name():
    app = create_app(Settings(cookie_name="brew", database_url="sqlite://"))
    with TestClient(app) as client:
        schema = client.get("/openapi.json").json()
    assert schema["components"]["securitySchemes"]["cookieAuth"]["name"] == "brew"


def test_docs_page_served(client):
    resp = client.get("/api-docs")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
