from potion_server.config import Settings, load_settings


ENV_VARS = (
    "JWT_SECRET", "COOKIE_NAME", "COOKIE_SECURE", "TOKEN_EXPIRE_HOURS", "DATABASE_URL",
    "HOST", "PORT", "CORS_ALLOW_ORIGINS", "LOG_LEVEL",
)


def clear_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    clear_env(monkeypatch)
    settings = load_settings()
    assert settings.port == 3000
    assert settings.token_expire_hours == 24
    assert settings.cors_allow_origins == ("*",)
    assert settings.cookie_secure is False


def test_reads_environment(monkeypatch):
    clear_env(monkeypatch)
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("COOKIE_NAME", "brew")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./tmp.db")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
    monkeypatch.setenv("COOKIE_SECURE", "yes")

    settings = load_settings()
    assert settings == Settings(
        jwt_secret="s3cret",
        cookie_name="brew",
        cookie_secure=True,
        port=8080,
        database_url="sqlite:///./tmp.db",
        cors_allow_origins=("http://a.test", "http://b.test"),
    )


def test_custom_cookie_name_used_by_app():
    from fastapi.testclient import TestClient
    from potion_server.main import create_app

    app = create_app(Settings(cookie_name="brew", database_url="sqlite://"))
    with TestClient(app) as client:
        client.post("/auth/register", json={"name": "neville", "password": "mimbulus"})
        resp = client.post("/auth/login", json={"name": "neville", "password": "mimbulus"})
        assert resp.headers["set-cookie"].startswith("brew=")
        assert client.get("/auth/me").json()["user_name"] == "neville"
