import json

from api.auth import AuthContext
from api.config import ApiSettings, load_saved_config


def test_defaults_without_saved_config(tmp_path, monkeypatch):
    monkeypatch.delenv("API_BASE_URL", raising=False)
    settings = ApiSettings(config_file=tmp_path / "config.json")

    assert settings.base_url == "https://grams-lyart.vercel.app/api"
    assert settings.refresh_interval == 30.0
    assert settings.max_upload_bytes == 5 * 1024 * 1024


def test_environment_overrides_default(tmp_path, monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "http://localhost:5000/api/")
    monkeypatch.setenv("REQUEST_TIMEOUT", "15")

    settings = ApiSettings(config_file=tmp_path / "config.json")

    assert settings.base_url == "http://localhost:5000/api"
    assert settings.request_timeout == 15.0


def test_saved_config_wins_over_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("API_BASE_URL", "http://localhost:5000/api")
    config_file = tmp_path / "config.json"
    config_file.write_text(
        json.dumps({"api": {"base_url": "https://grams.example/api", "timeout": 30, "refresh_interval": 10}})
    )

    settings = ApiSettings(config_file=config_file)

    assert settings.base_url == "https://grams.example/api"
    assert settings.request_timeout == 30.0
    assert settings.refresh_interval == 10.0


def test_broken_saved_config_is_ignored(tmp_path):
    config_file = tmp_path / "config.json"
    config_file.write_text("{not json")

    assert load_saved_config(config_file) == {}


def test_auth_context_token_lifecycle():
    auth = AuthContext("")
    assert not auth.is_authenticated
    assert auth.headers() == {}

    auth.set_token("abc")
    assert auth.headers() == {"Authorization": "Bearer abc"}

    auth.clear()
    assert auth.token is None
