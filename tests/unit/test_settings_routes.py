import json

import pytest

from config import AppConfig, Settings, load_app_registry


def test_settings_defaults():
    settings = Settings(_env_file=None)
    assert settings.API_PREFIX == "/api"
    assert settings.PORT == 4000
    assert settings.DEFAULT_ROLE == "software_engineer"
    assert settings.DEFAULT_LEVEL == "mid"
    assert settings.DEFAULT_PERSONA == "efficient"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_LEVEL", "senior")
    monkeypatch.setenv("PORT", "8080")
    settings = Settings(_env_file=None)
    assert settings.DEFAULT_LEVEL == "senior"
    assert settings.PORT == 8080


def _config(registry):
    return {
        "llm_routes": {
            "stub": {
                "name": "stub",
                "base_url": "http://localhost",
                "endpoint": "/v1",
                "model": "m",
                "timeout_s": 5,
            }
        },
        "registry": registry,
    }


def test_load_app_registry_resolves_targets(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(_config({"interviewer.reply": "stub"})))

    cfg, routes = load_app_registry(path, ("interviewer.reply",))

    assert isinstance(cfg, AppConfig)
    assert routes["interviewer.reply"].model == "m"
    assert routes["interviewer.reply"].max_retries == 0
    assert cfg.prompts.history_limit == 0


def test_load_app_registry_reports_missing_entries(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(_config({"interviewer.reply": "ghost"})))

    with pytest.raises(KeyError):
        load_app_registry(path, ("interviewer.next_question",))
    with pytest.raises(KeyError):
        load_app_registry(path, ("interviewer.reply",))


def test_shipped_config_binds_both_targets():
    from pathlib import Path

    root = Path(__file__).resolve().parents[2]
    cfg, routes = load_app_registry(root / "app_config.json", ("interviewer.next_question", "interviewer.reply"))
    assert set(routes) == {"interviewer.next_question", "interviewer.reply"}
    assert all(route.timeout_s > 0 for route in routes.values())
