import json

import pytest

from ydjs_env.config_loader import ENV_FILE_VARIABLE, LoaderSettings, load_config, load_settings
from ydjs_env.errors import SettingsError


def test_defaults(monkeypatch):
    monkeypatch.delenv(ENV_FILE_VARIABLE, raising=False)
    settings = load_settings()
    assert settings == LoaderSettings()
    assert settings.env_file == ".env"
    assert settings.default_delimiter == ";"


def test_yaml_settings(tmp_path):
    path = tmp_path / "ydjs.yaml"
    path.write_text("env_file: conf/app.env\ninteractive: false\nlog_level: info\n", encoding="utf-8")
    settings = load_settings(path)
    assert settings.env_file == "conf/app.env"
    assert settings.interactive is False
    assert settings.log_level == "INFO"


def test_json_settings(tmp_path):
    path = tmp_path / "ydjs.json"
    path.write_text(json.dumps({"default_delimiter": ","}), encoding="utf-8")
    assert load_config(path) == {"default_delimiter": ","}
    assert load_settings(path).default_delimiter == ","


def test_empty_yaml_is_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_FILE_VARIABLE, raising=False)
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == LoaderSettings()


def test_env_variable_picks_env_file(monkeypatch, tmp_path):
    monkeypatch.setenv(ENV_FILE_VARIABLE, "other.env")
    assert load_settings().env_file == "other.env"
    path = tmp_path / "ydjs.yaml"
    path.write_text("env_file: named.env\n", encoding="utf-8")
    assert load_settings(path).env_file == "named.env"


@pytest.mark.parametrize(
    "text",
    ["log_level: loud\n", "env_file: '  '\n", "- a list\n", "key: [unclosed\n"],
)
def test_invalid_settings(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(SettingsError):
        load_settings(path)


def test_missing_settings_file(tmp_path):
    with pytest.raises(SettingsError):
        load_settings(tmp_path / "missing.yaml")
