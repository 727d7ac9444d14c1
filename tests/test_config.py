"""Tests for the configuration dotfile."""

import pytest

from secure_git.config import (
    CONFIG_ENV_VAR,
    CONFIG_FILENAME,
    Config,
    ConfigError,
    config_path,
    expand_path,
    load_config,
    save_config,
)


class TestConfigPath:
    def test_default_in_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        monkeypatch.setenv("HOME", str(tmp_path))
        assert config_path() == tmp_path / CONFIG_FILENAME

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "custom.env"))
        assert config_path() == tmp_path / "custom.env"


class TestLoadSave:
    """Round trip and malformed files."""

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "cfg.env"
        written = save_config(Config(dev_directory="/home/me/dev"), path)
        assert written == path
        assert path.read_text() == "DEV_DIRECTORY=/home/me/dev\n"
        assert load_config(path).dev_directory == "/home/me/dev"

    def test_quotes_stripped(self, tmp_path):
        path = tmp_path / "cfg.env"
        path.write_text("# comment\nDEV_DIRECTORY=\"/srv/code\"\n")
        assert load_config(path).dev_directory == "/srv/code"

    def test_export_prefix(self, tmp_path):
        path = tmp_path / "cfg.env"
        path.write_text("export DEV_DIRECTORY=/srv/code\n")
        assert load_config(path).dev_directory == "/srv/code"

    def test_save_keeps_other_keys(self, tmp_path):
        path = tmp_path / "cfg.env"
        path.write_text("OTHER=1\nDEV_DIRECTORY=/old\n")
        save_config(Config("/new"), path)
        content = path.read_text()
        assert "OTHER=1" in content
        assert "DEV_DIRECTORY=/new" in content
        assert "/old" not in content
        assert load_config(path).dev_directory == "/new"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="does not exist"):
            load_config(tmp_path / "nope.env")

    def test_missing_key(self, tmp_path):
        path = tmp_path / "cfg.env"
        path.write_text("OTHER=1\n")
        with pytest.raises(ConfigError, match="DEV_DIRECTORY not found"):
            load_config(path)

    def test_empty_value(self, tmp_path):
        path = tmp_path / "cfg.env"
        path.write_text("DEV_DIRECTORY=\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_save_to_missing_directory(self, tmp_path):
        with pytest.raises(ConfigError, match="Error writing"):
            save_config(Config("/x"), tmp_path / "missing" / "cfg.env")

    def test_uses_env_location(self, monkeypatch, tmp_path):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "cfg.env"))
        save_config(Config("/work"))
        assert load_config().dev_directory == "/work"


class TestExpandPath:
    def test_tilde(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert expand_path("~/dev") == str(tmp_path / "dev")

    def test_whitespace(self):
        assert expand_path("  /srv/code \n") == "/srv/code"

    def test_plain(self):
        assert expand_path("relative/dir") == "relative/dir"
