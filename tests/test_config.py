"""Unit tests for configuration loading."""

from pathlib import Path

from commit_helper.config import Config, load_config
from commit_helper.models import DispatchMode


class TestConfigPaths:
    """Tests for the config directory helpers."""

    def test_uses_xdg_config_home(self, isolated_config):
        assert Config.get_config_dir() == isolated_config
        assert Config.get_config_path() == isolated_config / "config.toml"
        assert Config.get_session_path() == isolated_config / "session.json"


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        config = load_config()
        assert config.dispatch == DispatchMode.TERMINAL
        assert config.root is None
        assert config.verbose is False

    def test_reads_config_file(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.toml").write_text(
            '[default]\ndispatch = "execute"\nroot = "/srv/addons"\n'
        )

        config = load_config()

        assert config.dispatch == DispatchMode.EXECUTE
        assert config.root == Path("/srv/addons")

    def test_environment_overrides_file(self, isolated_config, monkeypatch):
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.toml").write_text('[default]\ndispatch = "execute"\n')
        monkeypatch.setenv("COMMIT_HELPER_DISPATCH", "TERMINAL")
        monkeypatch.setenv("COMMIT_HELPER_VERBOSE", "yes")

        config = load_config()

        assert config.dispatch == DispatchMode.TERMINAL
        assert config.verbose is True

    def test_malformed_file_is_ignored(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "config.toml").write_text("this is = = not toml")

        assert load_config() == Config()

    def test_invalid_value_falls_back_to_defaults(self, monkeypatch):
        monkeypatch.setenv("COMMIT_HELPER_DISPATCH", "carrier-pigeon")

        assert load_config().dispatch == DispatchMode.TERMINAL

    def test_invalid_value_keeps_other_settings(self, monkeypatch):
        monkeypatch.setenv("COMMIT_HELPER_DISPATCH", "carrier-pigeon")
        monkeypatch.setenv("COMMIT_HELPER_ROOT", "/srv/addons")
        monkeypatch.setenv("COMMIT_HELPER_VERBOSE", "1")

        config = load_config()

        assert config.dispatch == DispatchMode.TERMINAL
        assert config.root == Path("/srv/addons")
        assert config.verbose is True
