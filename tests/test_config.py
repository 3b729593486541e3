import json
import os
import stat

import pytest

from todoist_cli.todoist_api.errors import ConfigError, NotConfiguredError
from todoist_cli.utils import config


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv(config.TOKEN_ENV, raising=False)
    monkeypatch.delenv(config.DEBUG_ENV, raising=False)
    return tmp_path


class TestLoadConfig:
    def test_env_var_wins(self, home, monkeypatch):
        config.save_token("from-file")
        monkeypatch.setenv(config.TOKEN_ENV, "from-env")

        assert config.get_token() == "from-env"
        assert config.token_source() == "environment"

    def test_reads_file(self, home):
        config.save_token("abc123")
        assert config.get_token() == "abc123"
        assert config.token_source() == str(home / ".todoist-cli" / "config.json")

    def test_missing_file(self, home):
        with pytest.raises(NotConfiguredError) as exc:
            config.load_config()
        assert str(exc.value) == "not configured. Run 'todoist auth' or set TODOIST_API_TOKEN"
        assert config.token_source() is None

    def test_empty_token(self, home):
        path = home / ".todoist-cli" / "config.json"
        path.parent.mkdir()
        path.write_text(json.dumps({"api_token": ""}))

        with pytest.raises(NotConfiguredError, match="no API token configured"):
            config.load_config()

    def test_malformed_file(self, home):
        path = home / ".todoist-cli" / "config.json"
        path.parent.mkdir()
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="failed to parse config"):
            config.load_config()


class TestSaveConfig:
    @pytest.mark.skipif(os.name != "posix", reason="POSIX permissions")
    def test_permissions(self, home):
        path = config.save_token("abc123")

        assert stat.S_IMODE(os.stat(path.parent).st_mode) == 0o700
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600
        assert json.loads(path.read_text()) == {"api_token": "abc123"}

    def test_overwrite(self, home):
        config.save_token("old")
        config.save_token("new")
        assert config.get_token() == "new"

    def test_remove(self, home):
        assert config.remove_config() is False
        config.save_token("abc")
        assert config.remove_config() is True
        assert not config.config_path().exists()


class TestEnvironment:
    @pytest.mark.parametrize("value,expected", [("1", True), ("true", True), ("YES", True), ("0", False), ("", False)])
    def test_debug_from_env(self, monkeypatch, value, expected):
        monkeypatch.setenv(config.DEBUG_ENV, value)
        assert config.debug_from_env() is expected

    def test_load_env_vars_reads_env_file(self, home, monkeypatch):
        monkeypatch.chdir(home)
        (home / ".tdcli.env").write_text("TODOIST_API_TOKEN=dotenv-token\n")

        config.load_env_vars()

        assert os.environ[config.TOKEN_ENV] == "dotenv-token"
