"""
test_config.py

Tests for endpoint constants and layered settings resolution.
"""

import os

import pytest
from pydantic import ValidationError

from pushbullet_client import config


def test_endpoints():
    assert config.DEVICES_URL == "https://api.pushbullet.com/v2/devices"
    assert config.PUSHES_URL == "https://api.pushbullet.com/v2/pushes"


class TestResolveTimeout:

    def test_fallback_default(self):
        assert config.resolve_timeout() == config.DEFAULT_TIMEOUT

    def test_env(self, monkeypatch):
        monkeypatch.setenv(config.TIMEOUT_ENV, "7.5")
        assert config.resolve_timeout() == 7.5

    def test_invalid_env_ignored(self, monkeypatch):
        monkeypatch.setenv(config.TIMEOUT_ENV, "soon")
        assert config.resolve_timeout() == config.DEFAULT_TIMEOUT

    def test_programmatic_default_beats_env(self, monkeypatch):
        monkeypatch.setenv(config.TIMEOUT_ENV, "7.5")
        config.set_default_timeout(3)
        assert config.resolve_timeout() == 3.0

    def test_explicit_beats_everything(self, monkeypatch):
        monkeypatch.setenv(config.TIMEOUT_ENV, "7.5")
        config.set_default_timeout(3)
        assert config.resolve_timeout(1) == 1.0

    @pytest.mark.parametrize("bad", [0, -1])
    def test_non_positive_rejected(self, bad):
        with pytest.raises(ValueError):
            config.resolve_timeout(bad)
        with pytest.raises(ValueError):
            config.set_default_timeout(bad)


class TestAccessToken:

    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv(config.TOKEN_ENV, "o.envtoken")
        assert config.get_access_token() == "o.envtoken"

    def test_from_dotenv_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv(config.TOKEN_ENV, raising=False)
        (tmp_path / ".env").write_text("PUSHBULLET_TOKEN=o.dotenvtoken\n")
        try:
            assert config.get_access_token() == "o.dotenvtoken"
        finally:
            # set by load_dotenv, not by monkeypatch
            os.environ.pop(config.TOKEN_ENV, None)

    def test_missing(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv(config.TOKEN_ENV, raising=False)
        with pytest.raises(KeyError, match="PUSHBULLET_TOKEN"):
            config.get_access_token()


class TestLoadSettings:

    def test_load(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("access_token: o.abc123\ntimeout: 10\n")
        settings = config.load_settings(path)
        assert settings.access_token == "o.abc123"
        assert settings.timeout == 10.0

    def test_timeout_optional(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("access_token: o.abc123\n")
        assert config.load_settings(path).timeout is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            config.load_settings(tmp_path / "nope.yml")

    def test_missing_token(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("timeout: 10\n")
        with pytest.raises(ValidationError):
            config.load_settings(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "settings.yml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ValueError):
            config.load_settings(path)
