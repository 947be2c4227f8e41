from pathlib import Path

import pytest

from dress_studio.config import DEFAULT_PORT, DEFAULT_UPCOMING_DAYS, load_config

ENV_NAMES = [
    "STUDIO_DATABASE_URL",
    "STUDIO_DB_PATH",
    "STUDIO_STRICT_UPDATE_OVERLAP",
    "STUDIO_STRICT_RELEASE",
    "STUDIO_UPCOMING_DAYS",
    "STUDIO_COUNTRY_CODE",
    "STUDIO_LOG_LEVEL",
    "STUDIO_HOST",
    "PORT",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # setenv first so teardown also removes values loaded from .env files
    for name in ENV_NAMES:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestLoadConfig:
    def test_defaults(self, clean_env, tmp_path):
        config = load_config(tmp_path / "missing.env")

        assert config.database_url is None
        assert config.db_path is None
        assert config.strict_update_overlap is False
        assert config.strict_release is False
        assert config.upcoming_days == DEFAULT_UPCOMING_DAYS
        assert config.port == DEFAULT_PORT

    def test_environment_overrides(self, clean_env, tmp_path):
        clean_env.setenv("STUDIO_DB_PATH", str(tmp_path / "studio.db"))
        clean_env.setenv("STUDIO_STRICT_RELEASE", "yes")
        clean_env.setenv("STUDIO_UPCOMING_DAYS", "14")
        clean_env.setenv("STUDIO_LOG_LEVEL", "debug")

        config = load_config(tmp_path / "missing.env")

        assert config.db_path == Path(tmp_path / "studio.db")
        assert config.strict_release is True
        assert config.strict_update_overlap is False
        assert config.upcoming_days == 14
        assert config.log_level == "DEBUG"

    def test_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "STUDIO_DATABASE_URL=sqlite://\nSTUDIO_STRICT_UPDATE_OVERLAP=1\n",
            encoding="utf-8",
        )

        config = load_config(env_file)

        assert config.database_url == "sqlite://"
        assert config.strict_update_overlap is True

    def test_bad_integer(self, clean_env, tmp_path):
        clean_env.setenv("STUDIO_UPCOMING_DAYS", "soon")

        with pytest.raises(ValueError):
            load_config(tmp_path / "missing.env")
