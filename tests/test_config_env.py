"""Tests for loading CLAWDBOT_* settings from .env files."""

import os
from pathlib import Path

import pytest

from clawdbot.core.config import load_config, load_layered_env
from clawdbot.core.config.env import get_user_env_path, read_env_settings

KEY = "CLAWDBOT_TEST_VALUE"
FOREIGN_KEY = "OTHER_TOOL_TOKEN"


@pytest.fixture(autouse=True)
def clean_keys():
    for name in (KEY, FOREIGN_KEY):
        os.environ.pop(name, None)
    yield
    for name in (KEY, FOREIGN_KEY):
        os.environ.pop(name, None)


@pytest.fixture
def user_env(tmp_path: Path) -> Path:
    return tmp_path / "user.env"


class TestReadEnvSettings:
    def test_only_prefixed_keys(self, tmp_path: Path):
        path = tmp_path / ".env"
        path.write_text(f"{KEY}=1\n{FOREIGN_KEY}=secret\n")
        assert read_env_settings(path) == {KEY: "1"}

    def test_bare_key_skipped(self, tmp_path: Path):
        path = tmp_path / ".env"
        path.write_text(f"{KEY}\n")
        assert read_env_settings(path) == {}

    def test_missing_file(self, tmp_path: Path):
        assert read_env_settings(tmp_path / "absent.env") == {}


class TestLoadLayeredEnv:
    def test_user_env_loaded(self, user_env: Path, project_dir: Path):
        user_env.write_text(f"{KEY}=user\n")

        exported = load_layered_env(user_env_path=user_env)

        assert exported == {KEY: "user"}
        assert os.environ[KEY] == "user"

    def test_project_overrides_user(self, user_env: Path, project_dir: Path):
        user_env.write_text(f"{KEY}=user\n")
        (project_dir / ".env").write_text(f"{KEY}=project\n")

        load_layered_env(user_env_path=user_env)

        assert os.environ[KEY] == "project"

    def test_shell_env_wins(self, user_env: Path, project_dir: Path):
        os.environ[KEY] = "shell"
        (project_dir / ".env").write_text(f"{KEY}=project\n")

        exported = load_layered_env(user_env_path=user_env)

        assert exported == {}
        assert os.environ[KEY] == "shell"

    def test_other_tools_keys_not_exported(self, project_dir: Path):
        (project_dir / ".env").write_text(f"{FOREIGN_KEY}=secret\n")

        load_layered_env()

        assert FOREIGN_KEY not in os.environ

    def test_default_user_path(self, user_config_dir: Path):
        assert get_user_env_path() == user_config_dir / ".env"
        (user_config_dir / ".env").write_text(f"{KEY}=xdg\n")

        load_layered_env()

        assert os.environ[KEY] == "xdg"

    def test_feeds_config_overrides(self, project_dir: Path):
        (project_dir / ".env").write_text("CLAWDBOT_SKIP_MIGRATION=1\n")

        load_layered_env()

        try:
            assert load_config(use_cache=False).migration.enabled is False
        finally:
            os.environ.pop("CLAWDBOT_SKIP_MIGRATION", None)
