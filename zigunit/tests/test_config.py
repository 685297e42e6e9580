"""Tests for settings loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from zigunit.config import Settings, load_settings


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.test_keyword == "test"
        assert settings.symbol_tag == "test_"
        assert settings.collision_policy == "error"
        assert settings.log_level == "INFO"

    def test_environment_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ZIGUNIT_COLLISION_POLICY", "alias")
        monkeypatch.setenv("ZIGUNIT_LOG_LEVEL", "DEBUG")

        settings = Settings()

        assert settings.collision_policy == "alias"
        assert settings.log_level == "DEBUG"

    def test_invalid_keyword(self) -> None:
        with pytest.raises(ValidationError):
            Settings(test_keyword="two words")

    def test_invalid_tag(self) -> None:
        with pytest.raises(ValidationError):
            Settings(symbol_tag="1bad")

    def test_invalid_policy(self) -> None:
        with pytest.raises(ValidationError):
            Settings(collision_policy="ignore")  # type: ignore[arg-type]

    def test_load_from_env_file(self, tmp_path: Path) -> None:
        env_file = tmp_path / "zigunit.env"
        env_file.write_text("ZIGUNIT_TEST_KEYWORD=check\n", encoding="utf-8")

        settings = load_settings(str(env_file))

        assert settings.test_keyword == "check"
