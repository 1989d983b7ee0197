"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from gambit.config import Settings
from gambit.profiles import DEFAULT_CONFIG, get_profile

ENV_VARS = [
    "GAME_PROFILE",
    "INITIAL_BP",
    "MAX_EFFECTIVE_BP",
    "BASE_TURN_REGENERATION",
    "TURN_REGEN_CAP",
    "DEFENDER_WINS_TIES",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        s = Settings(_env_file=None)
        assert s.game_profile == "standard"
        assert s.game_config() is DEFAULT_CONFIG

    def test_profile_selection(self, monkeypatch):
        monkeypatch.setenv("GAME_PROFILE", "beginner")
        s = Settings(_env_file=None)
        assert s.game_config() is get_profile("beginner")

    def test_unknown_profile_falls_back(self, monkeypatch):
        monkeypatch.setenv("GAME_PROFILE", "grandmaster")
        assert Settings(_env_file=None).game_config().name == "standard"

    def test_field_overrides(self, monkeypatch):
        monkeypatch.setenv("GAME_PROFILE", "advanced")
        monkeypatch.setenv("INITIAL_BP", "50")
        monkeypatch.setenv("MAX_EFFECTIVE_BP", "12")
        monkeypatch.setenv("DEFENDER_WINS_TIES", "true")
        config = Settings(_env_file=None).game_config()
        assert config.name == "advanced"
        assert config.initial_bp == 50
        assert config.max_effective_bp == 12
        assert config.defender_wins_ties is True
        assert get_profile("advanced").initial_bp == 31

    def test_regeneration_overrides(self, monkeypatch):
        monkeypatch.setenv("BASE_TURN_REGENERATION", "3")
        monkeypatch.setenv("TURN_REGEN_CAP", "6")
        config = Settings(_env_file=None).game_config()
        assert config.regeneration.base_turn_regeneration == 3
        assert config.regeneration.turn_regen_cap == 6
        assert config.regeneration.rules == DEFAULT_CONFIG.regeneration.rules
        assert DEFAULT_CONFIG.regeneration.turn_regen_cap is None

    def test_invalid_number(self, monkeypatch):
        monkeypatch.setenv("INITIAL_BP", "lots")
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_env_file(self, tmp_path):
        env = tmp_path / ".env.gambit"
        env.write_text("GAME_PROFILE=risky\nTURN_REGEN_CAP=4\n")
        config = Settings(_env_file=env).game_config()
        assert config.name == "risky"
        assert config.regeneration.turn_regen_cap == 4
