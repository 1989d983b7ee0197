"""Environment-driven settings.

GAME_PROFILE picks one of the named profiles; the remaining variables
override single fields of it. Unset overrides leave the profile as is.
Values are read from the environment or a .env.gambit file.
"""

from dataclasses import replace

from pydantic_settings import BaseSettings, SettingsConfigDict

from gambit.profiles import DEFAULT_PROFILE, GameConfig, get_profile


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env.gambit", env_file_encoding="utf-8",
    )

    game_profile: str = DEFAULT_PROFILE

    # Per-field overrides
    initial_bp: int | None = None
    max_effective_bp: int | None = None
    base_turn_regeneration: int | None = None
    turn_regen_cap: int | None = None
    defender_wins_ties: bool | None = None

    def game_config(self) -> GameConfig:
        """The selected profile with overrides applied; profiles are not mutated."""
        config = get_profile(self.game_profile)

        regen_overrides = {}
        if self.base_turn_regeneration is not None:
            regen_overrides["base_turn_regeneration"] = self.base_turn_regeneration
        if self.turn_regen_cap is not None:
            regen_overrides["turn_regen_cap"] = self.turn_regen_cap

        overrides = {}
        if regen_overrides:
            overrides["regeneration"] = replace(config.regeneration, **regen_overrides)
        if self.initial_bp is not None:
            overrides["initial_bp"] = self.initial_bp
        if self.max_effective_bp is not None:
            overrides["max_effective_bp"] = self.max_effective_bp
        if self.defender_wins_ties is not None:
            overrides["defender_wins_ties"] = self.defender_wins_ties
        return replace(config, **overrides) if overrides else config
