from dataclasses import replace
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from revkids.domain import constants as c
from revkids.domain.scheduling.policy import DEFAULT_POLICY, SchedulerPolicy


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/revkids/config.toml",
        Path.home() / ".revkids.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for revkids.
    Supports loading from:
    1. Environment variables (REVKIDS_*)
    2. Config file (~/.config/revkids/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="REVKIDS_",
        extra="ignore",
    )

    # Paths
    store_path: Path = Field(
        default_factory=lambda: Path.home() / ".local/share/revkids/cards.json",
        validate_default=True,
    )

    # Scheduling
    max_cards_per_day: int = Field(default=c.DEFAULT_MAX_CARDS_PER_DAY, ge=1)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    verbose: int = 0

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # First existing file wins; init kwargs override env, env overrides TOML
        toml_file = next((f for f in config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("store_path", mode="before")
    @classmethod
    def resolve_store_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    def policy(self) -> SchedulerPolicy:
        """Scheduling tables with configured overrides applied."""
        return replace(DEFAULT_POLICY, max_cards_per_day=self.max_cards_per_day)

    def effective_log_level(self) -> str:
        if self.verbose >= 2:
            return "DEBUG"
        if self.verbose == 1:
            return "INFO"
        return self.log_level


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/revkids/config.toml (if exists)
    3. Environment variables (REVKIDS_*)
    4. cli_overrides (passed from Typer); None values are ignored
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
