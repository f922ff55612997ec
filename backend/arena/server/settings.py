"""Arena server configuration via environment variables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from shared.validators import StringListEnvSettingsSource, parse_string_list

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource


class ArenaServerSettings(BaseSettings):
    model_config = {"env_prefix": "ARENA_", "populate_by_name": True}

    host: str = "0.0.0.0"  # noqa: S104
    # PORT is the conventional variable set by hosting platforms; ARENA_PORT also works.
    port: int = Field(default=3000, ge=1, le=65535, validation_alias=AliasChoices("PORT", "ARENA_PORT"))
    log_dir: str | None = None
    static_dir: str = Field(default="public", min_length=1)
    cors_origins: list[str] = []

    tick_rate: int = Field(default=60, ge=0)
    speed_boost_seconds: float = Field(default=4.0, ge=0)
    overheal_seconds: float = Field(default=10.0, ge=0)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        return parse_string_list(v, allow_empty=True)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, StringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings
