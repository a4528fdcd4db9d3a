"""Configuration loading and validation."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

DEFAULT_IPFS_GATEWAY = "https://ipfs.io/ipfs/"


class YAMLConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from a YAML configuration file."""

    def __init__(self, settings_cls: type[BaseSettings], config_path: Optional[Path]):
        super().__init__(settings_cls)
        self.config_path = config_path

    def get_field_value(self, field, field_name):  # pragma: no cover
        return None, field_name, False

    def __call__(self) -> Dict[str, Any]:
        if self.config_path is None or not self.config_path.exists():
            return {}
        data = yaml.safe_load(self.config_path.read_text())
        if not isinstance(data, dict):
            return {}
        return data


class AppSettings(BaseSettings):
    """Application configuration resolved from CLI/env/YAML."""

    model_config = SettingsConfigDict(env_prefix="JETTONMETA_", env_file=".env", extra="ignore")

    config_path: Optional[Path] = Field(default=None, exclude=True)

    network: Literal["mainnet", "testnet"] = "mainnet"
    # lite-server global config; the public one for ``network`` is used when unset
    liteserver_config: Optional[Path] = None
    trust_level: int = Field(default=2, ge=0, le=2)
    http_timeout: float = Field(default=5.0, gt=0)
    ipfs_gateway: str = DEFAULT_IPFS_GATEWAY
    content_ttl: float = Field(default=3600.0, gt=0)
    cache_default_ttl: float = Field(default=300.0, gt=0)
    cache_cleanup_interval: Optional[float] = Field(default=600.0, gt=0)
    log_level: str = "WARNING"

    @field_validator("ipfs_gateway")
    @classmethod
    def _gateway_trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else f"{value}/"

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # ``init_settings`` exposes ``init_kwargs`` attribute with the raw values passed
        init_kwargs = getattr(init_settings, "init_kwargs", {})  # type: ignore[attr-defined]
        config_path = init_kwargs.get("config_path")
        yaml_source = YAMLConfigSettingsSource(settings_cls, config_path)
        # Precedence: CLI (init) > environment > .env > YAML > file secrets
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_source,
            file_secret_settings,
        )


def load_settings(config_path: Optional[Path] = None, overrides: Optional[Dict[str, Any]] = None) -> AppSettings:
    overrides = overrides or {}
    if config_path is not None:
        overrides.setdefault("config_path", config_path)
    return AppSettings(**overrides)
