"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv


@dataclass
class MinifluxConfig:
    """Upstream Miniflux settings."""
    base_url: str = ""
    token: Optional[str] = None
    timeout: float = 30.0


@dataclass
class ResolverConfig:
    """Fuzzy resolution settings."""
    default_limit: int = 10
    max_limit: int = 25


@dataclass
class Settings:
    """Application settings."""

    miniflux: MinifluxConfig = field(default_factory=MinifluxConfig)
    resolver: ResolverConfig = field(default_factory=ResolverConfig)

    @property
    def base_url(self) -> str:
        return self.miniflux.base_url

    @property
    def token(self) -> Optional[str]:
        return self.miniflux.token


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment.

    Environment variables (MINIFLUX_BASE_URL, MINIFLUX_TOKEN) take precedence
    over the YAML file. A .env file in the working directory is loaded first.
    """
    load_dotenv()
    config = load_config(config_path)

    settings = Settings()

    if "miniflux" in config:
        for key, value in config["miniflux"].items():
            setattr(settings.miniflux, key, value)

    if "resolver" in config:
        for key, value in config["resolver"].items():
            setattr(settings.resolver, key, value)

    base_url = os.getenv("MINIFLUX_BASE_URL")
    if base_url:
        settings.miniflux.base_url = base_url

    token = os.getenv("MINIFLUX_TOKEN")
    if token:
        settings.miniflux.token = token

    settings.miniflux.base_url = (settings.miniflux.base_url or "").rstrip("/")

    return settings
