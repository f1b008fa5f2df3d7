"""Configuration management."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from weekly_digest.adapters.github.graphql_client import GITHUB_GRAPHQL_URL
from weekly_digest.adapters.markdown.weekly_generator import DEFAULT_TITLE_PREFIX


@dataclass
class GitHubConfig:
    """Destination repository settings."""
    owner: str = ""
    repo: str = ""
    category: str = "General"
    api_url: str = GITHUB_GRAPHQL_URL
    timeout: float = 30.0


@dataclass
class WeeklyConfig:
    """Weekly pipeline settings."""
    history_limit: int = 2
    period_days: int = 7
    title_prefix: str = DEFAULT_TITLE_PREFIX
    discussion_scan: int = 50


@dataclass
class PathsConfig:
    """Path settings."""
    changelog_dir: Path = Path("data/changelogs/weekly")


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"


@dataclass
class Settings:
    """Application settings."""

    # Secrets (from environment only)
    github_token: Optional[str] = None
    mention_user: Optional[str] = None

    # Config sections
    github: GitHubConfig = field(default_factory=GitHubConfig)
    weekly: WeeklyConfig = field(default_factory=WeeklyConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def changelog_dir(self) -> Path:
        return self.paths.changelog_dir

    @property
    def history_limit(self) -> int:
        return self.weekly.history_limit


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(
        github_token=os.getenv("GITHUB_TOKEN") or None,
        mention_user=os.getenv("MENTION_USER") or None,
    )

    if "github" in config:
        for key, value in config["github"].items():
            setattr(settings.github, key, value)

    if "weekly" in config:
        for key, value in config["weekly"].items():
            setattr(settings.weekly, key, value)

    if "paths" in config:
        for key, value in config["paths"].items():
            setattr(settings.paths, key, Path(value))

    if "logging" in config:
        for key, value in config["logging"].items():
            setattr(settings.logging, key, value)

    return settings


def setup_logging(settings: Settings) -> None:
    """Configure root logging for CLI runs."""
    level = getattr(logging, str(settings.logging.level).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
