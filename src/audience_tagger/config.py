"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from audience_tagger.core import AiProvider, ProviderConfig, TaggingConfig

API_KEY_ENV = "AUDIENCE_TAGGER_API_KEY"


@dataclass
class ProviderSettings:
    """AI provider settings."""
    name: str = AiProvider.GEMINI.value
    endpoint: str = "http://localhost:8080"
    model_name: str = "gemini-pro"


@dataclass
class TaggingSettings:
    """Tagging behaviour."""
    enable_auto_tagging: bool = True
    process_on_library_scan: bool = True
    overwrite_existing_tags: bool = False
    processing_delay: float = 1.0


@dataclass
class LibrarySettings:
    """Library location."""
    path: Path = Path("library.yaml")
    item_kind: str = "movie"


@dataclass
class Settings:
    """Application settings."""

    # From environment only
    api_key: str = ""

    provider: ProviderSettings = field(default_factory=ProviderSettings)
    tagging: TaggingSettings = field(default_factory=TaggingSettings)
    library: LibrarySettings = field(default_factory=LibrarySettings)

    @property
    def processing_delay(self) -> float:
        return self.tagging.processing_delay

    @property
    def library_path(self) -> Path:
        return self.library.path

    def provider_config(self) -> ProviderConfig:
        return ProviderConfig(
            provider=self.provider.name,
            api_key=self.api_key,
            endpoint=self.provider.endpoint,
            model_name=self.provider.model_name,
        )

    def snapshot(self) -> TaggingConfig:
        """Freeze the settings a tagging run works with."""
        return TaggingConfig(
            provider=self.provider_config(),
            enable_auto_tagging=self.tagging.enable_auto_tagging,
            process_on_library_scan=self.tagging.process_on_library_scan,
            overwrite_existing_tags=self.tagging.overwrite_existing_tags,
            processing_delay=self.tagging.processing_delay,
        )


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(api_key=os.getenv(API_KEY_ENV, ""))

    if "provider" in config:
        for key, value in config["provider"].items():
            setattr(settings.provider, key, value)
        # Validate early so a typo fails at startup
        AiProvider.parse(settings.provider.name)

    if "tagging" in config:
        for key, value in config["tagging"].items():
            setattr(settings.tagging, key, value)

    if "library" in config:
        for key, value in config["library"].items():
            setattr(settings.library, key, Path(value) if key == "path" else value)

    return settings
