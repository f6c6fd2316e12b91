"""Tests for configuration loading."""

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import pytest

from audience_tagger.config import Settings, get_settings
from audience_tagger.core import UnknownProviderError


def test_defaults() -> None:
    settings = Settings()
    
    assert settings.provider.name == "gemini"
    assert settings.provider.endpoint == "http://localhost:8080"
    assert settings.provider.model_name == "gemini-pro"
    assert settings.tagging.enable_auto_tagging is True
    assert settings.tagging.process_on_library_scan is True
    assert settings.tagging.overwrite_existing_tags is False
    assert settings.processing_delay == 1.0


def test_get_settings_from_yaml_and_env() -> None:
    with TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text(
            "provider:\n"
            "  name: localai\n"
            "  endpoint: http://ollama:11434\n"
            "  model_name: llama3\n"
            "tagging:\n"
            "  overwrite_existing_tags: true\n"
            "  processing_delay: 0.5\n"
            "library:\n"
            "  path: media/library.yaml\n",
            encoding="utf-8",
        )
        
        with patch.dict("os.environ", {"AUDIENCE_TAGGER_API_KEY": "secret"}):
            settings = get_settings(config_path)
    
    assert settings.api_key == "secret"
    assert settings.provider.name == "localai"
    assert settings.tagging.overwrite_existing_tags is True
    assert settings.processing_delay == 0.5
    assert settings.library_path == Path("media/library.yaml")


def test_get_settings_missing_file_uses_defaults() -> None:
    with patch.dict("os.environ", {}, clear=True):
        settings = get_settings(Path("/nonexistent/config.yaml"))
    
    assert settings.api_key == ""
    assert settings.provider.name == "gemini"


def test_get_settings_rejects_unknown_provider() -> None:
    with TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text("provider:\n  name: watson\n", encoding="utf-8")
        
        with pytest.raises(UnknownProviderError):
            get_settings(config_path)


def test_snapshot_is_independent_of_later_changes() -> None:
    settings = Settings(api_key="key")
    
    snapshot = settings.snapshot()
    settings.tagging.overwrite_existing_tags = True
    settings.provider.model_name = "gemini-1.5-pro"
    
    assert snapshot.overwrite_existing_tags is False
    assert snapshot.provider.model_name == "gemini-pro"
    assert snapshot.api_key == "key"


def test_snapshot_carries_processing_delay() -> None:
    settings = Settings(api_key="key")
    settings.tagging.processing_delay = 0.25
    
    snapshot = settings.snapshot()
    settings.tagging.processing_delay = 5.0
    
    assert snapshot.processing_delay == 0.25
