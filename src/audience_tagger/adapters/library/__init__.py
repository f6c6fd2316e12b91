"""Media library adapters."""

from audience_tagger.adapters.library.yaml_library import YamlLibrary

__all__ = ["YamlLibrary"]
