"""Audience tagging for media libraries using hosted language models."""

__version__ = "0.1.0"
