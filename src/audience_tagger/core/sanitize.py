"""Helpers for logging untrusted metadata."""

from typing import Optional


def sanitize_for_log(value: Optional[str]) -> str:
    """Strip line breaks so logged values cannot forge log lines."""
    if not value:
        return ""
    return value.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")
