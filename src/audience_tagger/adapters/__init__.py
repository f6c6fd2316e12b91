"""Adapters for remote backends and media libraries."""
