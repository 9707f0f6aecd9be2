"""Utility functions for the dedup statistics tool."""

from .digest import split_digest

__all__ = ["split_digest"]
