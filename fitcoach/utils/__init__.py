"""Utility helpers package."""

from fitcoach.utils.cache import CacheBackend

__all__ = ["CacheBackend"]
