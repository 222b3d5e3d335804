"""Shared helpers: text normalization, units, colors and logging."""

from .transliteration import has_romanian_characters, normalize, transliterate_romanian

__all__ = ["normalize", "has_romanian_characters", "transliterate_romanian"]
