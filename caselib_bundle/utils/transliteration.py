"""
Romanian diacritic handling for PDF text.

The embedded faces are drawn through a single-byte encoding path that has no
glyphs for the Romanian comma-below letters, so every string headed for a
canvas passes through :func:`normalize` first.
"""

from __future__ import annotations

import re

# Comma-below forms are the correct Romanian letters; the cedilla forms
# (U+015E/U+015F, U+0162/U+0163) still show up in text pasted from older
# documents.
TRANSLITERATION_MAP = {
    "ă": "a",
    "â": "a",
    "î": "i",
    "ș": "s",
    "ş": "s",
    "ț": "t",
    "ţ": "t",
    "Ă": "A",
    "Â": "A",
    "Î": "I",
    "Ș": "S",
    "Ş": "S",
    "Ț": "T",
    "Ţ": "T",
}

_ROMANIAN_PATTERN = re.compile("[" + "".join(TRANSLITERATION_MAP) + "]")
_TRANSLATION_TABLE = str.maketrans(TRANSLITERATION_MAP)


def has_romanian_characters(text: str) -> bool:
    """Return True if ``text`` contains any letter the PDF fonts cannot draw."""
    if not text:
        return False
    return _ROMANIAN_PATTERN.search(text) is not None


def transliterate_romanian(text: str) -> str:
    """Replace Romanian diacritics with their ASCII base letters."""
    return text.translate(_TRANSLATION_TABLE)


def normalize(text: str | None, transliterate: bool = True) -> str:
    """
    Prepare text for drawing on a PDF canvas.

    Args:
        text: Source text, ``None`` is treated as empty
        transliterate: When False the text is returned unchanged

    Returns:
        Text safe for the embedded fonts. The mapping is one-for-one, so the
        function is idempotent.
    """
    if not text:
        return ""
    if transliterate and has_romanian_characters(text):
        return transliterate_romanian(text)
    return text
