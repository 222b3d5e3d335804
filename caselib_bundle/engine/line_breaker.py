"""Greedy word wrapping against measured string widths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List

from reportlab.pdfbase import pdfmetrics

WidthFunction = Callable[[str], float]


@dataclass(slots=True)
class WrappedText:
    lines: List[str]
    line_height: float

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def height(self) -> float:
        return self.line_count * self.line_height


def string_width_for(font_name: str, font_size: float) -> WidthFunction:
    def measure(text: str) -> float:
        return pdfmetrics.stringWidth(text, font_name, font_size)

    return measure


def wrap_words(text: str, max_width: float, measure: WidthFunction) -> List[str]:
    """
    Pack words into lines no wider than ``max_width``.

    A single word wider than the limit is split between characters so that
    every returned line fits. Empty input yields one empty line.
    """
    words = text.split()
    if not words:
        return [""]

    lines: List[str] = []
    current = ""
    for word in words:
        candidate = f"{current} {word}" if current else word
        if measure(candidate) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
            current = ""
        if measure(word) <= max_width:
            current = word
            continue
        pieces = _split_word(word, max_width, measure)
        lines.extend(pieces[:-1])
        current = pieces[-1]

    if current:
        lines.append(current)
    return lines


def _split_word(word: str, max_width: float, measure: WidthFunction) -> List[str]:
    pieces: List[str] = []
    chunk = ""
    for char in word:
        if chunk and measure(chunk + char) > max_width:
            pieces.append(chunk)
            chunk = char
        else:
            chunk += char
    pieces.append(chunk)
    return pieces


def wrap_text(text: str, max_width: float, font_name: str, font_size: float,
              leading: float = 1.2) -> WrappedText:
    lines = wrap_words(text, max_width, string_width_for(font_name, font_size))
    return WrappedText(lines=lines, line_height=font_size * leading)
