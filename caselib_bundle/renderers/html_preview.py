"""
HTML previews of the cover and opis pages.

The markup uses the same margins, theme colors and titles as the PDF
renderers so a preview matches the exported page.
"""

from __future__ import annotations

from html import escape
from typing import Sequence

from ..models.formatting import DEFAULT_HEADING_FONT_SIZE, FormattingOptions
from ..models.theme import resolve_theme
from .opis_renderer import HEADER_LABELS, TITLE_SCALE, OpisRow, opis_title


def _page_rule(formatting: FormattingOptions) -> str:
    return (
        "@page { "
        f"margin: {formatting.margin_top}mm {formatting.margin_right}mm "
        f"{formatting.margin_bottom}mm {formatting.margin_left}mm; size: A4; }}"
    )


def _page_number_block(formatting: FormattingOptions, color: str) -> tuple:
    if not formatting.show_page_numbers:
        return "", ""
    css = (
        ".page-number { position: fixed; bottom: 20mm; width: 100%; text-align: center; "
        f"font-size: 10pt; color: {color}; }}"
    )
    return css, '<div class="page-number">1</div>'


def cover_page_html(annex_number: int, title: str, formatting: FormattingOptions) -> str:
    theme = resolve_theme(formatting.theme)
    heading = formatting.heading_text(annex_number)
    heading_size = formatting.heading_font_size or DEFAULT_HEADING_FONT_SIZE
    page_css, page_div = _page_number_block(formatting, theme.secondary)
    weight = "bold" if formatting.bold else "normal"

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    {_page_rule(formatting)}
    body {{
      font-family: {escape(formatting.font_family)}, Arial, sans-serif;
      background: {theme.background};
      margin: 0; padding: 0; height: 100vh;
      display: flex; flex-direction: column; justify-content: center; align-items: center;
    }}
    .heading {{ font-size: {heading_size}pt; font-weight: bold; margin-bottom: 40px; color: {theme.primary}; }}
    .title {{
      font-size: {formatting.font_size}pt; font-weight: {weight}; color: {theme.text};
      max-width: 80%; word-wrap: break-word; text-align: center;
    }}
    {page_css}
  </style>
</head>
<body>
  <div class="heading">{escape(heading)}</div>
  <div class="title">{escape(title)}</div>
  {page_div}
</body>
</html>
"""


def opis_html(rows: Sequence[OpisRow], formatting: FormattingOptions) -> str:
    theme = resolve_theme(formatting.theme)
    page_css, page_div = _page_number_block(formatting, theme.secondary)
    weight = "bold" if formatting.bold else "normal"
    title = opis_title(formatting)

    table_rows = "\n".join(
        "      <tr>"
        f'<td class="number-cell">Anexa nr. {row.number}</td>'
        f'<td class="description-cell">{escape(row.title)}</td>'
        "</tr>"
        for row in rows
    )

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    {_page_rule(formatting)}
    body {{
      font-family: {escape(formatting.font_family)}, Arial, sans-serif;
      font-size: {formatting.font_size}pt; font-weight: {weight};
      background: {theme.background}; color: {theme.text}; margin: 0; padding: 20px 0;
    }}
    .title {{
      text-align: center; font-size: {formatting.font_size * TITLE_SCALE}pt; font-weight: bold;
      margin-bottom: 30px; color: {theme.primary};
    }}
    table {{ width: 90%; margin: 20px auto 0; border-collapse: collapse; }}
    th, td {{
      border: 1px solid {theme.secondary}; padding: 6px 8px;
      text-align: {formatting.alignment}; vertical-align: top;
    }}
    th {{ background-color: {theme.accent}; font-weight: bold; }}
    .number-cell {{ width: 33%; text-align: center; }}
    .description-cell {{ width: 67%; }}
    {page_css}
  </style>
</head>
<body>
  <div class="title">{escape(title)}</div>
  <table>
    <thead>
      <tr><th>{HEADER_LABELS[0]}</th><th>{HEADER_LABELS[1]}</th></tr>
    </thead>
    <tbody>
{table_rows}
    </tbody>
  </table>
  {page_div}
</body>
</html>
"""
