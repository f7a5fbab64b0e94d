"""
Entry points used by the song pages

Every function here takes text and returns a fresh result. Nothing is cached
or shared between calls, so callers may run them concurrently and own any
memoisation themselves.
"""

from typing import Optional, Union

from .config import ChordSheetConfig, DEFAULT_CONFIG
from .models import ChordFormat
from .parser import DiagnosticCallback, parse_document
from .renderer import process_chord_html, render


FormatArg = Union[ChordFormat, str, None]


def coerce_format(chord_format: FormatArg) -> Optional[ChordFormat]:
    """Accept a ChordFormat, its string value ('inline', 'above', ...) or None"""
    if chord_format is None or isinstance(chord_format, ChordFormat):
        return chord_format
    try:
        return ChordFormat(str(chord_format).lower())
    except ValueError:
        choices = ', '.join(f.value for f in ChordFormat)
        raise ValueError(f"Unknown chord format {chord_format!r} (expected one of: {choices})")


def process_chords(raw: str, chord_format: FormatArg = None,
                   config: ChordSheetConfig = DEFAULT_CONFIG,
                   on_diagnostic: Optional[DiagnosticCallback] = None) -> str:
    """
    Full pipeline to HTML.

    The format is detected when not given. Labelled instrumental sections
    are recognised whatever the format.
    """
    doc = parse_document(raw, coerce_format(chord_format), config, on_diagnostic)
    return render(doc, config)


def process_mixed_chords(raw: str, config: ChordSheetConfig = DEFAULT_CONFIG,
                         on_diagnostic: Optional[DiagnosticCallback] = None) -> str:
    """Full pipeline to HTML for text with instrumental sections and inline chords"""
    doc = parse_document(raw, ChordFormat.MIXED, config, on_diagnostic)
    return render(doc, config)


__all__ = [
    'coerce_format',
    'process_chords',
    'process_mixed_chords',
    'process_chord_html',
]
