"""
Chord extraction

Lists the distinct chords of a song in the order they first appear, as
written in the source (no transposition, no re-spelling).
"""

from typing import Iterable, List

from .grammar import ChordDetector
from .models import ChordToken, Document


def _unique_names(tokens: Iterable[ChordToken]) -> List[str]:
    return list(dict.fromkeys(token.chord.raw_text for token in tokens))


def extract_chords(raw: str) -> List[str]:
    """
    Distinct chord spellings of a raw text, first occurrence first.

    Works on any format: chord-only lines contribute their bracketed or bare
    chords, other lines their recognised [chord] spans.
    """
    if not isinstance(raw, str):
        return []

    tokens = []
    for line in raw.split('\n'):
        line_tokens = ChordDetector.scan_chord_line(line)
        if line_tokens is None:
            line_tokens = ChordDetector.find_bracketed_chords(line)
        tokens.extend(line_tokens)
    return _unique_names(tokens)


def extract_document_chords(doc: Document) -> List[str]:
    """Distinct chord spellings of a parsed Document"""
    return _unique_names(doc.chords())
