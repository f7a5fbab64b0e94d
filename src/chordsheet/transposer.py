"""
Chord transposition

Shifts every chord of a song by a number of semitones. Roots and bass notes
are re-spelled from the canonical sharp table (C, C#, D, ... B); the rest of
the chord and all lyric text are left untouched.
"""

from dataclasses import replace
from typing import List, Optional, Tuple

from .config import ChordSheetConfig, DEFAULT_CONFIG
from .grammar import spell_pitch, try_parse_chord
from .models import AnnotatedLine, ChordSymbol, Document, Section
from .parser import parse_document
from .writer import write_text


# Target key selector: (label, semitone offset). Offset 0 appears once.
KEY_OPTIONS: List[Tuple[str, int]] = [
    ('Original', 0),
    ('C# / Db', 1),
    ('D', 2),
    ('D# / Eb', 3),
    ('E', 4),
    ('F', 5),
    ('F# / Gb', 6),
    ('G', 7),
    ('G# / Ab', 8),
    ('A', 9),
    ('A# / Bb', 10),
    ('B', 11),
]


def normalize_delta(delta: int) -> int:
    return ((delta % 12) + 12) % 12


def transpose_chord_symbol(symbol: ChordSymbol, delta: int) -> ChordSymbol:
    """Shift root and bass by delta semitones; quality is copied verbatim"""
    shift = normalize_delta(delta)
    if shift == 0:
        return symbol

    root = (symbol.root + shift) % 12
    bass = None if symbol.bass is None else (symbol.bass + shift) % 12

    raw_text = spell_pitch(root) + symbol.quality
    if bass is not None:
        raw_text += '/' + spell_pitch(bass)

    return ChordSymbol(raw_text=raw_text, root=root, quality=symbol.quality, bass=bass)


def transpose_chord(name: str, delta: int) -> str:
    """Transpose a chord name; anything that is not a chord comes back unchanged"""
    symbol = try_parse_chord(name)
    if symbol is None:
        return name
    return transpose_chord_symbol(symbol, delta).raw_text


def _transpose_line(line: AnnotatedLine, delta: int) -> AnnotatedLine:
    return replace(line, chords=[
        replace(token, chord=transpose_chord_symbol(token.chord, delta))
        for token in line.chords
    ])


def transpose(doc: Document, delta: int) -> Document:
    """Return a new Document with every chord shifted by delta semitones"""
    return Document(
        format=doc.format,
        sections=[
            Section(
                kind=section.kind,
                lines=[_transpose_line(line, delta) for line in section.lines],
                label=section.label,
                heading=section.heading,
            )
            for section in doc.sections
        ],
    )


def transpose_text(raw: str, delta: int, config: ChordSheetConfig = DEFAULT_CONFIG) -> str:
    """
    Transpose annotated text, keeping its notation.

    The result is text in the same format as the input, not HTML. A delta
    that is a multiple of 12 returns the input as is.
    """
    if not isinstance(raw, str):
        return ''
    if normalize_delta(delta) == 0:
        return raw

    doc = parse_document(raw, config=config)
    return write_text(transpose(doc, delta))


def semitones_between(from_key: str, to_key: str) -> Optional[int]:
    """Offset (0-11) taking from_key to to_key; None if either is not a key"""
    source = try_parse_chord(from_key)
    target = try_parse_chord(to_key)
    if source is None or target is None:
        return None
    return normalize_delta(target.root - source.root)


def transpose_to_key(raw: str, from_key: str, to_key: str,
                     config: ChordSheetConfig = DEFAULT_CONFIG) -> str:
    delta = semitones_between(from_key, to_key)
    if delta is None:
        return raw
    return transpose_text(raw, delta, config)


def key_label(delta: int) -> str:
    """Selector label for an offset"""
    labels = {value: label for label, value in KEY_OPTIONS}
    return labels[normalize_delta(delta)]
