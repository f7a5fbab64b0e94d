"""
Chord grammar

Recognises chord symbols such as C, Am, F#m7, Bbmaj7, Dsus4, G/B and splits
them into root, quality and bass. Anything else is left to the caller to
treat as plain text.
"""

import re
from typing import List, Optional

from .models import ChordSymbol, ChordToken


NOTE_VALUES = {'C': 0, 'D': 2, 'E': 4, 'F': 5, 'G': 7, 'A': 9, 'B': 11}
ACCIDENTAL_SHIFT = {'': 0, '#': 1, 'b': -1}

# Single source of truth for spelling a pitch class
SHARP_NAMES = ('C', 'C#', 'D', 'D#', 'E', 'F', 'F#', 'G', 'G#', 'A', 'A#', 'B')

# Quality tokens, longest first so the alternation is a longest match.
# Lowercase m is minor, uppercase M is major.
QUALITY_TOKENS = (
    r'maj', r'min', r'm', r'M',
    r'dim', r'aug',
    r'sus2', r'sus4', r'sus',
    r'add9', r'add11', r'add',
    r'\((?:add|sus)?[#b+-]?\d+(?:[,/][#b+-]?\d+)*\)',  # (9), (b13), (add9)
    r'[#b]\d+',  # Alterations like #9, b5
    r'\d+',
    r'\+', r'-', r'°', r'ø',
)

ROOT_PATTERN = re.compile(r'(?P<root>[A-G])(?P<accidental>[#b]?)')
QUALITY_TOKEN = re.compile('|'.join(QUALITY_TOKENS))
BASS_PATTERN = re.compile(r'/(?P<bass>[A-G])(?P<bass_accidental>[#b]?)')

# [anything] on a single line, no nested brackets
BRACKET_PATTERN = re.compile(r'\[([^\[\]\n]*)\]')

# Tokens of a chord-only line: bracketed groups or bare words
CHORD_LINE_TOKEN = re.compile(r'\[[^\[\]\n]*\]|[^\s\[\]]+')


def pitch_class(note: str, accidental: str = '') -> Optional[int]:
    """Map a note name like 'F' or 'F#' (or 'F', '#') to 0-11"""
    if len(note) == 2 and not accidental:
        note, accidental = note[0], note[1]
    if note not in NOTE_VALUES or accidental not in ACCIDENTAL_SHIFT:
        return None
    return (NOTE_VALUES[note] + ACCIDENTAL_SHIFT[accidental]) % 12


def spell_pitch(value: int) -> str:
    return SHARP_NAMES[value % 12]


def try_parse_chord(text: str) -> Optional[ChordSymbol]:
    """
    Parse a chord symbol.

    Returns None when text is not a chord; never raises.
    """
    if not isinstance(text, str):
        return None

    match = ROOT_PATTERN.match(text)
    if not match:
        return None
    root = pitch_class(match.group('root'), match.group('accidental'))

    quality_end = _scan_quality(text, match.end())
    quality = text[match.end():quality_end]

    bass = None
    if quality_end < len(text):
        bass_match = BASS_PATTERN.fullmatch(text, quality_end)
        if not bass_match:
            return None
        bass = pitch_class(bass_match.group('bass'), bass_match.group('bass_accidental'))

    return ChordSymbol(
        raw_text=text,
        root=root,
        quality=quality,
        bass=bass,
    )


def _scan_quality(text: str, pos: int) -> int:
    """
    End of the run of quality tokens starting at pos.

    Tokens are taken one at a time, first alternative that matches, with no
    backtracking between them; a digit run is always consumed whole.
    """
    while pos < len(text):
        token = QUALITY_TOKEN.match(text, pos)
        if not token or token.end() == pos:
            break
        pos = token.end()
    return pos


def is_chord(text: str) -> bool:
    return try_parse_chord(text) is not None


class ChordDetector:
    """Detects chord-only lines and extracts chords with their positions"""

    @staticmethod
    def scan_chord_line(line: str, allow_bare: bool = True) -> Optional[List[ChordToken]]:
        """
        Tokenise a chord-only line.

        Returns the chords with their column positions, or None when the line
        holds anything besides whitespace-separated chords. Bracketed chords
        may touch each other ("[C][Am]"); bare chords must be separated by
        whitespace.
        """
        if not line.strip():
            return None

        tokens = []
        pos = 0
        for match in CHORD_LINE_TOKEN.finditer(line):
            gap = line[pos:match.start()]
            if gap.strip():
                return None

            text = match.group(0)
            bracketed = text.startswith('[')
            if bracketed:
                chord = try_parse_chord(text[1:-1])
            else:
                # A bare chord glued to the previous token is not a chord line
                if not allow_bare or (tokens and not gap):
                    return None
                chord = try_parse_chord(text)

            if chord is None:
                return None

            tokens.append(ChordToken(
                chord=chord,
                anchor=match.start(),
                width=len(text),
                bracketed=bracketed,
            ))
            pos = match.end()

        if line[pos:].strip():
            return None
        return tokens or None

    @staticmethod
    def is_chord_line(line: str, allow_bare: bool = True) -> bool:
        """Determine if a line consists of chords only"""
        return ChordDetector.scan_chord_line(line, allow_bare) is not None

    @staticmethod
    def find_bracketed_chords(line: str) -> List[ChordToken]:
        """Recognised [chord] spans of a line, anchored at the '[' position"""
        tokens = []
        for match in BRACKET_PATTERN.finditer(line):
            chord = try_parse_chord(match.group(1))
            if chord is not None:
                tokens.append(ChordToken(
                    chord=chord,
                    anchor=match.start(),
                    width=len(match.group(0)),
                ))
        return tokens

    @staticmethod
    def has_bracketed_chord(line: str) -> bool:
        return bool(ChordDetector.find_bracketed_chords(line))
