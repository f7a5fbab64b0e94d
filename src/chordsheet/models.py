"""
Data structures for annotated song text

A raw song text is parsed into a Document made of Sections, each holding
AnnotatedLines. Chords are kept as ChordTokens anchored either to a column
of a chord line (chords written above the lyrics) or to a character index
of the lyric line (chords written inline).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple


class ChordFormat(Enum):
    """Authoring convention of a song text"""
    INLINE = 'inline'
    ABOVE = 'above'
    MIXED = 'mixed'
    PLAIN = 'plain'  # No chords found, rendered unchanged


class SectionKind(Enum):
    LYRIC = 'lyric'
    INSTRUMENTAL = 'instrumental'


class LineKind(Enum):
    LYRIC = 'lyric'      # Lyric text, possibly with chords
    CHORDS = 'chords'    # Chord-only line with no lyric below it
    MARKER = 'marker'    # The inline marker line (#mic#)
    BLANK = 'blank'


@dataclass(frozen=True)
class ChordSymbol:
    """A recognised chord: root and optional bass as pitch classes (0 = C)"""
    raw_text: str
    root: int
    quality: str = ''
    bass: Optional[int] = None

    def __str__(self) -> str:
        return self.raw_text


@dataclass(frozen=True)
class ChordToken:
    """A chord and where it sits in the source line"""
    chord: ChordSymbol
    anchor: int
    width: int = 0  # Length of the source span, e.g. 4 for "[Am]"
    bracketed: bool = True

    @property
    def markup(self) -> str:
        """Source notation for the chord"""
        if self.bracketed:
            return f"[{self.chord.raw_text}]"
        return self.chord.raw_text


@dataclass
class AnnotatedLine:
    """
    One line of a song.

    When chords_line is set the chords were written on their own line and
    anchors are columns of chords_line. Otherwise anchors are indexes into
    lyrics.
    """
    kind: LineKind
    lyrics: Optional[str] = None
    chords: List[ChordToken] = field(default_factory=list)
    chords_line: Optional[str] = None

    @property
    def is_column_anchored(self) -> bool:
        return self.chords_line is not None

    def runs(self) -> Iterator[Tuple[str, List[ChordToken]]]:
        """Yield (text run, chords preceding it) pairs for inline-anchored lines"""
        text = self.lyrics or ''
        if self.is_column_anchored or not self.chords:
            yield text, list(self.chords)
            return

        ordered = sorted(self.chords, key=lambda token: token.anchor)
        if ordered[0].anchor > 0:
            yield text[:ordered[0].anchor], []

        i = 0
        while i < len(ordered):
            anchor = ordered[i].anchor
            group = []
            while i < len(ordered) and ordered[i].anchor == anchor:
                group.append(ordered[i])
                i += 1
            end = ordered[i].anchor if i < len(ordered) else len(text)
            yield text[anchor:end], group


@dataclass
class Section:
    """A block of the song, optionally introduced by a heading like 'Intro:'"""
    kind: SectionKind
    lines: List[AnnotatedLine] = field(default_factory=list)
    label: Optional[str] = None    # Normalised label, e.g. 'Intro'
    heading: Optional[str] = None  # Verbatim heading line, e.g. 'Intro:'

    @property
    def content_lines(self) -> List[AnnotatedLine]:
        return [line for line in self.lines if line.kind != LineKind.BLANK]


@dataclass
class Document:
    """Parsed song text"""
    format: ChordFormat
    sections: List[Section] = field(default_factory=list)

    def lines(self) -> Iterator[AnnotatedLine]:
        for section in self.sections:
            yield from section.lines

    def chords(self) -> List[ChordToken]:
        """All chord tokens in reading order"""
        tokens = []
        for line in self.lines():
            tokens.extend(sorted(line.chords, key=lambda token: token.anchor))
        return tokens

    def lyrics(self) -> str:
        """The song text with every chord annotation removed"""
        lyric_lines = []
        for line in self.lines():
            if line.kind in (LineKind.LYRIC, LineKind.BLANK):
                lyric_lines.append(line.lyrics or '')
        return "\n".join(lyric_lines)


@dataclass
class ValidationIssue:
    """A problem found while parsing or validating"""
    severity: str  # 'error', 'warning', 'info'
    message: str
    location: Optional[str] = None  # e.g., "line 3, column 12"
