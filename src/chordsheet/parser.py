"""
Song text parser - Converts chord-annotated lyrics into a Document

Handles the three authoring conventions:

    INLINE   #mic#
             [C]Deus está a[Am]qui

    ABOVE    [C]   [Am]   [F]
             Deus está aqui

    MIXED    Intro:
             [Am] [F] [C] [G]

             #mic#
             [C]Santo

Parsing never fails: text that does not look like a chord stays as text and
is reported through the optional on_diagnostic callback.
"""

import logging
from typing import Callable, List, Optional

from .config import ChordSheetConfig, DEFAULT_CONFIG
from .detector import FormatDetector
from .grammar import BRACKET_PATTERN, ChordDetector, try_parse_chord
from .models import (
    AnnotatedLine,
    ChordFormat,
    ChordToken,
    Document,
    LineKind,
    Section,
    SectionKind,
    ValidationIssue,
)
from .sections import Block, SectionSplitter


logger = logging.getLogger(__name__)

DiagnosticCallback = Callable[[ValidationIssue], None]


def _report_unrecognized(text: str, line_number: Optional[int], column: int,
                         on_diagnostic: Optional[DiagnosticCallback]) -> None:
    location = f"line {line_number}, column {column}" if line_number is not None else f"column {column}"
    logger.debug("Unrecognized chord %r at %s", text, location)
    if on_diagnostic is not None:
        on_diagnostic(ValidationIssue('warning', f"Unrecognized chord '{text}' kept as text", location))


class InlineParser:
    """Parses lines where chords are embedded in brackets: [C]Deus"""

    @staticmethod
    def parse_line(line: str, config: ChordSheetConfig = DEFAULT_CONFIG,
                   line_number: Optional[int] = None,
                   on_diagnostic: Optional[DiagnosticCallback] = None) -> AnnotatedLine:
        if not line.strip():
            return AnnotatedLine(kind=LineKind.BLANK, lyrics=line)
        if FormatDetector.is_marker_line(line, config):
            return AnnotatedLine(kind=LineKind.MARKER, lyrics=line)

        # A line of bracketed chords only is an instrumental line
        tokens = ChordDetector.scan_chord_line(line, allow_bare=False)
        if tokens:
            return AnnotatedLine(kind=LineKind.CHORDS, chords=tokens, chords_line=line)

        chords = []
        pieces = []
        length = 0
        pos = 0
        for match in BRACKET_PATTERN.finditer(line):
            chord = try_parse_chord(match.group(1))
            if chord is None:
                _report_unrecognized(match.group(0), line_number, match.start(), on_diagnostic)
                continue

            # Anchor is the chord's index in the bracket-free lyric text
            piece = line[pos:match.start()]
            pieces.append(piece)
            length += len(piece)
            chords.append(ChordToken(chord=chord, anchor=length, width=len(match.group(0))))
            pos = match.end()

        pieces.append(line[pos:])
        return AnnotatedLine(kind=LineKind.LYRIC, lyrics=''.join(pieces), chords=chords)

    @staticmethod
    def parse_lines(lines: List[str], config: ChordSheetConfig = DEFAULT_CONFIG,
                    first_line_number: int = 1,
                    on_diagnostic: Optional[DiagnosticCallback] = None) -> List[AnnotatedLine]:
        return [
            InlineParser.parse_line(line, config, first_line_number + offset, on_diagnostic)
            for offset, line in enumerate(lines)
        ]

    @staticmethod
    def parse_inline(raw: str, config: ChordSheetConfig = DEFAULT_CONFIG,
                     on_diagnostic: Optional[DiagnosticCallback] = None) -> List[AnnotatedLine]:
        """
        Parse inline-annotated text line by line.

        The #mic# marker line comes back as a MARKER line carrying no lyric
        text, so writing the lines out again restores it.
        """
        return InlineParser.parse_lines(raw.split('\n'), config, 1, on_diagnostic)


class AboveParser:
    """Parses chord lines written above their lyric lines"""

    @staticmethod
    def parse_lines(lines: List[str], config: ChordSheetConfig = DEFAULT_CONFIG,
                    first_line_number: int = 1,
                    on_diagnostic: Optional[DiagnosticCallback] = None) -> List[AnnotatedLine]:
        """
        Pair each chord-only line with the lyric line below it.

        A chord line with no lyric line below (end of text, blank line,
        another chord line) becomes a lyric-less CHORDS line. Chord anchors
        are columns of the chord line.
        """
        result = []
        i = 0
        while i < len(lines):
            line = lines[i]
            tokens = ChordDetector.scan_chord_line(line)

            if tokens:
                following = lines[i + 1] if i + 1 < len(lines) else None
                if (following is not None
                        and FormatDetector.is_lyric_line(following, config)
                        and not ChordDetector.has_bracketed_chord(following)):
                    result.append(AnnotatedLine(
                        kind=LineKind.LYRIC,
                        lyrics=following,
                        chords=tokens,
                        chords_line=line,
                    ))
                    i += 2
                    continue

                result.append(AnnotatedLine(kind=LineKind.CHORDS, chords=tokens, chords_line=line))
                i += 1
                continue

            # Lyric lines may still carry inline chords
            result.append(InlineParser.parse_line(line, config, first_line_number + i, on_diagnostic))
            i += 1

        return result

    @staticmethod
    def parse_above(raw: str, config: ChordSheetConfig = DEFAULT_CONFIG,
                    on_diagnostic: Optional[DiagnosticCallback] = None) -> List[AnnotatedLine]:
        return AboveParser.parse_lines(raw.split('\n'), config, 1, on_diagnostic)


class MixedParser:
    """Parses labelled instrumental sections combined with inline lyrics"""

    @staticmethod
    def split_sections(raw: str, config: ChordSheetConfig = DEFAULT_CONFIG,
                       on_diagnostic: Optional[DiagnosticCallback] = None) -> List[Section]:
        """Instrumental sections keep column-anchored chords; lyric sections are parsed inline"""
        return DocumentParser.build_sections(raw, ChordFormat.MIXED, config, on_diagnostic)


class DocumentParser:
    """Builds a Document for any format"""

    @staticmethod
    def build_sections(raw: str, chord_format: ChordFormat,
                       config: ChordSheetConfig = DEFAULT_CONFIG,
                       on_diagnostic: Optional[DiagnosticCallback] = None) -> List[Section]:
        sections = []
        line_number = 1
        for block in SectionSplitter.split_blocks(raw, config):
            if block.heading is not None:
                line_number += 1
            lines = DocumentParser._parse_block(block, chord_format, config, line_number, on_diagnostic)
            sections.append(Section(
                kind=block.kind if chord_format != ChordFormat.PLAIN else SectionKind.LYRIC,
                lines=lines,
                label=block.label,
                heading=block.heading,
            ))
            line_number += len(block.lines)
        return sections

    @staticmethod
    def _parse_block(block: Block, chord_format: ChordFormat, config: ChordSheetConfig,
                     first_line_number: int,
                     on_diagnostic: Optional[DiagnosticCallback]) -> List[AnnotatedLine]:
        if chord_format == ChordFormat.PLAIN:
            return [
                AnnotatedLine(kind=LineKind.LYRIC if line.strip() else LineKind.BLANK, lyrics=line)
                for line in block.lines
            ]

        if block.kind == SectionKind.INSTRUMENTAL or chord_format == ChordFormat.ABOVE:
            return AboveParser.parse_lines(block.lines, config, first_line_number, on_diagnostic)

        return InlineParser.parse_lines(block.lines, config, first_line_number, on_diagnostic)

    @staticmethod
    def parse(raw: str, chord_format: Optional[ChordFormat] = None,
              config: ChordSheetConfig = DEFAULT_CONFIG,
              on_diagnostic: Optional[DiagnosticCallback] = None) -> Document:
        """Detect the format (unless given) and parse the whole text"""
        if not isinstance(raw, str):
            raw = ''
        if chord_format is None:
            chord_format = FormatDetector.detect_format(raw, config)

        return Document(
            format=chord_format,
            sections=DocumentParser.build_sections(raw, chord_format, config, on_diagnostic),
        )


def parse_inline(raw: str, config: ChordSheetConfig = DEFAULT_CONFIG,
                 on_diagnostic: Optional[DiagnosticCallback] = None) -> List[AnnotatedLine]:
    return InlineParser.parse_inline(raw, config, on_diagnostic)


def parse_above(raw: str, config: ChordSheetConfig = DEFAULT_CONFIG,
                on_diagnostic: Optional[DiagnosticCallback] = None) -> List[AnnotatedLine]:
    return AboveParser.parse_above(raw, config, on_diagnostic)


def split_sections(raw: str, config: ChordSheetConfig = DEFAULT_CONFIG,
                   on_diagnostic: Optional[DiagnosticCallback] = None) -> List[Section]:
    return MixedParser.split_sections(raw, config, on_diagnostic)


def parse_document(raw: str, chord_format: Optional[ChordFormat] = None,
                   config: ChordSheetConfig = DEFAULT_CONFIG,
                   on_diagnostic: Optional[DiagnosticCallback] = None) -> Document:
    return DocumentParser.parse(raw, chord_format, config, on_diagnostic)
