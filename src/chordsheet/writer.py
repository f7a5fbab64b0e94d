"""
Text output - Serialises a Document back to its chord notation

write_text(parse_document(s)) == s for any s: gaps between chords on a chord
line, marker lines, headings and blank lines are copied verbatim, and only
the chord spans themselves are regenerated.
"""

import json
from dataclasses import asdict, replace
from enum import Enum
from typing import List

from .config import ChordSheetConfig, DEFAULT_CONFIG
from .models import AnnotatedLine, ChordToken, Document, LineKind
from .parser import parse_document


class TextWriter:
    """Generates annotated text from Document data"""

    @staticmethod
    def write_text(doc: Document) -> str:
        lines = []
        for section in doc.sections:
            if section.heading is not None:
                lines.append(section.heading)
            for line in section.lines:
                lines.extend(TextWriter.line_to_text(line))
        return "\n".join(lines)

    @staticmethod
    def line_to_text(line: AnnotatedLine) -> List[str]:
        if line.kind in (LineKind.BLANK, LineKind.MARKER):
            return [line.lyrics or '']

        if line.is_column_anchored:
            output = [TextWriter.chord_line_text(line.chords_line, line.chords)]
            if line.lyrics is not None:
                output.append(line.lyrics)
            return output

        return [TextWriter.insert_chords_inline(line.lyrics or '', line.chords)]

    @staticmethod
    def chord_line_text(chords_line: str, chords: List[ChordToken]) -> str:
        """Rebuild a chord line, replacing only the chord spans"""
        parts = []
        pos = 0
        for token in sorted(chords, key=lambda t: t.anchor):
            parts.append(chords_line[pos:token.anchor])
            parts.append(token.markup)
            pos = token.anchor + token.width
        parts.append(chords_line[pos:])
        return ''.join(parts)

    @staticmethod
    def insert_chords_inline(lyrics: str, chords: List[ChordToken]) -> str:
        """Insert chord markers at their positions in a lyric line"""
        if not chords:
            return lyrics

        # Chords sharing an anchor keep their source order
        ordered = sorted(chords, key=lambda t: t.anchor)

        # Pad with spaces when a chord sits past the end of the lyrics
        last = ordered[-1].anchor
        if last > len(lyrics):
            lyrics = lyrics + ' ' * (last - len(lyrics))

        parts = []
        pos = 0
        for token in ordered:
            parts.append(lyrics[pos:token.anchor])
            parts.append(token.markup)
            pos = token.anchor
        parts.append(lyrics[pos:])
        return ''.join(parts)

    @staticmethod
    def document_to_json(doc: Document) -> str:
        """Convert a Document to a JSON string"""
        def convert(obj):
            if isinstance(obj, Enum):
                return obj.value
            return str(obj)

        return json.dumps(asdict(doc), indent=2, ensure_ascii=False, default=convert)


class AboveToInlineConverter:
    """Merges chord lines into the lyric lines below them"""

    @staticmethod
    def convert(raw: str, add_marker: bool = False,
                config: ChordSheetConfig = DEFAULT_CONFIG) -> str:
        """
        Rewrite chords-above text as inline text.

        Each chord is inserted at its column of the lyric line. Chord lines
        without lyrics and all other lines are kept as they are.
        """
        doc = parse_document(raw, config=config)

        lines = []
        if add_marker and not any(line.kind == LineKind.MARKER for line in doc.lines()):
            lines.append(config.inline_marker)

        for section in doc.sections:
            if section.heading is not None:
                lines.append(section.heading)
            for line in section.lines:
                if line.is_column_anchored and line.lyrics is not None:
                    tokens = [replace(token, bracketed=True) for token in line.chords]
                    lines.append(TextWriter.insert_chords_inline(line.lyrics, tokens))
                else:
                    lines.extend(TextWriter.line_to_text(line))
        return "\n".join(lines)


def write_text(doc: Document) -> str:
    return TextWriter.write_text(doc)


def document_to_json(doc: Document) -> str:
    return TextWriter.document_to_json(doc)


def convert_above_to_inline(raw: str, add_marker: bool = False,
                            config: ChordSheetConfig = DEFAULT_CONFIG) -> str:
    return AboveToInlineConverter.convert(raw, add_marker, config)
