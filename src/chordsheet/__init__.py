"""
Chordsheet - Parse, render and transpose chord-annotated song lyrics

This package reads song texts annotated with chords in three conventions
(inline [C]chords, chord lines above the lyrics, and a mix of the two with
labelled instrumental sections), renders them to HTML and transposes them.
"""

from .config import ChordSheetConfig, DEFAULT_CONFIG

from .models import (
    ChordFormat,
    SectionKind,
    LineKind,
    ChordSymbol,
    ChordToken,
    AnnotatedLine,
    Section,
    Document,
    ValidationIssue,
)

from .grammar import (
    ChordDetector,
    SHARP_NAMES,
    try_parse_chord,
    is_chord,
    pitch_class,
    spell_pitch,
)

from .detector import FormatDetector, detect_format
from .sections import SectionSplitter

from .parser import (
    InlineParser,
    AboveParser,
    MixedParser,
    DocumentParser,
    parse_inline,
    parse_above,
    split_sections,
    parse_document,
)

from .writer import (
    TextWriter,
    write_text,
    document_to_json,
    convert_above_to_inline,
)

from .transposer import (
    KEY_OPTIONS,
    transpose,
    transpose_chord,
    transpose_chord_symbol,
    transpose_text,
    transpose_to_key,
    semitones_between,
    key_label,
)

from .renderer import (
    HtmlRenderer,
    ChordHtmlProcessor,
    layout_chord_line,
    render,
)

from .extractor import extract_chords, extract_document_chords

from .processor import process_chords, process_chord_html, process_mixed_chords

from .validator import ValidationResult, StructuralValidator, strip_annotations

__version__ = "0.1.0"

__all__ = [
    # Configuration
    'ChordSheetConfig',
    'DEFAULT_CONFIG',
    # Data structures
    'ChordFormat',
    'SectionKind',
    'LineKind',
    'ChordSymbol',
    'ChordToken',
    'AnnotatedLine',
    'Section',
    'Document',
    'ValidationIssue',
    # Chord grammar
    'ChordDetector',
    'SHARP_NAMES',
    'try_parse_chord',
    'is_chord',
    'pitch_class',
    'spell_pitch',
    # Parsing
    'FormatDetector',
    'detect_format',
    'SectionSplitter',
    'InlineParser',
    'AboveParser',
    'MixedParser',
    'DocumentParser',
    'parse_inline',
    'parse_above',
    'split_sections',
    'parse_document',
    # Text output
    'TextWriter',
    'write_text',
    'document_to_json',
    'convert_above_to_inline',
    # Transposition
    'KEY_OPTIONS',
    'transpose',
    'transpose_chord',
    'transpose_chord_symbol',
    'transpose_text',
    'transpose_to_key',
    'semitones_between',
    'key_label',
    # Rendering
    'HtmlRenderer',
    'ChordHtmlProcessor',
    'layout_chord_line',
    'render',
    # Pipelines
    'process_chords',
    'process_chord_html',
    'process_mixed_chords',
    'extract_chords',
    'extract_document_chords',
    # Validation
    'ValidationResult',
    'StructuralValidator',
    'strip_annotations',
]
