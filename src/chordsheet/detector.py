"""
Format detection

Classifies a song text as INLINE ([C]Deus está a[Am]qui), ABOVE (a line of
chords over each lyric line), MIXED (labelled instrumental sections combined
with inline chords) or PLAIN (no chords found).
"""

import logging
from typing import Optional

from .config import ChordSheetConfig, DEFAULT_CONFIG
from .grammar import ChordDetector
from .models import ChordFormat


logger = logging.getLogger(__name__)


class FormatDetector:
    """Detects the authoring convention of a song text"""

    @staticmethod
    def is_marker_line(line: str, config: ChordSheetConfig = DEFAULT_CONFIG) -> bool:
        return line.strip() == config.inline_marker

    @staticmethod
    def section_label(line: str, config: ChordSheetConfig = DEFAULT_CONFIG) -> Optional[str]:
        """
        Detects if a line is a section heading like 'Intro:' or 'ponte :'.
        Returns the keyword as configured, or None if not a heading.
        """
        match = config.section_pattern.match(line)
        if not match:
            return None
        found = match.group(1).lower()
        for keyword in config.section_keywords:
            if keyword.lower() == found:
                return keyword
        return match.group(1)

    @staticmethod
    def is_lyric_line(line: str, config: ChordSheetConfig = DEFAULT_CONFIG) -> bool:
        """Non-blank line that is neither a marker, a heading nor chords only"""
        return bool(
            line.strip()
            and not FormatDetector.is_marker_line(line, config)
            and FormatDetector.section_label(line, config) is None
            and not ChordDetector.is_chord_line(line)
        )

    @staticmethod
    def detect_format(raw: str, config: ChordSheetConfig = DEFAULT_CONFIG) -> ChordFormat:
        """
        Determine which chord notation the text uses.

        Rules, in priority order:
        1. marker line and no section headings -> INLINE
        2. section headings plus a marker line or inline chords in lyrics -> MIXED
        3. a chord-only line followed by a plain lyric line -> ABOVE
        4. any bracketed chord -> INLINE
        5. otherwise -> PLAIN
        """
        if not isinstance(raw, str) or not raw.strip():
            return ChordFormat.PLAIN

        lines = raw.split('\n')
        has_marker = any(FormatDetector.is_marker_line(line, config) for line in lines)
        has_sections = any(FormatDetector.section_label(line, config) for line in lines)

        if has_marker and not has_sections:
            return FormatDetector._decided(ChordFormat.INLINE, 'marker line')

        has_inline_chords = any(
            FormatDetector.is_lyric_line(line, config) and ChordDetector.has_bracketed_chord(line)
            for line in lines
        )
        if has_sections and (has_marker or has_inline_chords):
            return FormatDetector._decided(ChordFormat.MIXED, 'section headings with inline chords')

        for current, following in zip(lines, lines[1:]):
            if (ChordDetector.is_chord_line(current)
                    and FormatDetector.is_lyric_line(following, config)
                    and not ChordDetector.has_bracketed_chord(following)):
                return FormatDetector._decided(ChordFormat.ABOVE, 'chord line over lyric line')

        if any(ChordDetector.has_bracketed_chord(line) for line in lines):
            return FormatDetector._decided(ChordFormat.INLINE, 'bracketed chords')

        return FormatDetector._decided(ChordFormat.PLAIN, 'no chords recognised')

    @staticmethod
    def _decided(chord_format: ChordFormat, reason: str) -> ChordFormat:
        logger.debug("Detected %s format (%s)", chord_format.value, reason)
        return chord_format


def detect_format(raw: str, config: ChordSheetConfig = DEFAULT_CONFIG) -> ChordFormat:
    return FormatDetector.detect_format(raw, config)
