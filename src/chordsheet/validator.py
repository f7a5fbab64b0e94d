#!/usr/bin/env python3
"""
Validation framework for parsed songs

Checks that a parsed Document is consistent with the text it came from:
1. Structural validation - sections and lines are well formed
2. Chord positions - every anchor points inside its line
3. Lyric preservation - removing the chords gives back the lyric text
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .config import ChordSheetConfig, DEFAULT_CONFIG
from .detector import FormatDetector
from .grammar import BRACKET_PATTERN, ChordDetector, try_parse_chord
from .models import ChordFormat, Document, LineKind, SectionKind, ValidationIssue


@dataclass
class ValidationResult:
    """Result of validation checks"""
    valid: bool
    confidence: float  # 0.0 to 1.0
    issues: List[ValidationIssue]
    metrics: Dict[str, Any]


def strip_annotations(raw: str, chord_format: ChordFormat,
                      config: ChordSheetConfig = DEFAULT_CONFIG) -> str:
    """
    The lyric text of a raw song: headings, marker lines and chord-only
    lines dropped, recognised [chord] spans removed from the rest.
    """
    lyric_lines = []
    for line in raw.split('\n'):
        if FormatDetector.section_label(line, config) is not None:
            continue
        if chord_format == ChordFormat.PLAIN:
            lyric_lines.append(line)
            continue
        if FormatDetector.is_marker_line(line, config):
            continue
        if ChordDetector.is_chord_line(line, allow_bare=(chord_format == ChordFormat.ABOVE)):
            continue
        lyric_lines.append(BRACKET_PATTERN.sub(
            lambda m: '' if try_parse_chord(m.group(1)) else m.group(0), line))
    return "\n".join(lyric_lines)


class StructuralValidator:
    """Validates structural integrity of parsed songs"""

    @staticmethod
    def validate(doc: Document, raw: Optional[str] = None,
                 config: ChordSheetConfig = DEFAULT_CONFIG) -> ValidationResult:
        """Run all structural validation checks"""
        issues = []
        metrics = {}

        issues.extend(StructuralValidator._check_content(doc, metrics))
        issues.extend(StructuralValidator._check_chord_positions(doc, metrics))

        if raw is not None:
            issues.extend(StructuralValidator._check_lyrics(doc, raw, config, metrics))
            issues.extend(StructuralValidator._check_unrecognized(raw, metrics))

        confidence = StructuralValidator._calculate_confidence(issues, metrics)

        # Determine if valid (no errors, only warnings/info allowed)
        valid = not any(issue.severity == 'error' for issue in issues)

        return ValidationResult(
            valid=valid,
            confidence=confidence,
            issues=issues,
            metrics=metrics
        )

    @staticmethod
    def _check_content(doc: Document, metrics: Dict) -> List[ValidationIssue]:
        """Validate section structure"""
        issues = []

        metrics['format'] = doc.format.value
        metrics['section_count'] = len(doc.sections)
        metrics['instrumental_sections'] = sum(
            1 for section in doc.sections if section.kind == SectionKind.INSTRUMENTAL)

        for idx, section in enumerate(doc.sections):
            if section.heading is not None and not section.content_lines:
                issues.append(ValidationIssue(
                    'warning',
                    f'Section {section.label!r} has no content',
                    f'section {idx}'
                ))

        lines = list(doc.lines())
        metrics['total_lines'] = len(lines)
        metrics['lines_with_chords'] = sum(1 for line in lines if line.chords)
        metrics['lines_with_lyrics'] = sum(
            1 for line in lines if line.kind == LineKind.LYRIC and (line.lyrics or '').strip())

        if doc.format != ChordFormat.PLAIN and metrics['lines_with_chords'] == 0:
            issues.append(ValidationIssue('warning', 'No chords found in song'))

        return issues

    @staticmethod
    def _check_chord_positions(doc: Document, metrics: Dict) -> List[ValidationIssue]:
        """Every anchor must point inside the line it belongs to"""
        issues = []
        total_chords = 0
        position_errors = 0

        for section_idx, section in enumerate(doc.sections):
            for line_idx, line in enumerate(section.lines):
                if line.is_column_anchored:
                    limit = len(line.chords_line)
                else:
                    limit = len(line.lyrics or '')

                for token in line.chords:
                    total_chords += 1
                    end = token.anchor + (token.width if line.is_column_anchored else 0)
                    if token.anchor < 0 or end > limit:
                        position_errors += 1
                        issues.append(ValidationIssue(
                            'error',
                            f'Chord position {token.anchor} outside line of length {limit}',
                            f'section {section_idx}, line {line_idx}, chord: {token.chord}'
                        ))

        metrics['total_chords'] = total_chords
        metrics['unique_chords'] = len({token.chord.raw_text for token in doc.chords()})
        metrics['chord_position_errors'] = position_errors
        if total_chords > 0:
            metrics['chord_position_error_rate'] = position_errors / total_chords

        return issues

    @staticmethod
    def _check_lyrics(doc: Document, raw: str, config: ChordSheetConfig,
                      metrics: Dict) -> List[ValidationIssue]:
        """Removing the chords must give back the lyric text exactly"""
        expected = strip_annotations(raw, doc.format, config)
        actual = doc.lyrics()
        metrics['lyrics_preserved'] = expected == actual
        if expected == actual:
            return []

        expected_lines = expected.split('\n')
        actual_lines = actual.split('\n')
        for idx, (want, got) in enumerate(zip(expected_lines, actual_lines)):
            if want != got:
                return [ValidationIssue(
                    'error',
                    f'Lyric text changed: expected {want!r}, got {got!r}',
                    f'lyric line {idx + 1}'
                )]
        return [ValidationIssue(
            'error',
            f'Lyric line count changed: expected {len(expected_lines)}, got {len(actual_lines)}'
        )]

    @staticmethod
    def _check_unrecognized(raw: str, metrics: Dict) -> List[ValidationIssue]:
        """Bracketed text that is not a chord is kept as text; note it"""
        issues = []
        for line_idx, line in enumerate(raw.split('\n')):
            for match in BRACKET_PATTERN.finditer(line):
                if try_parse_chord(match.group(1)) is None:
                    issues.append(ValidationIssue(
                        'info',
                        f"Unrecognized chord '{match.group(0)}' kept as text",
                        f'line {line_idx + 1}, column {match.start()}'
                    ))
        metrics['unrecognized_brackets'] = len(issues)
        return issues

    @staticmethod
    def _calculate_confidence(issues: List[ValidationIssue], metrics: Dict) -> float:
        """Calculate confidence score 0.0-1.0"""
        score = 1.0

        error_count = sum(1 for issue in issues if issue.severity == 'error')
        warning_count = sum(1 for issue in issues if issue.severity == 'warning')
        info_count = sum(1 for issue in issues if issue.severity == 'info')

        score -= error_count * 0.2  # Each error: -0.2
        score -= warning_count * 0.05  # Each warning: -0.05
        score -= info_count * 0.01  # Each bracket kept as text: -0.01

        # Penalty for chord position errors
        error_rate = metrics.get('chord_position_error_rate', 0)
        score -= error_rate * 0.3

        # Clamp to 0.0-1.0
        return max(0.0, min(1.0, score))
