"""
Tests for the chord grammar
"""

import time

import pytest
from chordsheet import (
    ChordDetector,
    ChordFormat,
    detect_format,
    extract_chords,
    pitch_class,
    spell_pitch,
    try_parse_chord,
)


class TestTryParseChord:
    """Tests for try_parse_chord()"""

    def test_simple_major(self):
        chord = try_parse_chord('C')
        assert chord.raw_text == 'C'
        assert chord.root == 0
        assert chord.quality == ''
        assert chord.bass is None

    def test_sharp_minor_seventh(self):
        chord = try_parse_chord('F#m7')
        assert chord.root == 6
        assert chord.quality == 'm7'

    def test_flat_major_seventh(self):
        chord = try_parse_chord('Bbmaj7')
        assert chord.root == 10
        assert chord.quality == 'maj7'

    def test_slash_bass(self):
        chord = try_parse_chord('D/F#')
        assert chord.root == 2
        assert chord.quality == ''
        assert chord.bass == 6

    def test_minor_and_major_are_distinct(self):
        """Lowercase m is minor, uppercase M is major"""
        assert try_parse_chord('Am').quality == 'm'
        assert try_parse_chord('AM').quality == 'M'
        assert try_parse_chord('Am') != try_parse_chord('AM')

    def test_enharmonic_edges(self):
        assert try_parse_chord('Cb').root == 11
        assert try_parse_chord('E#').root == 5
        assert try_parse_chord('B#').root == 0

    @pytest.mark.parametrize("text", [
        'Dsus4', 'Dsus2', 'Caug', 'Cdim', 'Cdim7', 'C7(9)', 'E7b9', 'G7#5',
        'Cadd9', 'C6', 'A9', 'Amin7', 'C7M', 'Am7(b13)', 'C°', 'Bø', 'C+',
        'G/B', 'Am7/G', 'Em11',
    ])
    def test_accepted_chords(self, text):
        chord = try_parse_chord(text)
        assert chord is not None
        assert str(chord) == text

    @pytest.mark.parametrize("text", [
        'xyz', 'H', '', 'c', 'C/', 'Cmajor', 'Deus', ' C', 'C ', 'Am/x', 'Refrão',
    ])
    def test_rejected_text(self, text):
        assert try_parse_chord(text) is None

    def test_non_string_returns_none(self):
        """Never raises"""
        assert try_parse_chord(None) is None
        assert try_parse_chord(7) is None


class TestPitchSpelling:

    def test_pitch_class_lookup(self):
        assert pitch_class('C') == 0
        assert pitch_class('Db') == 1
        assert pitch_class('F', '#') == 6
        assert pitch_class('B') == 11
        assert pitch_class('X') is None

    def test_spell_pitch_uses_sharps(self):
        assert [spell_pitch(i) for i in range(12)] == [
            'C', 'C#', 'D', 'D#', 'E', 'F', 'F#', 'G', 'G#', 'A', 'A#', 'B'
        ]
        assert spell_pitch(13) == 'C#'
        assert spell_pitch(-1) == 'B'


class TestChordDetector:
    """Tests for chord-only line scanning"""

    def test_bracketed_chord_line_positions(self):
        tokens = ChordDetector.scan_chord_line("[C] [Am] [F] [G]")
        assert [t.anchor for t in tokens] == [0, 4, 9, 13]
        assert [t.width for t in tokens] == [3, 4, 3, 3]
        assert all(t.bracketed for t in tokens)

    def test_bare_chord_line_positions(self):
        tokens = ChordDetector.scan_chord_line("C  G   Am")
        assert [t.chord.raw_text for t in tokens] == ['C', 'G', 'Am']
        assert [t.anchor for t in tokens] == [0, 3, 7]
        assert not any(t.bracketed for t in tokens)

    def test_adjacent_brackets(self):
        tokens = ChordDetector.scan_chord_line("[C][Am][F][G]")
        assert [t.chord.raw_text for t in tokens] == ['C', 'Am', 'F', 'G']

    def test_bare_chords_can_be_refused(self):
        assert ChordDetector.scan_chord_line("C G", allow_bare=False) is None
        assert ChordDetector.is_chord_line("[C] [G]", allow_bare=False)

    @pytest.mark.parametrize("line", [
        "", "   ", "[C] Deus", "Deus está aqui", "[C]Deus", "[xyz] [C]", "CG", "[C]G",
    ])
    def test_not_chord_lines(self, line):
        assert not ChordDetector.is_chord_line(line)

    def test_find_bracketed_skips_unrecognized(self):
        tokens = ChordDetector.find_bracketed_chords("[xyz]a[C]b[Am]")
        assert [t.chord.raw_text for t in tokens] == ['C', 'Am']
        assert [t.anchor for t in tokens] == [6, 10]


class TestLongInput:
    """Parsing time stays linear in the length of the text"""

    @pytest.mark.parametrize("text", [
        'C' + '1' * 40 + 'x',
        'A' + '7' * 40 + '!',
        'Cadd9' * 30 + 'x',
        'C(' + '9' * 40 + 'x',
    ])
    def test_rejected_quickly(self, text):
        start = time.perf_counter()
        assert try_parse_chord(text) is None
        assert time.perf_counter() - start < 0.5

    def test_long_digit_run_is_a_chord(self):
        chord = try_parse_chord('C' + '1' * 40)
        assert chord.quality == '1' * 40

    def test_detection_on_long_token(self):
        start = time.perf_counter()
        assert detect_format('A' + '7' * 40 + '!\nDeus está aqui') == ChordFormat.PLAIN
        assert extract_chords('[C' + '1' * 40 + 'x]') == []
        assert time.perf_counter() - start < 0.5
