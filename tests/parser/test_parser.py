"""
Tests for the line parsers, section splitting and text output
"""

from chordsheet import (
    ChordFormat,
    LineKind,
    SectionKind,
    SectionSplitter,
    convert_above_to_inline,
    document_to_json,
    parse_above,
    parse_document,
    parse_inline,
    split_sections,
    write_text,
)


class TestInlineParser:
    """Tests for parse_inline()"""

    def test_marker_and_anchors(self):
        lines = parse_inline("#mic#\n[C]Deus está a[Am]qui")
        assert lines[0].kind == LineKind.MARKER

        line = lines[1]
        assert line.kind == LineKind.LYRIC
        assert line.lyrics == "Deus está aqui"
        assert [(t.chord.raw_text, t.anchor) for t in line.chords] == [('C', 0), ('Am', 11)]

    def test_runs_pair_text_with_preceding_chords(self):
        line = parse_inline("Deus [C]está a[Am]qui")[0]
        runs = [(text, [t.chord.raw_text for t in chords]) for text, chords in line.runs()]
        assert runs == [("Deus ", []), ("está a", ['C']), ("qui", ['Am'])]

    def test_stacked_chords_share_a_run(self):
        line = parse_inline("[C][G]Santo")[0]
        runs = [(text, [t.chord.raw_text for t in chords]) for text, chords in line.runs()]
        assert runs == [("Santo", ['C', 'G'])]

    def test_unrecognized_brackets_stay_in_text(self):
        line = parse_inline("[xyz]text [D]ok")[0]
        assert line.lyrics == "[xyz]text ok"
        assert [t.chord.raw_text for t in line.chords] == ['D']

    def test_unbalanced_bracket_is_literal(self):
        line = parse_inline("[C]Santo [Am")[0]
        assert line.lyrics == "Santo [Am"
        assert len(line.chords) == 1

    def test_markdown_is_untouched(self):
        line = parse_inline("**[C]Santo** _[G]santo_ [link](http://x.org)")[0]
        assert line.lyrics == "**Santo** _santo_ [link](http://x.org)"

    def test_bracketed_chord_only_line_is_chords(self):
        line = parse_inline("[C] [G]")[0]
        assert line.kind == LineKind.CHORDS
        assert line.lyrics is None
        assert line.chords_line == "[C] [G]"

    def test_diagnostics_for_unrecognized_chords(self):
        issues = []
        parse_inline("ok\n[xyz]text [C]a", on_diagnostic=issues.append)
        assert len(issues) == 1
        assert issues[0].severity == 'warning'
        assert "[xyz]" in issues[0].message
        assert issues[0].location == "line 2, column 0"


class TestAboveParser:
    """Tests for parse_above()"""

    def test_pairs_chord_line_with_lyric(self):
        lines = parse_above("[C] [Am] [F] [G]\nDeus está aqui")
        assert len(lines) == 1
        line = lines[0]
        assert line.kind == LineKind.LYRIC
        assert line.lyrics == "Deus está aqui"
        assert line.chords_line == "[C] [Am] [F] [G]"
        assert [t.anchor for t in line.chords] == [0, 4, 9, 13]

    def test_trailing_chord_line_is_instrumental(self):
        lines = parse_above("[C]   [G]\nDeus\n[F] [C]")
        assert [line.kind for line in lines] == [LineKind.LYRIC, LineKind.CHORDS]
        assert lines[1].lyrics is None

    def test_chord_line_before_blank_is_instrumental(self):
        lines = parse_above("C  G\n\nDeus")
        assert [line.kind for line in lines] == [LineKind.CHORDS, LineKind.BLANK, LineKind.LYRIC]

    def test_consecutive_chord_lines(self):
        lines = parse_above("[C] [G]\n[Am] [F]\nSanto")
        assert [line.kind for line in lines] == [LineKind.CHORDS, LineKind.LYRIC]
        assert lines[1].lyrics == "Santo"

    def test_bare_chords(self, sample_above_bare):
        lines = parse_above(sample_above_bare)
        assert [t.chord.raw_text for t in lines[0].chords] == ['C', 'Am', 'F']
        assert [t.anchor for t in lines[0].chords] == [0, 10, 18]
        assert lines[1].lyrics == "como o ar que eu respiro"


class TestSectionSplitter:
    """Tests for split_sections() and block splitting"""

    def test_concrete_mixed_case(self):
        sections = split_sections("Intro:\n[Am] [F] [C] [G]\n\n#mic#\n[C]Santo")
        assert len(sections) == 2

        intro, lyrics = sections
        assert intro.kind == SectionKind.INSTRUMENTAL
        assert intro.label == "Intro"
        assert intro.heading == "Intro:"
        assert [line.kind for line in intro.content_lines] == [LineKind.CHORDS]

        assert lyrics.kind == SectionKind.LYRIC
        assert lyrics.label is None
        assert [line.kind for line in lyrics.lines] == [LineKind.MARKER, LineKind.LYRIC]
        assert lyrics.lines[1].lyrics == "Santo"

    def test_heading_followed_by_blank_still_labels_block(self):
        blocks = SectionSplitter.split_blocks("Solo:\n\n[D] [A]\n\nDeus")
        assert [b.label for b in blocks] == ["Solo", None]
        assert blocks[0].content == ["[D] [A]"]

    def test_blank_lines_split_blocks(self):
        blocks = SectionSplitter.split_blocks("a\nb\n\nc\n\n\nd")
        assert [b.content for b in blocks] == [["a", "b"], ["c"], ["d"]]

    def test_every_line_lands_in_one_block(self, round_trip_samples):
        for raw in round_trip_samples:
            blocks = SectionSplitter.split_blocks(raw)
            count = sum(len(b.lines) + (1 if b.heading is not None else 0) for b in blocks)
            assert count == len(raw.split('\n'))

    def test_bare_chord_block_is_lyric(self):
        """Instrumental blocks need bracketed chords"""
        blocks = SectionSplitter.split_blocks("Intro:\nAm F C G")
        assert blocks[0].kind == SectionKind.LYRIC

    def test_heading_without_content(self):
        sections = split_sections("Intro:")
        assert len(sections) == 1
        assert sections[0].label == "Intro"
        assert sections[0].lines == []


class TestParseDocument:
    """Tests for the full text -> Document -> text path"""

    def test_format_is_detected(self, sample_mixed):
        assert parse_document(sample_mixed).format == ChordFormat.MIXED

    def test_format_can_be_forced(self, sample_above):
        doc = parse_document(sample_above, ChordFormat.INLINE)
        assert doc.format == ChordFormat.INLINE

    def test_plain_document_has_no_chords(self):
        doc = parse_document("[xyz]text")
        assert doc.format == ChordFormat.PLAIN
        assert doc.chords() == []
        assert doc.lyrics() == "[xyz]text"

    def test_lyrics_strip_annotation(self, sample_inline):
        doc = parse_document(sample_inline)
        assert doc.lyrics() == (
            "Deus está aqui, tão certo como o ar que eu respiro\n"
            "\n"
            "**Refrão**\n"
            "Santo, santo, santo é o Senhor"
        )

    def test_above_lyrics_strip_chord_lines(self):
        doc = parse_document("[C] [Am] [F] [G]\nDeus está aqui")
        assert doc.lyrics() == "Deus está aqui"

    def test_write_text_round_trips(self, round_trip_samples):
        for raw in round_trip_samples:
            assert write_text(parse_document(raw)) == raw

    def test_non_string_input(self):
        doc = parse_document(None)
        assert doc.format == ChordFormat.PLAIN
        assert write_text(doc) == ""

    def test_each_parse_builds_fresh_objects(self, sample_inline):
        first = parse_document(sample_inline)
        second = parse_document(sample_inline)
        assert first == second
        assert first is not second
        assert first.sections[0] is not second.sections[0]

    def test_document_to_json(self):
        json_text = document_to_json(parse_document("#mic#\n[C]Santo"))
        assert '"format": "inline"' in json_text
        assert '"raw_text": "C"' in json_text


class TestAboveToInline:
    """Tests for convert_above_to_inline()"""

    def test_chords_merge_at_their_columns(self):
        raw = "[C]       [G]\nDeus está aqui"
        assert convert_above_to_inline(raw) == "[C]Deus está [G]aqui"

    def test_bare_chords_gain_brackets(self):
        assert convert_above_to_inline("C    G\nSanto santo") == "[C]Santo[G] santo"

    def test_chord_past_end_of_lyrics_pads(self):
        assert convert_above_to_inline("C      G\nSanto") == "[C]Santo  [G]"

    def test_lone_chord_lines_are_kept(self):
        raw = "Intro:\n[Am] [F]\n\n[C]   [G]\nSanto Deus"
        assert convert_above_to_inline(raw) == "Intro:\n[Am] [F]\n\n[C]Santo [G]Deus"

    def test_marker_can_be_added(self):
        assert convert_above_to_inline("C\nSanto", add_marker=True) == "#mic#\n[C]Santo"

    def test_converted_text_is_inline(self):
        converted = convert_above_to_inline("[C] [Am] [F] [G]\nDeus está aqui")
        assert parse_document(converted).format == ChordFormat.INLINE
