"""
HTML rendering

Turns a Document into HTML for the song page. The stylesheet (not owned
here) gives the containers a fixed-width font, so chords written above the
lyrics are positioned by padding the chord line with spaces.
"""

import html
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString
from bs4.builder import HTMLParserTreeBuilder

from .config import ChordSheetConfig, DEFAULT_CONFIG
from .grammar import BRACKET_PATTERN, try_parse_chord
from .models import AnnotatedLine, ChordFormat, ChordToken, Document, LineKind, Section, SectionKind


def _escape(text: str) -> str:
    return html.escape(text, quote=False)


def layout_chord_line(chords: List[ChordToken], min_gap: int = 1) -> List[int]:
    """
    Columns at which to draw each chord of a line.

    Chords are taken left to right; each keeps its anchor column unless the
    previous chord (whose name may have grown with transposition, e.g.
    A -> A#) reaches into it, in which case it moves right just enough to
    leave min_gap free columns.
    """
    columns = []
    end = None
    for token in chords:
        column = token.anchor
        if end is not None:
            column = max(column, end + min_gap)
        columns.append(column)
        end = column + len(token.chord.raw_text)
    return columns


class HtmlRenderer:
    """Generates HTML from Document data"""

    @staticmethod
    def chord_span(name: str, extra_class: Optional[str] = None, column: Optional[int] = None) -> str:
        classes = 'chord' if not extra_class else f'chord {extra_class}'
        attrs = f'class="{classes}" data-chord-length="{len(name)}"'
        if column is not None:
            attrs += f' data-column="{column}"'
        return f'<span {attrs}><span class="inner">{_escape(name)}</span></span>'

    @staticmethod
    def container_class(chord_format: ChordFormat, config: ChordSheetConfig = DEFAULT_CONFIG) -> str:
        if chord_format == ChordFormat.ABOVE:
            return config.above_container_class
        if chord_format == ChordFormat.MIXED:
            return f'{config.inline_container_class} {config.mixed_container_class}'
        return config.inline_container_class

    @staticmethod
    def render(doc: Document, config: ChordSheetConfig = DEFAULT_CONFIG) -> str:
        parts = [f'<div class="{HtmlRenderer.container_class(doc.format, config)}">']
        for section in doc.sections:
            if section.kind == SectionKind.INSTRUMENTAL:
                parts.extend(HtmlRenderer.render_instrumental(section, doc.format, config))
            else:
                parts.extend(HtmlRenderer.render_lyric_section(section, config))
        parts.append('</div>')
        return "\n".join(parts)

    @staticmethod
    def render_instrumental(section: Section, chord_format: ChordFormat,
                            config: ChordSheetConfig = DEFAULT_CONFIG) -> List[str]:
        """Standalone chord sequence, e.g. an Intro, with its label"""
        css = 'intro-section mixed' if chord_format == ChordFormat.MIXED else 'intro-section'
        parts = [f'<div class="{css}">']
        if section.heading is not None:
            parts.append(f'<div class="intro-label">{_escape(section.heading.strip())}</div>')
        for line in section.content_lines:
            chord_html = HtmlRenderer.render_chord_line(line.chords, 'intro-chord', config)
            parts.append(f'<div class="intro-line">{chord_html}</div>')
        parts.append('</div>')
        # Blank lines of the block still separate it from what follows
        parts.extend('<br>' for line in section.lines if line.kind == LineKind.BLANK)
        return parts

    @staticmethod
    def render_lyric_section(section: Section, config: ChordSheetConfig = DEFAULT_CONFIG) -> List[str]:
        parts = []
        if section.heading is not None:
            parts.append(f'<div class="section-label">{_escape(section.heading.strip())}</div>')
        for line in section.lines:
            rendered = HtmlRenderer.render_line(line, config)
            if rendered is not None:
                parts.append(rendered)
        return parts

    @staticmethod
    def render_line(line: AnnotatedLine, config: ChordSheetConfig = DEFAULT_CONFIG) -> Optional[str]:
        if line.kind == LineKind.MARKER:
            return None
        if line.kind == LineKind.BLANK:
            return '<br>'

        if line.kind == LineKind.CHORDS:
            chord_html = HtmlRenderer.render_chord_line(line.chords, 'intro-chord', config)
            return f'<div class="intro-line standalone">{chord_html}</div>'

        if line.is_column_anchored:
            chord_html = HtmlRenderer.render_chord_line(line.chords, 'above-chord', config)
            return "\n".join([
                '<div class="chord-section">',
                f'<div class="chord-line">{chord_html}</div>',
                f'<div class="text-line">{_escape(line.lyrics or "")}</div>',
                '</div>',
            ])

        pieces = []
        for text, chords in line.runs():
            for token in chords:
                pieces.append(HtmlRenderer.chord_span(token.chord.raw_text))
            pieces.append(_escape(text))
        return f'<p>{"".join(pieces)}</p>'

    @staticmethod
    def render_chord_line(chords: List[ChordToken], extra_class: str,
                          config: ChordSheetConfig = DEFAULT_CONFIG) -> str:
        """Chord glyphs padded with spaces to their laid-out columns"""
        ordered = sorted(chords, key=lambda token: token.anchor)
        columns = layout_chord_line(ordered, config.min_chord_gap)

        pieces = []
        cursor = 0
        for token, column in zip(ordered, columns):
            pieces.append(' ' * (column - cursor))
            pieces.append(HtmlRenderer.chord_span(token.chord.raw_text, extra_class, column))
            cursor = column + len(token.chord.raw_text)
        return ''.join(pieces)


class ChordHtmlProcessor:
    """Post-processes HTML already produced by a Markdown engine"""

    # Text inside these is left alone
    SKIP_PARENTS = ('code', 'pre', 'script', 'style')

    # Every node descends from the document root, so no string is collapsed
    PRESERVE_WHITESPACE_TAGS = HTMLParserTreeBuilder.DEFAULT_PRESERVE_WHITESPACE_TAGS | {
        BeautifulSoup.ROOT_TAG_NAME,
    }

    @staticmethod
    def process(rendered_html: str) -> str:
        """
        Style the chords of Markdown-rendered inline text.

        Spans emitted by a markdown chord plugin lose their brackets and get
        a data-chord-length; [chord] text that survived Markdown is wrapped in
        the same span markup. Brackets holding anything but a chord stay as
        text.
        """
        if not rendered_html:
            return rendered_html or ''

        # Whitespace between tags (e.g. between two chord spans) is kept as is
        soup = BeautifulSoup(
            rendered_html, 'html.parser',
            preserve_whitespace_tags=ChordHtmlProcessor.PRESERVE_WHITESPACE_TAGS,
        )

        for span in soup.select('span.chord'):
            target = span.find('span', class_='inner') or span
            name = target.get_text().strip().replace('[', '').replace(']', '')
            target.string = name
            if not span.has_attr('data-chord-length'):
                span['data-chord-length'] = str(len(name))

        for node in list(soup.find_all(string=BRACKET_PATTERN)):
            if type(node) is not NavigableString:
                continue  # Comments, CDATA and the like
            if ChordHtmlProcessor._is_skipped(node):
                continue
            replacement = ChordHtmlProcessor._wrap_chords(soup, str(node))
            if replacement is not None:
                node.replace_with(*replacement)

        return str(soup)

    @staticmethod
    def _is_skipped(node: NavigableString) -> bool:
        for parent in node.parents:
            if parent.name in ChordHtmlProcessor.SKIP_PARENTS:
                return True
            if parent.name == 'span' and 'chord' in (parent.get('class') or []):
                return True
        return False

    @staticmethod
    def _wrap_chords(soup: BeautifulSoup, text: str) -> Optional[list]:
        nodes = []
        pos = 0
        for match in BRACKET_PATTERN.finditer(text):
            chord = try_parse_chord(match.group(1))
            if chord is None:
                continue
            if match.start() > pos:
                nodes.append(NavigableString(text[pos:match.start()]))
            nodes.append(ChordHtmlProcessor._chord_tag(soup, chord.raw_text))
            pos = match.end()

        if not nodes:
            return None
        if pos < len(text):
            nodes.append(NavigableString(text[pos:]))
        return nodes

    @staticmethod
    def _chord_tag(soup: BeautifulSoup, name: str):
        outer = soup.new_tag('span', attrs={'class': 'chord', 'data-chord-length': str(len(name))})
        inner = soup.new_tag('span', attrs={'class': 'inner'})
        inner.string = name
        outer.append(inner)
        return outer


def render(doc: Document, config: ChordSheetConfig = DEFAULT_CONFIG) -> str:
    return HtmlRenderer.render(doc, config)


def process_chord_html(rendered_html: str) -> str:
    return ChordHtmlProcessor.process(rendered_html)
