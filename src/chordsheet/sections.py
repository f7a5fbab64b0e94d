"""
Section splitting

Breaks a song text into blocks at blank lines and at section headings
('Intro:', 'Ponte:', ...). A block made only of bracketed chord lines is an
instrumental block; anything else is a lyric block.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .config import ChordSheetConfig, DEFAULT_CONFIG
from .detector import FormatDetector
from .grammar import ChordDetector
from .models import SectionKind


@dataclass
class Block:
    """Raw lines of one section, before line parsing"""
    lines: List[str] = field(default_factory=list)
    label: Optional[str] = None
    heading: Optional[str] = None

    @property
    def content(self) -> List[str]:
        return [line for line in self.lines if line.strip()]

    @property
    def kind(self) -> SectionKind:
        content = self.content
        if content and all(ChordDetector.is_chord_line(line, allow_bare=False) for line in content):
            return SectionKind.INSTRUMENTAL
        return SectionKind.LYRIC


class SectionSplitter:
    """Splits song text into blocks"""

    @staticmethod
    def split_blocks(raw: str, config: ChordSheetConfig = DEFAULT_CONFIG) -> List[Block]:
        """
        Split text into blocks.

        A heading line opens a new block and becomes its label. A non-blank
        line that follows a blank line opens a new block unless the current
        block has no content yet (so 'Intro:' followed by a blank line still
        labels the chords after it). Blank lines stay with the block they
        follow, which keeps every source line in exactly one block.
        """
        blocks = []
        current = Block()
        has_content = False

        for line in raw.split('\n'):
            label = FormatDetector.section_label(line, config)
            if label is not None:
                if current.heading is not None or current.lines:
                    blocks.append(current)
                current = Block(label=label, heading=line)
                has_content = False
                continue

            if not line.strip():
                current.lines.append(line)
                continue

            if has_content and not current.lines[-1].strip():
                blocks.append(current)
                current = Block()

            current.lines.append(line)
            has_content = True

        blocks.append(current)
        return blocks
