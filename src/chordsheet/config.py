"""
Engine configuration

Settings are held in an immutable ChordSheetConfig. Callers that want to
change them (e.g. to add a section keyword) load one from YAML:

    inline_marker: '#mic#'
    section_keywords: [Intro, Ponte, Solo, Bridge]
    min_chord_gap: 1
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Tuple, Union
import re

import yaml


DEFAULT_SECTION_KEYWORDS = (
    'Intro', 'Ponte', 'Solo', 'Bridge', 'Instrumental', 'Interlude', 'Outro',
)


@dataclass(frozen=True)
class ChordSheetConfig:
    """Options shared by the detector, parsers and renderer"""
    inline_marker: str = '#mic#'
    section_keywords: Tuple[str, ...] = DEFAULT_SECTION_KEYWORDS
    inline_container_class: str = 'chord-container-inline'
    above_container_class: str = 'chord-container-above'
    mixed_container_class: str = 'chord-container-mixed'
    min_chord_gap: int = 1  # Columns kept free between two chords above a lyric

    def __post_init__(self):
        if not isinstance(self.section_keywords, tuple):
            object.__setattr__(self, 'section_keywords', tuple(self.section_keywords))
        if not self.section_keywords or not all(keyword.strip() for keyword in self.section_keywords):
            raise ValueError("section_keywords must be a non-empty list of non-blank keywords")
        if self.min_chord_gap < 0:
            raise ValueError(f"min_chord_gap must be >= 0, got {self.min_chord_gap}")

    @property
    def section_pattern(self) -> 're.Pattern':
        """Regex matching a section heading line such as 'Intro:'"""
        keywords = '|'.join(re.escape(keyword) for keyword in self.section_keywords)
        return re.compile(rf'^\s*({keywords})\s*:\s*$', re.IGNORECASE)

    def to_yaml(self) -> str:
        """Serialize to YAML."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = list(value) if isinstance(value, tuple) else value
        return yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> 'ChordSheetConfig':
        """Parse from YAML content. Unknown keys are rejected."""
        data = yaml.safe_load(yaml_content) or {}
        if not isinstance(data, dict):
            raise ValueError("Config YAML must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        if 'section_keywords' in data:
            data['section_keywords'] = tuple(data['section_keywords'])
        return cls(**data)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ChordSheetConfig':
        with open(path, 'r', encoding='utf-8') as f:
            return cls.from_yaml(f.read())


DEFAULT_CONFIG = ChordSheetConfig()
