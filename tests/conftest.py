"""
Pytest configuration and shared fixtures
"""

import sys
from pathlib import Path

import pytest

# Add source directory to Python path for imports
REPO_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))


@pytest.fixture
def sample_inline():
    """Inline chords, introduced by the #mic# marker"""
    return (
        "#mic#\n"
        "[C]Deus está a[Am]qui, tão certo como o [F]ar que eu res[G]piro\n"
        "\n"
        "**Refrão**\n"
        "[C]Santo, [G/B]santo, [Am7]santo é o Se[F]nhor"
    )


@pytest.fixture
def sample_above():
    """Chord lines written over the lyric lines"""
    return (
        "[C]        [Am]       [F]\n"
        "Deus está aqui, tão certo como o ar\n"
        "[G]              [C]\n"
        "que eu respiro, Senhor\n"
        "\n"
        "[F] [G] [C]"
    )


@pytest.fixture
def sample_above_bare():
    """Chord lines without brackets"""
    return (
        "C         Am      F\n"
        "Deus está aqui, tão certo\n"
        "G        C\n"
        "como o ar que eu respiro"
    )


@pytest.fixture
def sample_mixed():
    """Labelled instrumental sections plus inline lyrics"""
    return (
        "Intro:\n"
        "[Am] [F] [C] [G]\n"
        "\n"
        "#mic#\n"
        "[C]Santo, [G]santo é o Se[Am]nhor\n"
        "\n"
        "Ponte:\n"
        "[F] [G]  [Em] [Am]\n"
        "\n"
        "[F]Hosana nas al[G]turas"
    )


@pytest.fixture
def round_trip_samples(sample_inline, sample_above, sample_above_bare, sample_mixed):
    """Texts in every notation, including awkward spacing and stray brackets"""
    return [
        sample_inline,
        sample_above,
        sample_above_bare,
        sample_mixed,
        "#mic#\n[C]Deus está a[Am]qui",
        "[C] [Am] [F] [G]\nDeus está aqui",
        "Intro:\n[Am] [F] [C] [G]\n\n#mic#\n[C]Santo",
        "[C]a[Am]b[C]c",
        "[xyz]text [D]ok [unbalanced\n",
        "\n\n  [C][G]  \n\nSó texto\n",
        "Solo:\n\n[D/F#]  [Em7]\n[A7(9)] [Bm]\n",
    ]
