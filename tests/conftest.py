"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides:
- Shared fixtures for tests
- Dependency availability checks
- Sample automata, alignments and symbol files
"""

import pytest
import sys
from pathlib import Path

# Add src to path (for direct module imports like alignment.search)
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


# =============================================================================
# Dependency availability markers
# =============================================================================

def check_k2_available():
    try:
        import k2
        return True
    except ImportError:
        return False


def check_torch_available():
    try:
        import torch
        return True
    except ImportError:
        return False


K2_AVAILABLE = check_k2_available()
TORCH_AVAILABLE = check_torch_available()

# Pytest markers for skipping tests
requires_k2 = pytest.mark.skipif(not K2_AVAILABLE, reason="k2 not installed")
requires_torch = pytest.mark.skipif(not TORCH_AVAILABLE, reason="torch not installed")


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "requires_torch: mark test as requiring torch"
    )
    config.addinivalue_line(
        "markers", "requires_k2: mark test as requiring k2"
    )


def pytest_collection_modifyitems(config, items):
    """Skip tests that require unavailable dependencies."""
    if not TORCH_AVAILABLE:
        skip_torch = pytest.mark.skip(reason="torch not installed - required for fst_model.base")
        for item in items:
            item.add_marker(skip_torch)


# =============================================================================
# Automaton fixtures
# =============================================================================

@pytest.fixture
def epsilon_tail_fst():
    """0 -5-> 1 -eps-> 2(final)."""
    from fst_model import Automaton
    return Automaton.from_arcs(
        [(0, 1, 5, 5), (1, 2, 0, 0)],
        finals={2: 0.0},
    )


@pytest.fixture
def self_loop_fst():
    """0 -eps-> 1, 1 -3-> 1 (self-loop), 1 -eps-> 2(final)."""
    from fst_model import Automaton
    return Automaton.from_arcs(
        [(0, 1, 0, 0), (1, 1, 3, 30), (1, 2, 0, 0)],
        finals={2: 0.0},
    )


@pytest.fixture
def epsilon_cycle_fst():
    """Every state has an epsilon self-loop; states 0 -> 1 -> 2(final) on labels 1, 2."""
    from fst_model import Automaton
    return Automaton.from_arcs(
        [
            (0, 0, 0, 0), (0, 1, 1, 1),
            (1, 1, 0, 0), (1, 0, 0, 0), (1, 2, 2, 2),
            (2, 2, 0, 0), (2, 1, 0, 0),
        ],
        finals={2: 0.0},
    )


@pytest.fixture
def backtracking_fst():
    """
    Two branches on label 4 from the start; only the first leads to a final state.

    0 -4-> 1 -6-> 3(final)
    0 -4-> 2 -6-> 4 (dead end)
    """
    from fst_model import Automaton
    return Automaton.from_arcs(
        [(0, 1, 4, 4), (0, 2, 4, 4), (1, 3, 6, 6), (2, 4, 6, 6)],
        finals={3: 0.0},
    )


# =============================================================================
# File fixtures
# =============================================================================

PHONES_TXT = """<eps> 0
SIL 1
AH 2
B 3
"""

WORDS_TXT = """<eps> 0
A 1
BA 2
"""

SHOW_TRANSITIONS_TXT = """Transition-state 1: phone = SIL hmm-state = 0 pdf = 0
 Transition-id = 1 p = 0.75 [self-loop]
 Transition-id = 2 p = 0.25 [0 -> 1]
Transition-state 2: phone = AH hmm-state = 0 pdf = 1
 Transition-id = 3 p = 0.5 [self-loop]
 Transition-id = 4 p = 0.5 [0 -> 1]
Transition-state 3: phone = B hmm-state = 0 pdf = 2
 Transition-id = 5 p = 0.5 [self-loop]
 Transition-id = 6 p = 0.5 [0 -> 1]
"""

# Word "BA": B (self-loop 5, exit 6) then AH (self-loop 3, exit 4)
FST_ARCHIVE_TXT = """utt1
0 1 0 2
1 1 5 0
1 2 6 0
2 2 3 0
2 3 4 0
3

utt2
0 1 4 1
1
"""

ALI_ARCHIVE_TXT = """utt1 5 5 6 3 4
utt2 7
"""


@pytest.fixture
def data_dir(tmp_path):
    """Directory with phone/word symbols, transitions and archives."""
    (tmp_path / "phones.txt").write_text(PHONES_TXT)
    (tmp_path / "words.txt").write_text(WORDS_TXT)
    (tmp_path / "transitions.txt").write_text(SHOW_TRANSITIONS_TXT)
    (tmp_path / "graphs.txt").write_text(FST_ARCHIVE_TXT)
    (tmp_path / "ali.txt").write_text(ALI_ARCHIVE_TXT)
    return tmp_path
