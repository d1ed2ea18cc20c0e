"""
Tests for text symbol tables.
"""

import pytest

from conftest import PHONES_TXT


class TestSymbolTable:
    """Tests for SymbolTable."""

    def test_from_str(self):
        from symbol_utils import SymbolTable

        syms = SymbolTable.from_str(PHONES_TXT)

        assert len(syms) == 4
        assert syms.find(2) == "AH"
        assert syms.find_id("B") == 3
        assert 0 in syms

    def test_unknown(self):
        from symbol_utils import SymbolTable

        syms = SymbolTable.from_str(PHONES_TXT)

        assert syms.find(99) is None
        assert syms.find_id("ZZ") is None

    def test_decorate_falls_back_to_number(self):
        """Unknown labels are shown as their integer value."""
        from symbol_utils import SymbolTable

        syms = SymbolTable.from_str(PHONES_TXT)

        assert syms.decorate(1) == "SIL"
        assert syms.decorate(42) == "42"

    def test_malformed(self):
        from symbol_utils import SymbolTable

        with pytest.raises(ValueError, match="line 2"):
            SymbolTable.from_str("<eps> 0\nSIL\n")
        with pytest.raises(ValueError):
            SymbolTable.from_str("SIL one\n")

    def test_add_symbol_next_id(self):
        from symbol_utils import SymbolTable

        syms = SymbolTable()
        assert syms.add_symbol("<eps>") == 0
        assert syms.add_symbol("a") == 1
        assert syms.add_symbol("a") == 1
        assert syms.add_symbol("z", 10) == 10
        assert syms.add_symbol("b") == 11

    def test_file_round_trip(self, tmp_path):
        from symbol_utils import SymbolTable

        syms = SymbolTable.from_str(PHONES_TXT)
        path = tmp_path / "phones.txt"
        syms.write(path)

        again = SymbolTable.from_file(path)
        assert list(again.items()) == list(syms.items())
        assert path.read_text() == PHONES_TXT

    def test_missing_file(self, tmp_path):
        from symbol_utils import SymbolTable

        with pytest.raises(FileNotFoundError):
            SymbolTable.from_file(tmp_path / "nope.txt")
