# =============================================================================
# test_symbols.py - Symbol Table Tests
# =============================================================================
# Tests for predefined symbols, label binding and variable allocation.
# =============================================================================

import logging

import pytest
from hack_asm.assembler.symbols import SymbolKind, SymbolTable
from hack_asm.cpu import PREDEFINED_SYMBOLS
from hack_asm.errors import (
    DuplicateLabelError,
    SourceLocation,
    SymbolTableFullError,
)


# =============================================================================
# Predefined Symbols
# =============================================================================

class TestPredefined:
    """The 23 architecture symbols are always present."""

    def test_count(self):
        assert len(PREDEFINED_SYMBOLS) == 23

    @pytest.mark.parametrize("name,value", [
        ("SP", 0), ("LCL", 1), ("ARG", 2), ("THIS", 3), ("THAT", 4),
        ("R0", 0), ("R7", 7), ("R15", 15),
        ("SCREEN", 16384), ("KBD", 24576),
    ])
    def test_values(self, name, value):
        table = SymbolTable()
        assert table.resolve(name) == value
        assert table.lookup(name).kind == SymbolKind.PREDEFINED

    def test_predefined_not_user_symbols(self):
        assert SymbolTable().user_symbols() == []


# =============================================================================
# Labels
# =============================================================================

class TestLabels:
    """Test label binding."""

    def test_define(self):
        table = SymbolTable()
        table.define_label("LOOP", 4)
        assert table.resolve("LOOP") == 4
        assert table.labels == {"LOOP": 4}

    def test_duplicate(self):
        table = SymbolTable()
        first = SourceLocation("p.asm", 1, 1)
        table.define_label("LOOP", 0, location=first)
        with pytest.raises(DuplicateLabelError) as exc_info:
            table.define_label("LOOP", 3, location=SourceLocation("p.asm", 5, 1))
        err = exc_info.value
        assert err.name == "LOOP"
        assert err.original_location == first
        assert "first declared at p.asm:1:1" in str(err)

    def test_label_does_not_use_variable_space(self):
        table = SymbolTable()
        table.define_label("END", 10)
        assert table.next_variable == 16

    def test_shadowing_predefined_warns(self, caplog):
        table = SymbolTable()
        with caplog.at_level(logging.WARNING, logger="hack_asm.assembler.symbols"):
            table.define_label("SP", 7)
        assert "shadows a predefined symbol" in caplog.text
        # Predefined value still wins
        assert table.resolve("SP") == 0


# =============================================================================
# Variables
# =============================================================================

class TestVariables:
    """Test sequential variable allocation."""

    def test_first_variable_at_16(self):
        table = SymbolTable()
        assert table.resolve("i") == 16

    def test_sequential(self):
        table = SymbolTable()
        assert [table.resolve(n) for n in ("a", "b", "c")] == [16, 17, 18]

    def test_reuse(self):
        table = SymbolTable()
        table.resolve("i")
        table.resolve("j")
        assert table.resolve("i") == 16
        assert table.next_variable == 18

    def test_labels_take_precedence(self):
        table = SymbolTable()
        table.define_label("x", 3)
        assert table.resolve("x") == 3
        assert table.variables == {}

    def test_exhaustion(self):
        table = SymbolTable(variable_limit=18)
        table.resolve("a")
        table.resolve("b")
        with pytest.raises(SymbolTableFullError) as exc_info:
            table.resolve("c")
        assert exc_info.value.symbol == "c"
        assert exc_info.value.limit == 18

    def test_full_ram_range(self):
        """Variables fill 16..16383; the next one fails."""
        table = SymbolTable()
        for i in range(16384 - 16):
            table.allocate_variable(f"v{i}")
        assert table.variables["v16367"] == 16383
        with pytest.raises(SymbolTableFullError):
            table.allocate_variable("overflow")

    def test_existing_variable_when_full(self):
        table = SymbolTable(variable_limit=17)
        table.resolve("a")
        assert table.resolve("a") == 16


# =============================================================================
# Views
# =============================================================================

class TestViews:
    """Test dictionary and list views of the table."""

    def test_as_dict(self):
        table = SymbolTable()
        table.define_label("LOOP", 2)
        table.resolve("n")
        result = table.as_dict()
        assert result["LOOP"] == 2
        assert result["n"] == 16
        assert result["KBD"] == 24576

    def test_user_symbols_sorted(self):
        table = SymbolTable()
        table.resolve("zeta")
        table.define_label("ALPHA", 0)
        table.resolve("mid")
        names = [sym.name for sym in table.user_symbols()]
        assert names == ["ALPHA", "mid", "zeta"]

    def test_contains(self):
        table = SymbolTable()
        assert "R5" in table
        assert "unknown" not in table
