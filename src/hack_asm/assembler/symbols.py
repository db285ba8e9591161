"""
Hack Symbol Table
=================

Symbol resolution for the Hack assembler. Three layers are consulted in
precedence order:

1. **Predefined** - the 23 architecture symbols (SP, LCL, ARG, THIS, THAT,
   R0..R15, SCREEN, KBD). Never overwritten.
2. **Labels** - bound by pass 1 to the pc of the next real instruction.
3. **Variables** - allocated on first use during pass 2, sequentially from
   address 16.

A fresh table is created for every assembly run.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from hack_asm.errors import (
    DuplicateLabelError,
    SourceLocation,
    SymbolTableFullError,
)
from hack_asm.cpu import PREDEFINED_SYMBOLS, VARIABLE_BASE, VARIABLE_LIMIT

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    """Which layer of the table a symbol lives in."""
    PREDEFINED = "predefined"
    LABEL = "label"
    VARIABLE = "variable"


@dataclass(frozen=True)
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name
        value: Resolved address
        kind: Layer the symbol was bound in
        location: Where the symbol was declared or first used (optional)
    """
    name: str
    value: int
    kind: SymbolKind
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Layered name → address mapping with an explicit variable allocator.

    The next-free-variable counter starts at ``VARIABLE_BASE`` (16) and is
    independent of how many predefined names exist.
    """

    def __init__(self, variable_base: int = VARIABLE_BASE,
                 variable_limit: int = VARIABLE_LIMIT):
        self._predefined: dict[str, Symbol] = {
            name: Symbol(name, value, SymbolKind.PREDEFINED)
            for name, value in PREDEFINED_SYMBOLS.items()
        }
        self._labels: dict[str, Symbol] = {}
        self._variables: dict[str, Symbol] = {}
        self._variable_limit = variable_limit
        self.next_variable = variable_base

    # =========================================================================
    # Binding
    # =========================================================================

    def define_label(self, name: str, pc: int,
                     location: Optional[SourceLocation] = None,
                     source_line: Optional[str] = None) -> Symbol:
        """
        Bind a label to a program counter value.

        Raises:
            DuplicateLabelError: If the label was already bound
        """
        existing = self._labels.get(name)
        if existing is not None:
            raise DuplicateLabelError(
                name,
                location=location,
                original_location=existing.location,
                source_line=source_line,
            )

        if name in self._predefined:
            # Predefined names win at lookup, so @NAME never reaches this label
            logger.warning(
                "label '%s' shadows a predefined symbol and cannot be referenced",
                name,
            )

        symbol = Symbol(name, pc, SymbolKind.LABEL, location)
        self._labels[name] = symbol
        logger.debug("label %s = %d", name, pc)
        return symbol

    def allocate_variable(self, name: str,
                          location: Optional[SourceLocation] = None,
                          source_line: Optional[str] = None) -> Symbol:
        """
        Allocate the next free RAM address for a new variable.

        Raises:
            SymbolTableFullError: If the counter has reached the limit
        """
        if self.next_variable >= self._variable_limit:
            raise SymbolTableFullError(
                name,
                self._variable_limit,
                location=location,
                source_line=source_line,
            )

        symbol = Symbol(name, self.next_variable, SymbolKind.VARIABLE, location)
        self._variables[name] = symbol
        self.next_variable += 1
        logger.debug("variable %s = %d", name, symbol.value)
        return symbol

    # =========================================================================
    # Lookup
    # =========================================================================

    def lookup(self, name: str) -> Optional[Symbol]:
        """Return the symbol visible under name, respecting layer precedence."""
        for layer in (self._predefined, self._labels, self._variables):
            symbol = layer.get(name)
            if symbol is not None:
                return symbol
        return None

    def resolve(self, name: str,
                location: Optional[SourceLocation] = None,
                source_line: Optional[str] = None) -> int:
        """
        Resolve a symbolic address, allocating a variable on first use.

        Raises:
            SymbolTableFullError: If a new variable cannot be allocated
        """
        symbol = self.lookup(name)
        if symbol is None:
            symbol = self.allocate_variable(name, location, source_line)
        return symbol.value

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    # =========================================================================
    # Views
    # =========================================================================

    @property
    def labels(self) -> dict[str, int]:
        return {name: sym.value for name, sym in self._labels.items()}

    @property
    def variables(self) -> dict[str, int]:
        return {name: sym.value for name, sym in self._variables.items()}

    def as_dict(self) -> dict[str, int]:
        """All visible bindings, predefined included."""
        result: dict[str, int] = {}
        for layer in (self._variables, self._labels, self._predefined):
            result.update({name: sym.value for name, sym in layer.items()})
        return result

    def user_symbols(self) -> list[Symbol]:
        """Labels and variables, sorted by name."""
        merged = list(self._labels.values()) + list(self._variables.values())
        return sorted(merged, key=lambda sym: sym.name)
