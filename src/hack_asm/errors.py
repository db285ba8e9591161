"""
Hack Assembler Error Hierarchy
==============================

This module defines the exception hierarchy for the Hack assembler.
All exceptions inherit from HackError, allowing callers to catch every
assembler-related error with a single except clause if desired.

Exception Hierarchy
-------------------
HackError (base)
└── AssemblerError (carries location, hint and source text)
    ├── ParseError - a source line does not match the instruction grammar
    └── AssembleError (raised while resolving symbols and encoding)
        ├── UnknownMnemonicError - dest/comp/jump token not in the ISA tables
        ├── BadAddressLiteralError - numeric @ operand outside 0..32767
        ├── DuplicateLabelError - (NAME) declared more than once
        └── SymbolTableFullError - no RAM left for another user variable

Translation is fatal at the first error: nothing in the assembler catches
and continues. Each exception captures source location information when
the failing instruction came from a parsed file, so the message points at
the offending text.

Error messages follow this format:
    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class HackError(Exception):
    """
    Base exception for all Hack assembler errors.

        try:
            assembler.assemble_file("Prog.asm")
        except HackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"

    def at_column(self, column: int) -> "SourceLocation":
        """Return a copy of this location pointing at another column."""
        return SourceLocation(self.filename, self.line, column)


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(HackError):
    """
    Base exception for parse and assembly errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            Prog.asm:7:3: error: unknown comp mnemonic 'D*A'
                D=D*A
                  ^
            hint: comp must be one of 0, 1, -1, D, A, ...
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class ParseError(AssemblerError):
    """
    A source line does not match the instruction grammar.

    Raised by the parser when a line cannot be consumed in full. The
    offending text is kept in ``text`` and the location's column points
    at the first character the parser could not match.

    Examples:
        - ``D=`` (destination without a computation)
        - ``D = A`` (whitespace inside an instruction)
        - ``0;JMPX`` (trailing text after the jump)
        - ``(LOOP`` (unterminated label)
    """

    def __init__(
        self,
        message: str,
        text: str = "",
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.text = text
        super().__init__(message, location=location, hint=hint, source_line=source_line)


class AssembleError(AssemblerError):
    """
    Base exception for errors raised while assembling parsed instructions.

    These surface from ``assemble()`` and identify the instruction that
    could not be translated.
    """
    pass


class UnknownMnemonicError(AssembleError):
    """
    A compute sub-token does not appear in the Hack encoding tables.

    The parser only produces known tokens, so this is raised for
    instruction records built by hand (or by another front end) that
    carry a dest, comp or jump the ISA does not define.
    """

    def __init__(
        self,
        field_name: str,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        valid: Optional[list[str]] = None,
    ):
        self.field_name = field_name
        self.mnemonic = mnemonic
        self.valid = valid or []

        hint = None
        if self.valid:
            hint = f"{field_name} must be one of {', '.join(self.valid)}"

        super().__init__(
            f"unknown {field_name} mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class BadAddressLiteralError(AssembleError):
    """
    Numeric operand of ``@`` does not fit in 15 bits.

    A-instructions carry the address in bits 14-0, so literals must lie
    in 0..32767. Negative literals are rejected as well.
    """

    def __init__(
        self,
        literal: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.literal = literal
        super().__init__(
            f"address literal {literal} is out of range",
            location=location,
            hint="A-instruction literals must be in the range 0..32767",
            source_line=source_line,
        )


class DuplicateLabelError(AssembleError):
    """
    Label declared more than once.

    Includes the location of the first declaration when available.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{name}' was first declared at {original_location}"

        super().__init__(
            f"duplicate label '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class SymbolTableFullError(AssembleError):
    """
    No room left to allocate another user variable.

    Variables live in RAM[16..16383]; the screen memory map starts at
    16384 (SCREEN), so the allocator stops there.
    """

    def __init__(
        self,
        symbol: str,
        limit: int,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.symbol = symbol
        self.limit = limit
        super().__init__(
            f"cannot allocate variable '{symbol}': variable space exhausted",
            location=location,
            hint=f"user variables must fit below address {limit}",
            source_line=source_line,
        )
