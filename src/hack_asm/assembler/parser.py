"""
Hack Assembly Language Parser
=============================

This module converts source lines into typed instruction records that the
code generator can process. Each logical line yields exactly one record.

Instruction Types
-----------------
1. **Address**: A-instruction, loads a 15-bit value into A
   ```asm
   @256            // numeric
   @LOOP           // label or variable
   ```

2. **Label**: pseudo-instruction binding a name to the next pc
   ```asm
   (LOOP)
   ```

3. **Compute**: C-instruction, ``[dest=]comp[;jump]``
   ```asm
   D=M
   AM=M-1
   0;JMP
   ```

Grammar
-------
The choice is made on the first character of the line::

    instruction := label | address | compute
    label       := '(' identifier ')'
    address     := '@' ( nonneg_decimal | identifier )
    compute     := [dest '='] comp [';' jump]

The whole line must be consumed; leftover text is a ParseError. Lines
handed to ``parse_line`` must already be stripped of comments and
surrounding whitespace. ``parse_source`` does that stripping for a whole
file and skips blank lines.
"""

from dataclasses import dataclass, field
from typing import Optional
import logging

from hack_asm.errors import ParseError, SourceLocation
from hack_asm.assembler.lexer import (
    Lexer,
    RESERVED_CHARS,
    is_decimal,
    is_identifier,
    strip_comment,
)
from hack_asm.cpu import COMP_MNEMONICS, JUMP_MNEMONICS

logger = logging.getLogger(__name__)


# =============================================================================
# Instruction Data Classes
# =============================================================================
# location and source_line are excluded from comparison so that records
# built by hand compare equal to records parsed from a file.
# =============================================================================

@dataclass
class Instruction:
    """Base class for all parsed instructions."""

    @property
    def text(self) -> str:
        """Canonical source spelling of the instruction."""
        raise NotImplementedError


@dataclass
class Address(Instruction):
    """
    A-instruction ``@symbol``.

    Attributes:
        symbol: Decimal literal or symbol name, without the ``@``
    """
    symbol: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)
    source_line: Optional[str] = field(default=None, compare=False, repr=False)

    @property
    def text(self) -> str:
        return f"@{self.symbol}"


@dataclass
class Label(Instruction):
    """
    Label declaration ``(name)``. Emits no word.

    Attributes:
        name: Label name, without the parentheses
    """
    name: str
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)
    source_line: Optional[str] = field(default=None, compare=False, repr=False)

    @property
    def text(self) -> str:
        return f"({self.name})"


@dataclass
class Compute(Instruction):
    """
    C-instruction ``[dest=]comp[;jump]``.

    Attributes:
        dest: Destination mnemonic, or None (encodes 000)
        comp: Computation mnemonic (mandatory)
        jump: Jump mnemonic, or None (encodes 000)
    """
    dest: Optional[str]
    comp: str
    jump: Optional[str] = None
    location: Optional[SourceLocation] = field(default=None, compare=False, repr=False)
    source_line: Optional[str] = field(default=None, compare=False, repr=False)

    @property
    def text(self) -> str:
        result = self.comp
        if self.dest is not None:
            result = f"{self.dest}={result}"
        if self.jump is not None:
            result = f"{result};{self.jump}"
        return result


# =============================================================================
# Line Parser
# =============================================================================

def _location_at(location: Optional[SourceLocation], offset: int) -> Optional[SourceLocation]:
    """Shift a line-start location right by offset characters."""
    if location is None:
        return None
    return location.at_column(location.column + offset)


def _first_invalid_char(text: str) -> int:
    """Index of the first character not allowed in an identifier."""
    for i, ch in enumerate(text):
        if ch in RESERVED_CHARS or ch.isspace():
            return i
    return len(text)


def parse_line(
    text: str,
    location: Optional[SourceLocation] = None,
    source_line: Optional[str] = None,
) -> Instruction:
    """
    Parse one stripped source line into an instruction.

    Args:
        text: The instruction text (no comment, no surrounding whitespace)
        location: Location of the first character of text (optional)
        source_line: Original source line, for error context (optional)

    Returns:
        An Address, Label or Compute record

    Raises:
        ParseError: If the line does not match the grammar
    """
    if source_line is None:
        source_line = text

    def fail(message: str, offset: int, hint: Optional[str] = None) -> ParseError:
        return ParseError(
            message,
            text=text,
            location=_location_at(location, offset),
            hint=hint,
            source_line=source_line if location is not None else None,
        )

    if not text:
        raise fail("empty instruction", 0)

    first = text[0]

    if first == "(":
        close = text.find(")")
        if close < 0:
            raise fail(f"unterminated label '{text}'", len(text), hint="expected ')'")
        name = text[1:close]
        if not name:
            raise fail("empty label name", 1)
        if not is_identifier(name):
            bad = _first_invalid_char(name)
            raise fail(f"invalid character {name[bad]!r} in label '{name}'", 1 + bad)
        if close != len(text) - 1:
            raise fail(f"unexpected text after label: '{text[close + 1:]}'", close + 1)
        return Label(name, location=location, source_line=source_line)

    if first == "@":
        operand = text[1:]
        if not operand:
            raise fail("missing operand after '@'", 1,
                       hint="expected a decimal constant or a symbol name")
        if not (is_decimal(operand) or is_identifier(operand)):
            bad = _first_invalid_char(operand)
            raise fail(f"invalid character {operand[bad]!r} in address '{operand}'", 1 + bad)
        return Address(operand, location=location, source_line=source_line)

    return _parse_compute(text, location, source_line, fail)


def _parse_compute(text, location, source_line, fail) -> Compute:
    """Parse ``[dest=]comp[;jump]`` with longest-match scanning."""
    lexer = Lexer(text)

    dest = lexer.match_dest()

    comp = lexer.match_comp()
    if comp is None:
        if dest is not None:
            found = lexer.remaining()
            message = (
                f"unknown comp '{found}'" if found
                else f"missing comp after '{dest.value}='"
            )
        else:
            message = f"unrecognized instruction '{text}'"
        raise fail(message, lexer.pos,
                   hint=f"comp must be one of {', '.join(sorted(COMP_MNEMONICS))}")

    jump = None
    if lexer.peek() == ";":
        jump = lexer.match_jump()
        if jump is None:
            raise fail(f"unknown jump '{lexer.remaining()[1:]}'", lexer.pos + 1,
                       hint=f"jump must be one of {', '.join(JUMP_MNEMONICS)}")

    if not lexer.at_end():
        raise fail(f"unexpected text '{lexer.remaining()}' in '{text}'", lexer.pos)

    return Compute(
        dest=dest.value if dest else None,
        comp=comp.value,
        jump=jump.value if jump else None,
        location=location,
        source_line=source_line,
    )


# =============================================================================
# Source Parser
# =============================================================================

class Parser:
    """
    Parses a complete source file into a list of instructions.

    Comments and surrounding whitespace are stripped from each line and
    blank lines are skipped before the remaining text reaches
    ``parse_line``. Parsing stops at the first malformed line.

    Usage:
        parser = Parser("Prog.asm")
        instructions = parser.parse(source_text)
    """

    def __init__(self, filename: str = "<input>"):
        self.filename = filename

    def parse(self, source: str) -> list[Instruction]:
        """
        Parse source text.

        Raises:
            ParseError: On the first malformed line
        """
        instructions: list[Instruction] = []

        # Only \n (optionally preceded by \r) ends a line, as in an editor
        for lineno, raw in enumerate(source.split("\n"), start=1):
            raw = raw.removesuffix("\r")
            text = strip_comment(raw)
            if not text:
                continue
            indent = len(raw) - len(raw.lstrip())
            location = SourceLocation(self.filename, lineno, indent + 1)
            instructions.append(parse_line(text, location, source_line=raw.rstrip()))

        logger.debug("Parsed %d instructions from %s", len(instructions), self.filename)
        return instructions


def parse_source(source: str, filename: str = "<input>") -> list[Instruction]:
    """
    Convenience function to parse a whole source text.

    Args:
        source: Assembly source code
        filename: Name used in error locations

    Returns:
        List of instructions in source order
    """
    return Parser(filename).parse(source)
