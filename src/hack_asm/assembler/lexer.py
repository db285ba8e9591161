"""
Hack Assembly Lexer
===================

This module implements the lexical layer of the Hack assembler: comment
stripping for raw source lines, and the longest-match scanners for the
three sub-fields of a compute instruction.

Token Types
-----------
- DEST: destination register set, followed by ``=`` (``AM=``)
- COMP: one of the 28 ALU computations (``D+1``, ``!M``)
- JUMP: jump condition, preceded by ``;`` (``;JGT``)

Longest Match
-------------
Several alternatives are prefixes of each other (``AMD``/``AM``/``A``,
``D+1``/``D``). The scanners try candidates in descending length order, so
``D+1`` is never read as ``D`` followed by stray ``+1``.

Comments
--------
``//`` starts a comment that runs to the end of the line. Whitespace is
only allowed around an instruction, never inside it.

Example
-------
>>> from hack_asm.assembler.lexer import Lexer
>>> lexer = Lexer("AM=M+1;JGT")
>>> lexer.match_dest()
Token(DEST, 'AM', 1)
>>> lexer.match_comp()
Token(COMP, 'M+1', 4)
>>> lexer.match_jump()
Token(JUMP, 'JGT', 8)
>>> lexer.at_end()
True
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional
import re

from hack_asm.cpu import DEST_MNEMONICS, COMP_MNEMONICS, JUMP_MNEMONICS


# =============================================================================
# Character Classes
# =============================================================================

COMMENT_MARKER = "//"

# Characters that may never appear in a label or symbol name
RESERVED_CHARS = frozenset("()@;=")

DECIMAL_RE = re.compile(r"^[0-9]+$")
SIGNED_DECIMAL_RE = re.compile(r"^-[0-9]+$")


def strip_comment(line: str) -> str:
    """Remove a trailing ``//`` comment and surrounding whitespace."""
    index = line.find(COMMENT_MARKER)
    if index >= 0:
        line = line[:index]
    return line.strip()


def is_identifier(text: str) -> bool:
    """
    Check whether text is a valid label or symbol name.

    Any non-empty run of characters is accepted except whitespace and the
    reserved punctuation ``( ) @ ; =``.
    """
    if not text:
        return False
    return not any(ch in RESERVED_CHARS or ch.isspace() for ch in text)


def is_decimal(text: str) -> bool:
    """True for a non-negative decimal literal such as ``256``."""
    return bool(DECIMAL_RE.match(text))


def is_negative_decimal(text: str) -> bool:
    """True for a negative decimal literal such as ``-1``."""
    return bool(SIGNED_DECIMAL_RE.match(text))


# =============================================================================
# Token Types
# =============================================================================

class TokenType(Enum):
    """Sub-fields of a compute instruction."""
    DEST = auto()
    COMP = auto()
    JUMP = auto()


@dataclass(frozen=True)
class Token:
    """
    A matched compute sub-field.

    Attributes:
        type: The TokenType classification
        value: The mnemonic text, verbatim (without ``=`` or ``;``)
        column: Column of the first character in the line (1-indexed)
    """
    type: TokenType
    value: str
    column: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.column})"


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Scans a single stripped instruction line left to right.

    Each ``match_*`` method either consumes a token and returns it, or
    leaves the position untouched and returns None. The parser decides
    what a failed match means.

    Attributes:
        text: The line being scanned
        pos: Index of the next unread character (0-indexed)
    """

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    @property
    def column(self) -> int:
        """Current position as a 1-indexed column."""
        return self.pos + 1

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def remaining(self) -> str:
        return self.text[self.pos:]

    def peek(self) -> str:
        """Return the next character, or an empty string at end of line."""
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def match_dest(self) -> Optional[Token]:
        """Match ``dest=``; the ``=`` is consumed but not kept."""
        for mnemonic in DEST_MNEMONICS:
            if self.text.startswith(mnemonic + "=", self.pos):
                token = Token(TokenType.DEST, mnemonic, self.column)
                self.pos += len(mnemonic) + 1
                return token
        return None

    def match_comp(self) -> Optional[Token]:
        """Match the longest comp mnemonic at the current position."""
        for mnemonic in COMP_MNEMONICS:
            if self.text.startswith(mnemonic, self.pos):
                token = Token(TokenType.COMP, mnemonic, self.column)
                self.pos += len(mnemonic)
                return token
        return None

    def match_jump(self) -> Optional[Token]:
        """Match ``;jump``; the ``;`` is consumed but not kept."""
        if self.peek() != ";":
            return None
        for mnemonic in JUMP_MNEMONICS:
            if self.text.startswith(mnemonic, self.pos + 1):
                token = Token(TokenType.JUMP, mnemonic, self.column + 1)
                self.pos += len(mnemonic) + 1
                return token
        return None
