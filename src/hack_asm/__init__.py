"""
Hack Assembler - Nand2Tetris Machine Language Toolchain
=======================================================

This package assembles programs written in the Hack assembly language,
the instruction set of the 16-bit computer built in "The Elements of
Computing Systems" (Nand2Tetris), into Hack machine code.

Main Components
---------------
- **assembler**: Parser, symbol table and two-pass code generator
- **cpu**: Hack instruction encoding tables and memory map constants
- **cli**: The ``hackasm`` command-line tool

Quick Start
-----------
Assemble a program:
    >>> from hack_asm import Assembler
    >>> asm = Assembler()
    >>> words = asm.assemble_file("Max.asm")
    >>> asm.write_hack("Max.hack")

Work with the core API directly:
    >>> from hack_asm import parse_line, assemble
    >>> assemble([parse_line("0;JMP")])
    [60039]

Or use the command-line tool:
    $ hackasm Max.asm Max.hack

Reference Documentation
-----------------------
- Hack machine language: https://www.nand2tetris.org/project06
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from hack_asm.assembler import (
    Assembler,
    Address,
    Label,
    Compute,
    Instruction,
    parse_line,
    parse_source,
    assemble,
    assemble_source,
    assemble_file,
)
from hack_asm.config import AssemblerConfig
from hack_asm.errors import (
    HackError,
    AssemblerError,
    ParseError,
    AssembleError,
    UnknownMnemonicError,
    BadAddressLiteralError,
    DuplicateLabelError,
    SymbolTableFullError,
    SourceLocation,
)

__all__ = [
    "__version__",
    # Assembler
    "Assembler",
    "AssemblerConfig",
    "Address",
    "Label",
    "Compute",
    "Instruction",
    "parse_line",
    "parse_source",
    "assemble",
    "assemble_source",
    "assemble_file",
    # Exception hierarchy
    "HackError",
    "AssemblerError",
    "ParseError",
    "AssembleError",
    "UnknownMnemonicError",
    "BadAddressLiteralError",
    "DuplicateLabelError",
    "SymbolTableFullError",
    "SourceLocation",
]
