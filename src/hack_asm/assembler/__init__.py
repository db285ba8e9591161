"""
Hack Assembler
==============

This package translates Hack assembly (Nand2Tetris) into 16-bit machine
words.

Main Components
---------------
- **Lexer**: Longest-match scanners for dest, comp and jump fields
- **Parser**: Turns each source line into an Address, Label or Compute
- **SymbolTable**: Predefined symbols, labels and user variables
- **CodeGenerator**: Two-pass label binding and encoding
- **Assembler**: Facade that reads sources and writes ``.hack`` files

Assembly Process
----------------
1. **Parsing**: strip comments and whitespace, parse each non-blank line
2. **Pass 1**: bind every ``(LABEL)`` to the pc of the next instruction
3. **Pass 2**: encode instructions, allocating variables from RAM[16]

Example Usage
-------------
>>> from hack_asm.assembler import parse_line, assemble
>>> assemble([parse_line("@256"), parse_line("D=A")])
[256, 60432]
"""

from hack_asm.assembler.assembler import Assembler, assemble_source, assemble_file
from hack_asm.assembler.lexer import Lexer, Token, TokenType, strip_comment
from hack_asm.assembler.parser import (
    Parser,
    Instruction,
    Address,
    Label,
    Compute,
    parse_line,
    parse_source,
)
from hack_asm.assembler.symbols import Symbol, SymbolKind, SymbolTable
from hack_asm.assembler.codegen import (
    CodeGenerator,
    EmittedWord,
    assemble,
    encode_address,
    encode_compute,
)

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_source",
    "assemble_file",
    # Lexer
    "Lexer",
    "Token",
    "TokenType",
    "strip_comment",
    # Parser
    "Parser",
    "Instruction",
    "Address",
    "Label",
    "Compute",
    "parse_line",
    "parse_source",
    # Symbols
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    # Code generator
    "CodeGenerator",
    "EmittedWord",
    "encode_address",
    "encode_compute",
]
