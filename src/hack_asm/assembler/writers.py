"""
Output Formatting
=================

Text renderings of an assembly run:

- ``.hack``: one word per line, 16 ASCII ``0``/``1`` characters, MSB first
- listing: pc, hex and binary word, source line, instruction text
- symbol file: user labels and variables with their addresses
"""

from pathlib import Path
from typing import Iterable

from hack_asm.assembler.codegen import EmittedWord
from hack_asm.assembler.parser import Instruction, Label
from hack_asm.assembler.symbols import Symbol
from hack_asm.cpu import format_word


def to_hack_lines(words: Iterable[int]) -> list[str]:
    return [format_word(word) for word in words]


def to_hack_text(words: Iterable[int]) -> str:
    """Render words in ``.hack`` format, newline terminated."""
    return "".join(line + "\n" for line in to_hack_lines(words))


def write_hack(words: Iterable[int], filepath: str | Path) -> None:
    with open(filepath, "w", encoding="ascii", newline="\n") as f:
        f.write(to_hack_text(words))


def format_listing(
    instructions: list[Instruction],
    emitted: list[EmittedWord],
    symbols: list[Symbol],
) -> str:
    """
    Build an assembly listing.

    Labels appear on their own line with the pc they are bound to; every
    other instruction is shown next to the word it produced.
    """
    lines = []
    lines.append("Hack Assembler Listing")
    lines.append("=" * 60)
    lines.append("")
    lines.append("   PC  Hex   Binary            Line  Source")
    lines.append("-" * 60)

    # Emitted words follow the non-label instructions one for one
    words = iter(emitted)
    pc = 0
    for inst in instructions:
        line_no = f"{inst.location.line:4d}" if inst.location else "    "
        if isinstance(inst, Label):
            lines.append(f"{pc:5d}  {'':4s}  {'':16s}  {line_no}  {inst.text}")
            continue
        entry = next(words)
        lines.append(
            f"{entry.pc:5d}  {entry.word:04X}  {format_word(entry.word)}  {line_no}  {inst.text}"
        )
        pc = entry.pc + 1

    lines.append("")
    lines.append("Symbol Table")
    lines.append("-" * 30)
    for sym in symbols:
        lines.append(f"{sym.name:20s} = {sym.value:5d}  ({sym.kind.value})")
    return "\n".join(lines) + "\n"


def format_symbols(symbols: list[Symbol]) -> str:
    """Format: ``NAME ADDRESS`` (one per line), address in decimal."""
    lines = ["# Symbol table", "# Generated by hackasm"]
    lines.extend(f"{sym.name} {sym.value}" for sym in symbols)
    return "\n".join(lines) + "\n"
