"""
Hack Code Generator
===================

This module generates Hack machine words from parsed instructions using a
two-pass process.

Pass 1 (Label Binding)
----------------------
- Walk every instruction with a program counter starting at 0
- Bind each ``(NAME)`` to the current pc without advancing it
- Advance pc by one for every Address and Compute

Pass 2 (Encoding)
-----------------
- Emit one word per Address and Compute, skip Labels
- Resolve ``@symbol`` operands: literal, predefined, label, then variable
- Allocate new variables from address 16 upward

Two passes are needed because ``@LOOP`` may appear before ``(LOOP)``.

Word Layout
-----------
```
A-instruction:  0vvv vvvv vvvv vvvv
C-instruction:  111a cccc ccdd djjj
```
"""

from dataclasses import dataclass
from typing import Iterable, Optional
import logging

from hack_asm.errors import (
    AssembleError,
    BadAddressLiteralError,
    UnknownMnemonicError,
)
from hack_asm.assembler.lexer import is_decimal, is_negative_decimal
from hack_asm.assembler.parser import Address, Compute, Instruction, Label
from hack_asm.assembler.symbols import SymbolTable
from hack_asm.cpu import (
    COMPUTE_PREFIX,
    COMP_SHIFT,
    COMP_TABLE,
    DEST_SHIFT,
    DEST_TABLE,
    JUMP_SHIFT,
    JUMP_TABLE,
    MAX_ADDRESS,
    get_comp_code,
    get_dest_code,
    get_jump_code,
    is_valid_address,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Emitted Word Record
# =============================================================================

@dataclass(frozen=True)
class EmittedWord:
    """
    One machine word together with the instruction that produced it.

    Attributes:
        pc: ROM address of the word
        word: The 16-bit value
        instruction: Source instruction (Address or Compute)
    """
    pc: int
    word: int
    instruction: Instruction


# =============================================================================
# Instruction Encoders
# =============================================================================

def encode_compute(inst: Compute) -> int:
    """
    Encode a C-instruction.

    Raises:
        UnknownMnemonicError: If dest, comp or jump is not a Hack mnemonic
    """
    dest = get_dest_code(inst.dest)
    if dest is None:
        raise UnknownMnemonicError(
            "dest", inst.dest, inst.location, inst.source_line,
            valid=list(DEST_TABLE),
        )

    comp = get_comp_code(inst.comp)
    if comp is None:
        raise UnknownMnemonicError(
            "comp", inst.comp, inst.location, inst.source_line,
            valid=list(COMP_TABLE),
        )

    jump = get_jump_code(inst.jump)
    if jump is None:
        raise UnknownMnemonicError(
            "jump", inst.jump, inst.location, inst.source_line,
            valid=list(JUMP_TABLE),
        )

    return COMPUTE_PREFIX | (comp << COMP_SHIFT) | (dest << DEST_SHIFT) | (jump << JUMP_SHIFT)


def encode_address(value: int) -> int:
    """Encode an A-instruction carrying an already resolved 15-bit value."""
    if not is_valid_address(value):
        raise BadAddressLiteralError(str(value))
    return value


# =============================================================================
# Code Generator
# =============================================================================

class CodeGenerator:
    """
    Generates Hack words from a sequence of instructions.

    The code generator maintains:
    - A fresh symbol table per run
    - The list of emitted words with their pcs and source instructions

    Usage:
        codegen = CodeGenerator()
        words = codegen.generate(instructions)
        labels = codegen.get_labels()
    """

    def __init__(self):
        self._symbols = SymbolTable()
        self._emitted: list[EmittedWord] = []

    # =========================================================================
    # Public Interface
    # =========================================================================

    def generate(self, instructions: Iterable[Instruction]) -> list[int]:
        """
        Translate instructions into machine words.

        Args:
            instructions: Instructions in source order

        Returns:
            One 16-bit word per Address/Compute, in order

        Raises:
            AssembleError: On the first instruction that cannot be translated
        """
        instructions = list(instructions)

        # Reset state for fresh assembly
        self._symbols = SymbolTable()
        self._emitted = []

        try:
            self._pass1(instructions)
            self._pass2(instructions)
        except AssembleError:
            # Partial output is never exposed
            self._symbols = SymbolTable()
            self._emitted = []
            raise

        logger.debug(
            "Generated %d words (%d labels, %d variables)",
            len(self._emitted), len(self._symbols.labels), len(self._symbols.variables),
        )
        return self.get_words()

    def get_words(self) -> list[int]:
        return [entry.word for entry in self._emitted]

    def get_emitted(self) -> list[EmittedWord]:
        return list(self._emitted)

    def get_symbol_table(self) -> SymbolTable:
        return self._symbols

    def get_symbols(self) -> dict[str, int]:
        """Return every visible symbol, predefined included."""
        return self._symbols.as_dict()

    def get_labels(self) -> dict[str, int]:
        return self._symbols.labels

    def get_variables(self) -> dict[str, int]:
        return self._symbols.variables

    # =========================================================================
    # Pass 1: Label Binding
    # =========================================================================

    def _pass1(self, instructions: list[Instruction]) -> None:
        """Bind every label to the pc of the next real instruction."""
        pc = 0
        for inst in instructions:
            if isinstance(inst, Label):
                self._symbols.define_label(
                    inst.name, pc,
                    location=inst.location,
                    source_line=inst.source_line,
                )
            else:
                pc += 1

    # =========================================================================
    # Pass 2: Encoding
    # =========================================================================

    def _pass2(self, instructions: list[Instruction]) -> None:
        """Emit a word for every Address and Compute."""
        for inst in instructions:
            if isinstance(inst, Label):
                continue

            if isinstance(inst, Address):
                word = encode_address(self._resolve_address(inst))
            elif isinstance(inst, Compute):
                word = encode_compute(inst)
            else:
                raise AssembleError(
                    f"unsupported instruction {inst!r}",
                    location=getattr(inst, "location", None),
                )

            self._emitted.append(EmittedWord(len(self._emitted), word, inst))

    def _resolve_address(self, inst: Address) -> int:
        """
        Resolve an A-instruction operand.

        Order: decimal literal, predefined symbol, label, existing or
        newly allocated variable.
        """
        symbol = inst.symbol

        if is_decimal(symbol) or is_negative_decimal(symbol):
            # Too many significant digits for 15 bits; int() never sees these
            digits = symbol.lstrip("-").lstrip("0")
            if len(digits) > len(str(MAX_ADDRESS)):
                raise BadAddressLiteralError(
                    symbol, location=inst.location, source_line=inst.source_line
                )
            value = int(symbol)
            if not is_valid_address(value):
                raise BadAddressLiteralError(
                    symbol, location=inst.location, source_line=inst.source_line
                )
            return value

        return self._symbols.resolve(
            symbol, location=inst.location, source_line=inst.source_line
        )


# =============================================================================
# Convenience Function
# =============================================================================

def assemble(instructions: Iterable[Instruction]) -> list[int]:
    """
    Assemble a sequence of instructions into 16-bit words.

    Args:
        instructions: Parsed instructions in source order

    Returns:
        Machine words in emission order

    Raises:
        AssembleError: On duplicate label, unknown mnemonic, bad address
            literal or variable space exhaustion
    """
    return CodeGenerator().generate(instructions)
