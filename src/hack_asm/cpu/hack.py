"""
Hack Instruction Set Definitions
================================

Encoding tables for the 16-bit Hack CPU from "The Elements of Computing
Systems" (Nand2Tetris). Both the parser (which needs the mnemonic sets to
drive its longest-match scanner) and the code generator (which needs the
bit patterns) use these definitions.

Instruction Formats
-------------------
A-instruction (address)::

    0 vvvvvvvvvvvvvvv        v = 15-bit address or constant

C-instruction (compute)::

    1 1 1 a c1 c2 c3 c4 c5 c6 d1 d2 d3 j1 j2 j3
          |--- comp (7) ---| |dest| |jump|

Memory Map
----------
| Range         | Use                          |
|---------------|------------------------------|
| 0..15         | virtual registers R0..R15    |
| 16..16383     | user variables (allocated)   |
| 16384..24575  | screen memory map (SCREEN)   |
| 24576         | keyboard register (KBD)      |

Reference: https://www.nand2tetris.org/project06
"""

from enum import Enum
from typing import Optional


# =============================================================================
# Word Layout Constants
# =============================================================================

WORD_BITS = 16

# Top three bits of every C-instruction
COMPUTE_PREFIX = 0b111 << 13

COMP_SHIFT = 6
DEST_SHIFT = 3
JUMP_SHIFT = 0

# A-instruction payload: bit 15 is zero, bits 14-0 carry the value
ADDRESS_BITS = 15
MAX_ADDRESS = (1 << ADDRESS_BITS) - 1     # 32767

# User variables are allocated from just above R15 up to the screen map
VARIABLE_BASE = 16
VARIABLE_LIMIT = 0x4000                   # 16384 (== SCREEN)


class InstructionKind(Enum):
    """Classification of an emitted word by its top bit(s)."""
    ADDRESS = "A"
    COMPUTE = "C"


# =============================================================================
# Dest Field (bits 5-3)
# =============================================================================
# The dest code is a 3-bit mask: bit 2 = A, bit 1 = D, bit 0 = M.
# ADM is accepted as an alias of AMD.
# =============================================================================

DEST_TABLE: dict[str, int] = {
    "M":   0b001,
    "D":   0b010,
    "MD":  0b011,
    "A":   0b100,
    "AM":  0b101,
    "AD":  0b110,
    "AMD": 0b111,
    "ADM": 0b111,
}

# =============================================================================
# Comp Field (bits 12-6: a c1..c6)
# =============================================================================

COMP_TABLE: dict[str, int] = {
    # a = 0 (operate on A)
    "0":   0b0_101010,
    "1":   0b0_111111,
    "-1":  0b0_111010,
    "D":   0b0_001100,
    "A":   0b0_110000,
    "!D":  0b0_001101,
    "!A":  0b0_110001,
    "-D":  0b0_001111,
    "-A":  0b0_110011,
    "D+1": 0b0_011111,
    "A+1": 0b0_110111,
    "D-1": 0b0_001110,
    "A-1": 0b0_110010,
    "D+A": 0b0_000010,
    "D-A": 0b0_010011,
    "A-D": 0b0_000111,
    "D&A": 0b0_000000,
    "D|A": 0b0_010101,
    # a = 1 (operate on M)
    "M":   0b1_110000,
    "!M":  0b1_110001,
    "-M":  0b1_110011,
    "M+1": 0b1_110111,
    "M-1": 0b1_110010,
    "D+M": 0b1_000010,
    "D-M": 0b1_010011,
    "M-D": 0b1_000111,
    "D&M": 0b1_000000,
    "D|M": 0b1_010101,
}

# =============================================================================
# Jump Field (bits 2-0)
# =============================================================================

JUMP_TABLE: dict[str, int] = {
    "JGT": 0b001,
    "JEQ": 0b010,
    "JGE": 0b011,
    "JLT": 0b100,
    "JNE": 0b101,
    "JLE": 0b110,
    "JMP": 0b111,
}


def _longest_first(mnemonics) -> tuple[str, ...]:
    # Stable sort keeps table order among equal lengths
    return tuple(sorted(mnemonics, key=len, reverse=True))


# Scan order for the parser. Prefix-ambiguous alternatives (AMD/AM/A,
# D+1/D) must be tried longest first.
DEST_MNEMONICS = _longest_first(DEST_TABLE)
COMP_MNEMONICS = _longest_first(COMP_TABLE)
JUMP_MNEMONICS = tuple(JUMP_TABLE)


# =============================================================================
# Predefined Symbols
# =============================================================================

PREDEFINED_SYMBOLS: dict[str, int] = {
    "SP": 0,
    "LCL": 1,
    "ARG": 2,
    "THIS": 3,
    "THAT": 4,
    **{f"R{i}": i for i in range(16)},
    "SCREEN": 0x4000,
    "KBD": 0x6000,
}


# =============================================================================
# Lookup Functions
# =============================================================================

def get_dest_code(dest: Optional[str]) -> Optional[int]:
    """
    Return the 3-bit dest code, 0 for a missing dest, or None if unknown.
    """
    if dest is None:
        return 0
    return DEST_TABLE.get(dest)


def get_comp_code(comp: str) -> Optional[int]:
    """Return the 7-bit comp code (a + c1..c6) or None if unknown."""
    return COMP_TABLE.get(comp)


def get_jump_code(jump: Optional[str]) -> Optional[int]:
    """Return the 3-bit jump code, 0 for a missing jump, or None if unknown."""
    if jump is None:
        return 0
    return JUMP_TABLE.get(jump)


def is_valid_address(value: int) -> bool:
    """True if value fits the 15-bit A-instruction payload."""
    return 0 <= value <= MAX_ADDRESS


def classify_word(word: int) -> InstructionKind:
    """Tell A-instructions from C-instructions by bit 15."""
    return InstructionKind.COMPUTE if word & 0x8000 else InstructionKind.ADDRESS


def format_word(word: int) -> str:
    """Render a word as 16 binary digits, most significant bit first."""
    return format(word & 0xFFFF, f"0{WORD_BITS}b")
