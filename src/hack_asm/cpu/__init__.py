"""
Hack Assembler CPU Package
==========================

Architecture definitions for the 16-bit Hack CPU, shared by the parser
(mnemonic scan order) and the code generator (bit patterns).

Modules:
    hack: Dest/comp/jump encoding tables, predefined symbols, memory map
          constants and small lookup helpers.

Usage:
    from hack_asm.cpu import (
        COMP_TABLE,
        PREDEFINED_SYMBOLS,
        get_comp_code,
    )
"""

# =============================================================================
# Public API Exports
# =============================================================================

from hack_asm.cpu.hack import (
    # Word layout
    WORD_BITS,
    COMPUTE_PREFIX,
    COMP_SHIFT,
    DEST_SHIFT,
    JUMP_SHIFT,
    ADDRESS_BITS,
    MAX_ADDRESS,
    VARIABLE_BASE,
    VARIABLE_LIMIT,
    InstructionKind,
    # Encoding tables
    DEST_TABLE,
    COMP_TABLE,
    JUMP_TABLE,
    DEST_MNEMONICS,
    COMP_MNEMONICS,
    JUMP_MNEMONICS,
    PREDEFINED_SYMBOLS,
    # Lookup functions
    get_dest_code,
    get_comp_code,
    get_jump_code,
    is_valid_address,
    classify_word,
    format_word,
)

__all__ = [
    # Word layout
    "WORD_BITS",
    "COMPUTE_PREFIX",
    "COMP_SHIFT",
    "DEST_SHIFT",
    "JUMP_SHIFT",
    "ADDRESS_BITS",
    "MAX_ADDRESS",
    "VARIABLE_BASE",
    "VARIABLE_LIMIT",
    "InstructionKind",
    # Encoding tables
    "DEST_TABLE",
    "COMP_TABLE",
    "JUMP_TABLE",
    "DEST_MNEMONICS",
    "COMP_MNEMONICS",
    "JUMP_MNEMONICS",
    "PREDEFINED_SYMBOLS",
    # Lookup functions
    "get_dest_code",
    "get_comp_code",
    "get_jump_code",
    "is_valid_address",
    "classify_word",
    "format_word",
]
