"""
Hack Assembler Command-Line Interface
=====================================

- **hackasm**: assemble a ``.asm`` file into a ``.hack`` file

Implemented as a Click-based CLI application with unified error
reporting (see ``hack_asm.cli.errors``).
"""

__all__ = ["hackasm"]
