"""
Hack Assembler - Main Interface
===============================

This module provides the Assembler class, the primary interface for
turning Hack assembly source into machine code. It coordinates the parser
and the code generator and writes the output files.

Example Usage
-------------
>>> from hack_asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> asm.assemble_string('''
... @2
... D=A
... @3
... D=D+A
... @0
... M=D
... ''')
[2, 60432, 3, 57488, 0, 58120]
>>> asm.write_hack("Add.hack")

Command-Line Usage
------------------
    $ hackasm Prog.asm Prog.hack -l Prog.lst -s Prog.sym
"""

from pathlib import Path
from typing import Optional
import logging

from hack_asm.assembler.parser import Instruction, parse_source
from hack_asm.assembler.codegen import CodeGenerator, EmittedWord
from hack_asm.assembler import writers
from hack_asm.config import AssemblerConfig

logger = logging.getLogger(__name__)


class Assembler:
    """
    Main Hack assembler class.

    Each call to ``assemble_string`` or ``assemble_file`` starts from a
    fresh symbol table; results of the latest run stay available through
    the getters and ``write_*`` methods.

    Attributes:
        config: Settings for this assembler
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self.config = config or AssemblerConfig()
        self._codegen = CodeGenerator()
        self._instructions: list[Instruction] = []
        self._source_file: Optional[Path] = None

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_string(self, source: str, filename: str = "<input>") -> list[int]:
        """
        Assemble source code from a string.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages

        Returns:
            Machine words in emission order

        Raises:
            ParseError: If a line is malformed
            AssembleError: If the program cannot be translated
        """
        logger.debug("Assembling %s", filename)

        # A failed run leaves no results behind
        self._instructions = []
        self._codegen = CodeGenerator()

        instructions = parse_source(source, filename)
        words = self._codegen.generate(instructions)
        self._instructions = instructions

        if self.config.verbose:
            logger.info(
                "%s: %d instructions, %d words",
                filename, len(self._instructions), len(words),
            )
        return words

    def assemble_file(self, filepath: str | Path) -> list[int]:
        """
        Assemble source code from a file.

        Raises:
            ParseError, AssembleError: If assembly fails
            FileNotFoundError: If the source file does not exist
        """
        filepath = Path(filepath)
        self._source_file = filepath
        source = filepath.read_text(encoding="utf-8")
        return self.assemble_string(source, str(filepath))

    # =========================================================================
    # Results
    # =========================================================================

    def get_words(self) -> list[int]:
        return self._codegen.get_words()

    def get_instructions(self) -> list[Instruction]:
        return list(self._instructions)

    def get_emitted(self) -> list[EmittedWord]:
        return self._codegen.get_emitted()

    def get_symbols(self) -> dict[str, int]:
        """
        Get the symbol table.

        Returns:
            Dictionary mapping every visible name (predefined, labels,
            variables) to its address
        """
        return self._codegen.get_symbols()

    def get_labels(self) -> dict[str, int]:
        return self._codegen.get_labels()

    def get_variables(self) -> dict[str, int]:
        return self._codegen.get_variables()

    def get_hack_text(self) -> str:
        return writers.to_hack_text(self.get_words())

    def get_listing(self) -> str:
        """
        Get the assembly listing as a string.

        Returns:
            Listing with pcs, words, source lines and the user symbol table
        """
        return writers.format_listing(
            self._instructions,
            self._codegen.get_emitted(),
            self._codegen.get_symbol_table().user_symbols(),
        )

    # =========================================================================
    # Output Methods
    # =========================================================================

    def write_hack(self, filepath: str | Path) -> None:
        """Write words in ``.hack`` format."""
        writers.write_hack(self.get_words(), filepath)
        logger.debug("Wrote %d words to %s", len(self.get_words()), filepath)

    def write_listing(self, filepath: str | Path) -> None:
        Path(filepath).write_text(self.get_listing(), encoding="utf-8")
        logger.debug("Wrote listing to %s", filepath)

    def write_symbols(self, filepath: str | Path) -> None:
        """Write the labels and variables of the last run."""
        symbols = self._codegen.get_symbol_table().user_symbols()
        Path(filepath).write_text(writers.format_symbols(symbols), encoding="utf-8")
        logger.debug("Wrote %d symbols to %s", len(symbols), filepath)


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble_source(source: str, filename: str = "<input>") -> list[int]:
    """
    Convenience function to assemble source code.

    Args:
        source: Assembly source code
        filename: Virtual filename for errors

    Returns:
        Machine words in emission order
    """
    return Assembler().assemble_string(source, filename)


def assemble_file(filepath: str | Path) -> list[int]:
    """Convenience function to assemble a file."""
    return Assembler().assemble_file(filepath)
