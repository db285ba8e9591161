"""
hackasm - Hack Assembler Command-Line Interface
===============================================

Usage Examples
--------------
Basic assembly:
    $ hackasm Max.asm Max.hack

With listing and symbol files:
    $ hackasm Max.asm Max.hack -l Max.lst -s Max.sym

Verbose mode:
    $ hackasm -v Max.asm Max.hack
"""

import logging
from pathlib import Path
from typing import Optional

import click

from hack_asm import __version__
from hack_asm.assembler import Assembler
from hack_asm.cli.errors import handle_cli_exception
from hack_asm.config import AssemblerConfig

logger = logging.getLogger(__name__)


def setup_logging(config: AssemblerConfig) -> None:
    """Configure logging based on verbosity."""
    logging.basicConfig(
        level=config.effective_log_level,
        format="%(levelname)s: %(message)s" if config.verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.argument(
    "output_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-l", "--listing",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate listing file",
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Generate symbol file (labels and variables)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="hackasm")
def main(
    input_file: Path,
    output_file: Path,
    listing: Optional[Path],
    symbols: Optional[Path],
    verbose: bool,
) -> None:
    """
    Assemble Hack assembly source into Hack machine code.

    INPUT_FILE is the assembly source (.asm); OUTPUT_FILE receives one
    16-bit word per line as binary digits (.hack).

    \b
    Examples:
        hackasm Max.asm Max.hack
        hackasm Pong.asm Pong.hack -l Pong.lst
    """
    config = AssemblerConfig.from_env()
    if verbose:
        config.verbose = True
    setup_logging(config)

    asm = Assembler(config)

    try:
        if config.verbose:
            click.echo(f"Assembling {input_file}...")

        words = asm.assemble_file(input_file)
        asm.write_hack(output_file)

        if listing:
            asm.write_listing(listing)
            if config.verbose:
                click.echo(f"Wrote listing to {listing}")

        if symbols:
            asm.write_symbols(symbols)
            if config.verbose:
                click.echo(f"Wrote symbols to {symbols}")

        if config.verbose:
            click.echo(f"Wrote {len(words)} words to {output_file}")
            click.echo(
                f"Defined {len(asm.get_labels())} labels, "
                f"{len(asm.get_variables())} variables"
            )

    except Exception as e:
        handle_cli_exception(e, verbose=config.verbose)


if __name__ == "__main__":
    main()
