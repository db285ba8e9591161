"""
Hack Assembler - Configuration
==============================

Assembler settings. Configuration can come from:
- Default values (defined here)
- Environment variables (``AssemblerConfig.from_env()``)
- Command-line options, which override both
"""

from dataclasses import dataclass
import logging
import os


_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class AssemblerConfig:
    """
    Configuration for an assembler run.

    Attributes:
        verbose: Report progress through the logging system (default: False)
        log_level: Level name used when configuring logging (default: "WARNING")
    """

    verbose: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            HACKASM_VERBOSE: "1"/"true"/"yes"/"on" enables verbose mode
            HACKASM_LOG_LEVEL: Logging level name (e.g., "DEBUG", "INFO")

        Returns:
            AssemblerConfig with values from environment variables
        """
        config = cls()

        if verbose := os.environ.get("HACKASM_VERBOSE"):
            config.verbose = verbose.strip().lower() in _TRUE_VALUES

        if level := os.environ.get("HACKASM_LOG_LEVEL"):
            config.log_level = level.strip().upper()

        return config

    @property
    def effective_log_level(self) -> int:
        """Numeric logging level; verbose mode forces DEBUG."""
        if self.verbose:
            return logging.DEBUG
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING
