"""
rcc Configuration
=================

Runtime configuration for the rcc tools. Configuration can come from:
- Default values (defined here)
- Environment variables
- Command-line options (applied by the CLI on top of these)

Environment Variables
---------------------
RCC_LOG_LEVEL: Logging level name for the CLI (e.g. "DEBUG", "INFO")
RCC_CORPUS_DIR: Root of the staged C test corpus (stage_1/, stage_2/, ...)
RCC_COMPILER: Command used to run the compiler on one file
              (default: the current interpreter with "-m rcc")
"""

import logging
import os
import shlex
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _default_compiler_command() -> List[str]:
    return [sys.executable, "-m", "rcc"]


@dataclass
class RccConfig:
    """
    Configuration for rcc runs.

    Attributes:
        log_level: Logging level name used when not in verbose mode
        corpus_dir: Root directory of the staged test corpus, if any
        compiler_command: Command prefix to run the compiler on one file
    """

    log_level: str = "WARNING"
    corpus_dir: Optional[Path] = None
    compiler_command: List[str] = field(default_factory=_default_compiler_command)

    @classmethod
    def from_env(cls) -> "RccConfig":
        """
        Create RccConfig from environment variables.

        Unknown logging level names and empty values are ignored.
        """
        config = cls()

        if level := os.environ.get("RCC_LOG_LEVEL"):
            level = level.upper()
            if isinstance(logging.getLevelName(level), int):
                config.log_level = level

        if corpus_dir := os.environ.get("RCC_CORPUS_DIR"):
            config.corpus_dir = Path(corpus_dir)

        if command := os.environ.get("RCC_COMPILER"):
            if parts := shlex.split(command):
                config.compiler_command = parts

        return config

    def configure_logging(self, verbose: bool = False) -> None:
        """Send log records to stderr at the configured level."""
        level = logging.DEBUG if verbose else getattr(logging, self.log_level)
        logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
