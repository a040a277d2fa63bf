"""
Staged Test Corpus Runner
=========================

Runs the compiler over a corpus of C programs laid out by stage and
expected verdict:

    <root>/stage_1/valid/return_2.c
    <root>/stage_1/invalid/missing_paren.c
    <root>/stage_2/...

Each file is compiled in its own subprocess, exactly as a user would run
the rcc command, and the exit status decides the outcome. While the lexer
is the only stage, every file of a stage must tokenize: programs under
invalid/ are grammatically wrong, but made of valid tokens.

Example:
    >>> report = check_stage(Path("write_a_c_compiler"), "stage_1")
    >>> print(report.summary())
"""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from rcc.config import RccConfig
from rcc.errors import CorpusError


logger = logging.getLogger(__name__)

VERDICT_DIRS = ("valid", "invalid")

# Seconds allowed for one compiler run
RUN_TIMEOUT = 30


@dataclass
class CorpusResult:
    """
    Outcome of compiling one corpus file.

    Attributes:
        path: The C source file
        returncode: Exit status of the compiler
        stderr: Everything the compiler wrote to stderr
    """
    path: Path
    returncode: int
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0

    @property
    def first_error_line(self) -> str:
        """First stderr line, for compact failure reports."""
        lines = self.stderr.strip().splitlines()
        return lines[0].strip() if lines else "Unknown error"


@dataclass
class StageReport:
    """Results of running one stage of the corpus."""
    stage: str
    results: List[CorpusResult] = field(default_factory=list)

    @property
    def failures(self) -> List[CorpusResult]:
        return [r for r in self.results if not r.success]

    @property
    def passed(self) -> bool:
        return bool(self.results) and not self.failures

    def summary(self) -> str:
        """
        Render the report.

            2 test(s) failed:
              missing_semicolon.c
                 Error: main.c:1:5: error: unrecognized character '$' (0x24)
        """
        if not self.results:
            return f"No test files found for {self.stage}!"

        failures = self.failures
        if not failures:
            return f"All {len(self.results)} {self.stage} tests passed!"

        lines = [f"{len(failures)} test(s) failed:"]
        for result in failures:
            lines.append(f"  {result.path.name}")
            lines.append(f"     Error: {result.first_error_line}")
        return "\n".join(lines)


def discover_stage_files(root: Path, stage: str) -> List[Path]:
    """
    Find every C file of a stage, valid and invalid alike.

    Missing verdict directories are skipped. The result is sorted so runs
    are reproducible.
    """
    stage_dir = Path(root) / stage
    files = []

    for verdict in VERDICT_DIRS:
        directory = stage_dir / verdict
        if not directory.is_dir():
            logger.debug(f"Skipping missing corpus directory {directory}")
            continue
        files.extend(p for p in directory.iterdir() if p.suffix == ".c" and p.is_file())

    return sorted(files)


def run_compiler(path: Path, command: Sequence[str]) -> CorpusResult:
    """
    Run the compiler on one file.

    Standard output is discarded; standard error is captured for the report.

    Raises:
        CorpusError: If the compiler cannot be started or times out
    """
    cmd = [*command, str(path)]

    try:
        result = subprocess.run(
            cmd,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            timeout=RUN_TIMEOUT,
        )
    except subprocess.TimeoutExpired:
        raise CorpusError(f"Compiler timed out on {path}", source_path=path, command=cmd)
    except FileNotFoundError:
        raise CorpusError(
            f"Compiler not found: {command[0]}",
            source_path=path,
            command=cmd,
        )

    logger.debug(f"{path}: exit status {result.returncode}")
    return CorpusResult(path, result.returncode, result.stderr)


def check_stage(
    root: Path,
    stage: str,
    command: Optional[Sequence[str]] = None,
) -> StageReport:
    """
    Compile every file of a stage and collect the results.

    Args:
        root: Corpus root directory
        stage: Stage directory name, e.g. "stage_1"
        command: Compiler command prefix (default from RccConfig)
    """
    if command is None:
        command = RccConfig.from_env().compiler_command

    report = StageReport(stage)
    for path in discover_stage_files(root, stage):
        report.results.append(run_compiler(path, command))

    logger.info(f"{stage}: {len(report.results) - len(report.failures)}/{len(report.results)} passed")
    return report
