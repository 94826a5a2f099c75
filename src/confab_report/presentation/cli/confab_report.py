# src/confab_report/presentation/cli/confab_report.py

"""
Command-line interface for the conformer report.

Scores every conformer in a conformer file against the matching molecule
of a reference file and writes the report to stdout or a file.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from tqdm import tqdm

from ...core.config import DEFAULT_RMSD_CUTOFF, ReportConfig
from ...core.domain.implementations import SUPERIMPOSERS
from ...core.exceptions import (
    ConfabReportError,
    MissingReferenceError,
    UnreadableFileError,
    UnsupportedFormatError,
)
from ...core.services.report_aggregator import ReportAggregator
from ...infrastructure.readers.rdkit_structure_source import open_structure_source

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure logging to stderr, and to a file if one is given."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def setup_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        description="Compare generated conformers against reference structures"
    )
    parser.add_argument("conformers", help="File of generated conformers")
    parser.add_argument(
        "-f",
        "--reference",
        help="Reference file with one structure per molecule, in conformer file order",
    )
    parser.add_argument(
        "-r",
        "--rmsd-cutoff",
        type=float,
        default=DEFAULT_RMSD_CUTOFF,
        help="RMSD cutoff in Angstroms (default: %(default)s)",
    )
    parser.add_argument("-o", "--output", help="Write the report here instead of stdout")
    parser.add_argument(
        "--aligner",
        choices=sorted(SUPERIMPOSERS),
        default="rdkit",
        help="Superposition method (default: %(default)s)",
    )
    parser.add_argument(
        "--include-hydrogens",
        action="store_true",
        help="Include hydrogens in the alignment",
    )
    parser.add_argument(
        "--no-symmetry",
        action="store_true",
        help="Pair atoms by index instead of trying symmetry-equivalent mappings",
    )
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    parser.add_argument("--log-file", type=Path, help="Also write log messages here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed output")
    return parser


def _describe_error(error: ConfabReportError, config: ReportConfig) -> str:
    """Message for a fatal error, worded as users of the report know it."""
    is_reference = getattr(error, "filename", None) == config.reference_file
    if isinstance(error, MissingReferenceError):
        return "Need to specify a reference file"
    if isinstance(error, UnsupportedFormatError) and is_reference:
        return "Cannot read reference format!"
    if isinstance(error, UnreadableFileError) and is_reference:
        return "Cannot read reference file!"
    return str(error)


def write_report(config: ReportConfig, output: TextIO, progress: bool = False) -> None:
    """
    Run a report from files named in the config.

    Args:
        config: Run options
        output: Stream the report is written to
        progress: Whether to show a progress bar

    Raises:
        ConfabReportError: On any fatal error
    """
    superimposer_cls = SUPERIMPOSERS[config.aligner]
    if config.aligner == "rdkit":
        superimposer = superimposer_cls(
            include_hydrogens=config.include_hydrogens,
            use_symmetry=config.use_symmetry,
        )
    else:
        superimposer = superimposer_cls(include_hydrogens=config.include_hydrogens)

    with open_structure_source(config.conformer_file) as conformers:
        records = tqdm(
            conformers, desc="Scoring conformers", unit="conf", disable=not progress
        )
        aggregator = ReportAggregator(output, superimposer, config=config)
        state = aggregator.run((record.title, record.structure) for record in records)

    logger.info(
        f"Processed {state.n_conformers} conformers of {state.n_molecules} molecules"
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the conformer report CLI."""
    parser = setup_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.log_file)

    config = ReportConfig.from_args(args)
    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(error)
        return 2

    try:
        if args.output:
            with open(args.output, "w") as output:
                write_report(config, output, progress=args.progress)
        else:
            write_report(config, sys.stdout, progress=args.progress)
    except ConfabReportError as e:
        logger.error(_describe_error(e, config))
        return 1
    except OSError as e:
        logger.error(f"Cannot write report: {str(e)}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
