"""
Command-line entry point: analyse an HTML file and print suggestions.

Usage:
    mathblocks-analyze lesson.html
    mathblocks-analyze lesson.html --apply --strict
    cat lesson.html | mathblocks-analyze - --timing
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from mathblocks.analyzer import AnalysisConfig, DiagnosticsCollector, TimingLog, analyze
from mathblocks.builder import SuggestionSelection, apply_suggestions
from mathblocks.core.schemas import ValidationError, default_registry
from mathblocks.core.utils.serialization import blocks_to_json, suggestions_to_json

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mathblocks-analyze",
        description="Detect equations and worked problems in HTML and suggest interactive blocks.",
    )

    # Input
    parser.add_argument("input", help="HTML file to analyse, or '-' for stdin")

    # Selection / application
    parser.add_argument(
        "--threshold",
        type=float,
        default=AnalysisConfig().selection_threshold,
        help="Minimum confidence selected when applying (default 0.7)",
    )
    parser.add_argument("--apply", action="store_true", help="Print blocks for the selected suggestions instead")
    parser.add_argument("--strict", action="store_true", help="Validate applied blocks against their JSON schemas")

    # Reports
    parser.add_argument("--timing", action="store_true", help="Print a phase timing summary to stderr")
    parser.add_argument("--diagnostics", type=Path, help="Write detection issues to this JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return path.read_text(encoding="utf-8", errors="replace")


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        html_content = _read_input(args.input)
    except OSError as e:
        logger.error(str(e))
        return 2

    try:
        config = AnalysisConfig(selection_threshold=args.threshold)
    except ValueError as e:
        logger.error(str(e))
        return 2

    timing_log = TimingLog() if args.timing else None
    diagnostics = DiagnosticsCollector() if args.diagnostics else None

    suggestions = analyze(html_content, config=config, timing_log=timing_log, diagnostics=diagnostics)

    if args.apply:
        selection = SuggestionSelection.defaults(suggestions, config.selection_threshold)
        try:
            blocks = apply_suggestions(suggestions, selection, default_registry(), strict=args.strict)
        except ValidationError as e:
            logger.error(f"Block validation failed: {e} {e.errors}")
            return 1
        print(blocks_to_json(blocks))
    else:
        print(suggestions_to_json(suggestions))

    if timing_log is not None:
        print(timing_log.summary(), file=sys.stderr)
    if diagnostics is not None:
        diagnostics.write_report(args.diagnostics)

    return 0


if __name__ == "__main__":
    sys.exit(main())
