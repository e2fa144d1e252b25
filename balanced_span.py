"""Command line tool for the cyclic longest balanced span scanner.

Inputs come from positional arguments, from standard input (one per line with
``--stdin``) or from a JSON/YAML case suite (``--cases``).  Plain inputs print
one result per line; suites print a pass/fail line per case followed by a
summary and can be persisted with ``--report``.

Exit status is ``0`` on success and ``1`` when an input is rejected or a suite
expectation fails.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Sequence

from cyclic_spans.cyclic_scanner import NonByteCharError, longest_balanced_span
from cyclic_spans.suite import (
    CaseOutcome,
    SuiteConfigError,
    evaluate_cases,
    load_cases,
    profile_scan,
    summarise,
    write_outcomes_to_csv,
)

logger = logging.getLogger(__name__)


def _format_outcome(outcome: CaseOutcome) -> str:
    """Return the PASS/FAIL line printed for *outcome*."""

    status = "PASS" if outcome.passed else "FAIL"
    result = outcome.error if outcome.error is not None else outcome.value
    return f"{status} {outcome.case.input!r} -> {result}"


def _scan_inputs(inputs: Iterable[str], *, profile_repeat: int | None) -> int:
    """Print the span (or profile) of each input and return the exit code."""

    exit_code = 0
    for text in inputs:
        try:
            if profile_repeat is None:
                print(longest_balanced_span(text))
            else:
                profile = profile_scan(text, repeat=profile_repeat)
                print(
                    f"{profile.value}\t{profile.time_seconds:.9f}s\t{profile.peak_bytes}B"
                )
        except NonByteCharError as exc:
            logger.error("Rejected input %r: %s", text, exc)
            exit_code = 1
    return exit_code


def _run_suite(path: Path | None, report: Path | None) -> int:
    """Evaluate the suite at *path*, or the built-in suite, and return the exit code."""

    try:
        cases = load_cases(path)
    except SuiteConfigError as exc:
        logger.error("Invalid case suite: %s", exc)
        return 1

    outcomes = evaluate_cases(cases)
    for outcome in outcomes:
        print(_format_outcome(outcome))
    print(summarise(outcomes))

    if report is not None:
        write_outcomes_to_csv(report, outcomes)
        logger.info("Report written to %s", report)
    return 0 if all(outcome.passed for outcome in outcomes) else 1


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("inputs", nargs="*", help="Strings to scan")
    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read inputs from standard input, one per line.",
    )
    parser.add_argument(
        "--cases",
        type=Path,
        default=None,
        help="JSON or YAML case suite to evaluate.",
    )
    parser.add_argument(
        "--suite",
        action="store_true",
        help="Evaluate the built-in case suite.",
    )
    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        help="Destination CSV file for suite results.",
    )
    parser.add_argument(
        "--profile",
        type=int,
        default=None,
        metavar="REPEAT",
        help="Scan each input REPEAT times and print mean time and peak memory.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    run_suite = args.suite or args.cases is not None
    if run_suite and (args.inputs or args.stdin):
        parser.error("--cases/--suite cannot be combined with direct inputs")
    if args.report is not None and not run_suite:
        parser.error("--report requires --cases or --suite")
    if args.profile is not None and args.profile < 1:
        parser.error("--profile must be a positive integer")

    if run_suite:
        return _run_suite(args.cases, args.report)

    inputs: List[str] = list(args.inputs)
    if args.stdin:
        inputs.extend(line.rstrip("\r\n") for line in sys.stdin)
    if not inputs:
        parser.error("no inputs supplied")
    return _scan_inputs(inputs, profile_repeat=args.profile)


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
