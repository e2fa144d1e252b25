"""Case suites, batch evaluation and profiling for the span scanner.

Suites are small JSON or YAML documents listing inputs together with the
expected span (or the expectation that the input is rejected).  They back the
``balanced_span`` command line tool and make regression runs reproducible:
results can be written to CSV with a deterministic header.
"""

from __future__ import annotations

from dataclasses import dataclass
import csv
import json
import logging
import time
import tracemalloc
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

import yaml

from .cyclic_scanner import NonByteCharError, longest_balanced_span

logger = logging.getLogger(__name__)

CSV_HEADER = ["input", "expected", "value", "error", "passed", "time_seconds"]


class SuiteConfigError(ValueError):
    """Raised when a case-suite document cannot be interpreted."""


@dataclass(frozen=True)
class SpanCase:
    """Single scanner input with an optional expectation."""

    input: str
    expected: Optional[str] = None
    expect_error: bool = False


@dataclass(frozen=True)
class CaseOutcome:
    """Result of evaluating a :class:`SpanCase`."""

    case: SpanCase
    value: Optional[str]
    error: Optional[str]
    elapsed_seconds: float

    @property
    def passed(self) -> bool:
        """Return ``True`` when the outcome satisfies the case expectation."""

        if self.case.expect_error:
            return self.error is not None
        if self.error is not None:
            return False
        return self.case.expected is None or self.value == self.case.expected

    def to_row(self) -> List[str]:
        """Serialise the outcome for CSV persistence."""

        if self.case.expect_error:
            expected = NonByteCharError.code
        else:
            expected = "" if self.case.expected is None else self.case.expected
        return [
            self.case.input,
            expected,
            "" if self.value is None else self.value,
            self.error or "",
            "yes" if self.passed else "no",
            f"{self.elapsed_seconds:.9f}",
        ]


@dataclass(frozen=True)
class ScanProfile:
    """Timing and memory figures captured for repeated scans of one input."""

    length: int
    value: str
    time_seconds: float
    peak_bytes: int


DEFAULT_CASES: Tuple[SpanCase, ...] = (
    SpanCase(input="", expected=""),
    SpanCase(input="(})", expected=""),
    SpanCase(input="abc", expected="Infinite"),
    SpanCase(input="(a(b)c)", expected="Infinite"),
    SpanCase(input="))[((", expected="(())"),
    SpanCase(input="ab()(d", expected="dab()"),
    SpanCase(input="(\N{SNOWMAN})", expect_error=True),
)


def _parse_case(entry: Any, position: int) -> SpanCase:
    """Convert one decoded suite *entry* into a :class:`SpanCase`."""

    if isinstance(entry, str):
        return SpanCase(input=entry)
    if not isinstance(entry, Mapping):
        raise SuiteConfigError(f"case #{position} must be a string or a mapping")

    text = entry.get("input")
    if not isinstance(text, str):
        raise SuiteConfigError(f"case #{position} requires a string 'input'")

    expected = entry.get("expected")
    if expected is not None and not isinstance(expected, str):
        raise SuiteConfigError(f"case #{position} 'expected' must be a string")

    expected_error = entry.get("expected_error")
    if expected_error is not None and expected_error != NonByteCharError.code:
        raise SuiteConfigError(
            f"case #{position} 'expected_error' must be {NonByteCharError.code!r}"
        )
    if expected_error is not None and expected is not None:
        raise SuiteConfigError(
            f"case #{position} cannot declare both 'expected' and 'expected_error'"
        )
    return SpanCase(input=text, expected=expected, expect_error=expected_error is not None)


def parse_cases(payload: Any) -> Tuple[SpanCase, ...]:
    """Build cases from a decoded JSON/YAML *payload*.

    The payload is either a list of cases or a mapping with a ``cases`` list.
    Each case is a bare input string or a mapping with ``input`` and
    optionally ``expected`` or ``expected_error``.
    """

    if isinstance(payload, Mapping):
        payload = payload.get("cases")
    if not isinstance(payload, list):
        raise SuiteConfigError("suite must contain a list of cases")
    return tuple(_parse_case(entry, position) for position, entry in enumerate(payload))


def load_cases(path: Optional[Path]) -> Tuple[SpanCase, ...]:
    """Load a case suite from *path*, or return the built-in suite for ``None``."""

    if path is None:
        return DEFAULT_CASES

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SuiteConfigError(f"failed to read suite {path}: {exc}") from exc

    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            payload = yaml.safe_load(raw)
        else:
            payload = json.loads(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise SuiteConfigError(f"failed to parse suite {path}: {exc}") from exc

    cases = parse_cases(payload)
    logger.info("Loaded %d cases from %s", len(cases), path)
    return cases


def evaluate_case(case: SpanCase) -> CaseOutcome:
    """Scan ``case.input`` and record the value or the rejection."""

    value: Optional[str] = None
    error: Optional[str] = None
    start = time.perf_counter()
    try:
        value = longest_balanced_span(case.input)
    except NonByteCharError as exc:
        logger.debug("Input %r rejected: %s", case.input, exc)
        error = exc.code
    elapsed = time.perf_counter() - start
    return CaseOutcome(case=case, value=value, error=error, elapsed_seconds=elapsed)


def evaluate_cases(cases: Iterable[SpanCase]) -> List[CaseOutcome]:
    """Evaluate every case in order."""

    outcomes = [evaluate_case(case) for case in cases]
    failed = sum(1 for outcome in outcomes if not outcome.passed)
    if failed:
        logger.warning("%d of %d cases failed", failed, len(outcomes))
    return outcomes


def write_outcomes_to_csv(
    path: Path, outcomes: Iterable[CaseOutcome], *, newline: str = ""
) -> None:
    """Persist *outcomes* to ``path`` using :data:`CSV_HEADER`."""

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline=newline) as handle:
        writer = csv.writer(handle)
        writer.writerow(CSV_HEADER)
        for outcome in outcomes:
            writer.writerow(outcome.to_row())


def profile_scan(text: str, *, repeat: int = 1) -> ScanProfile:
    """Scan *text* ``repeat`` times under ``tracemalloc`` and report the cost.

    ``time_seconds`` is the mean wall time per scan.
    """

    if repeat < 1:
        raise ValueError("repeat must be at least 1")

    tracemalloc.start()
    try:
        start = time.perf_counter()
        for _ in range(repeat):
            value = longest_balanced_span(text)
        elapsed = time.perf_counter() - start
        current, peak = tracemalloc.get_traced_memory()
        logger.debug("Scan traced memory: current=%d peak=%d", current, peak)
    finally:
        if tracemalloc.is_tracing():
            tracemalloc.stop()

    return ScanProfile(
        length=len(text),
        value=value,
        time_seconds=elapsed / repeat,
        peak_bytes=peak,
    )


def summarise(outcomes: Sequence[CaseOutcome]) -> str:
    """Return a one-line pass/fail summary."""

    passed = sum(1 for outcome in outcomes if outcome.passed)
    return f"{passed}/{len(outcomes)} cases passed"


__all__ = [
    "CSV_HEADER",
    "CaseOutcome",
    "DEFAULT_CASES",
    "ScanProfile",
    "SpanCase",
    "SuiteConfigError",
    "evaluate_case",
    "evaluate_cases",
    "load_cases",
    "parse_cases",
    "profile_scan",
    "summarise",
    "write_outcomes_to_csv",
]
