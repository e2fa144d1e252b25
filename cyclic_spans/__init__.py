"""Longest balanced bracket spans of cyclically repeated strings."""

from .brackets import is_bracket, is_single_byte, opening_to_closing
from .cyclic_scanner import (
    INFINITE,
    BalancedSpan,
    NonByteCharError,
    PendingOpen,
    find_balanced_span,
    longest_balanced_span,
)
from .suite import (
    CaseOutcome,
    ScanProfile,
    SpanCase,
    SuiteConfigError,
    evaluate_cases,
    load_cases,
    profile_scan,
    write_outcomes_to_csv,
)

__all__ = [
    "BalancedSpan",
    "CaseOutcome",
    "INFINITE",
    "NonByteCharError",
    "PendingOpen",
    "ScanProfile",
    "SpanCase",
    "SuiteConfigError",
    "evaluate_cases",
    "find_balanced_span",
    "is_bracket",
    "is_single_byte",
    "load_cases",
    "longest_balanced_span",
    "opening_to_closing",
    "profile_scan",
    "write_outcomes_to_csv",
]
