"""Tests for case suites and profiling helpers."""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pytest

from cyclic_spans.suite import (
    CSV_HEADER,
    DEFAULT_CASES,
    CaseOutcome,
    SpanCase,
    SuiteConfigError,
    evaluate_case,
    evaluate_cases,
    load_cases,
    parse_cases,
    profile_scan,
    summarise,
    write_outcomes_to_csv,
)


def test_default_suite_passes() -> None:
    outcomes = evaluate_cases(DEFAULT_CASES)
    assert all(outcome.passed for outcome in outcomes)
    assert summarise(outcomes) == f"{len(DEFAULT_CASES)}/{len(DEFAULT_CASES)} cases passed"


def test_load_cases_defaults() -> None:
    assert load_cases(None) == DEFAULT_CASES


def test_load_cases_from_json(tmp_path: Path) -> None:
    path = tmp_path / "suite.json"
    payload = {
        "cases": [
            {"input": "))[((", "expected": "(())"},
            {"input": "x☃", "expected_error": "NonByteChar"},
            "abc",
        ]
    }
    path.write_text(json.dumps(payload), encoding="utf-8")

    cases = load_cases(path)

    assert cases == (
        SpanCase(input="))[((", expected="(())"),
        SpanCase(input="x☃", expect_error=True),
        SpanCase(input="abc"),
    )


def test_load_cases_from_yaml(tmp_path: Path) -> None:
    path = tmp_path / "suite.yaml"
    path.write_text(
        """
        - input: "ab()(d"
          expected: "dab()"
        - input: "(})"
          expected: ""
        """,
        encoding="utf-8",
    )

    cases = load_cases(path)

    assert [case.input for case in cases] == ["ab()(d", "(})"]
    assert [case.expected for case in cases] == ["dab()", ""]


@pytest.mark.parametrize(
    "payload",
    [
        {"cases": "nope"},
        42,
        [{"expected": "x"}],
        [{"input": 5}],
        [{"input": "a", "expected": 1}],
        [{"input": "a", "expected_error": "Other"}],
        [{"input": "a", "expected": "a", "expected_error": "NonByteChar"}],
        [3.5],
    ],
)
def test_parse_cases_rejects_invalid(payload: object) -> None:
    with pytest.raises(SuiteConfigError):
        parse_cases(payload)


def test_load_cases_rejects_malformed_documents(tmp_path: Path) -> None:
    json_path = tmp_path / "broken.json"
    json_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SuiteConfigError):
        load_cases(json_path)

    yaml_path = tmp_path / "broken.yml"
    yaml_path.write_text("cases: [unclosed", encoding="utf-8")
    with pytest.raises(SuiteConfigError):
        load_cases(yaml_path)


def test_load_cases_rejects_unreadable_files(tmp_path: Path) -> None:
    with pytest.raises(SuiteConfigError):
        load_cases(tmp_path / "absent.json")

    latin1_path = tmp_path / "latin1.yaml"
    latin1_path.write_bytes(b"- input: \xff\n")
    with pytest.raises(SuiteConfigError):
        load_cases(latin1_path)


def test_evaluate_case_records_rejection() -> None:
    outcome = evaluate_case(SpanCase(input="(é)", expect_error=True))
    assert outcome.value is None
    assert outcome.error == "NonByteChar"
    assert outcome.passed


def test_evaluate_case_flags_mismatch() -> None:
    outcome = evaluate_case(SpanCase(input="abc", expected="abc"))
    assert outcome.value == "Infinite"
    assert not outcome.passed


def test_unexpected_rejection_fails() -> None:
    outcome = evaluate_case(SpanCase(input="☃"))
    assert not outcome.passed


def test_write_outcomes_to_csv(tmp_path: Path) -> None:
    target = tmp_path / "reports" / "outcomes.csv"
    outcomes = [
        CaseOutcome(
            case=SpanCase(input="))[((", expected="(())"),
            value="(())",
            error=None,
            elapsed_seconds=0.000123456,
        ),
        CaseOutcome(
            case=SpanCase(input="☃", expect_error=True),
            value=None,
            error="NonByteChar",
            elapsed_seconds=0.5,
        ),
    ]
    write_outcomes_to_csv(target, outcomes)

    with target.open("r", encoding="utf-8") as handle:
        rows = list(csv.reader(handle))

    assert rows[0] == CSV_HEADER
    assert rows[1] == ["))[((", "(())", "(())", "", "yes", "0.000123456"]
    assert rows[2] == ["☃", "NonByteChar", "", "NonByteChar", "yes", "0.500000000"]


def test_profile_scan_reports_value_and_cost() -> None:
    profile = profile_scan("ab()(d", repeat=3)
    assert profile.value == "dab()"
    assert profile.length == 6
    assert profile.time_seconds >= 0.0
    assert profile.peak_bytes >= 0


def test_profile_scan_uses_mean_time(monkeypatch: pytest.MonkeyPatch) -> None:
    timings: list[float] = [10.0, 14.0]

    def fake_perf_counter() -> float:
        return timings.pop(0)

    monkeypatch.setattr("cyclic_spans.suite.time.perf_counter", fake_perf_counter)

    profile = profile_scan("abc", repeat=4)
    assert profile.time_seconds == pytest.approx(1.0)


def test_profile_scan_rejects_bad_repeat() -> None:
    with pytest.raises(ValueError):
        profile_scan("abc", repeat=0)
