# domain/quality/test_analyse.py

import logging

import pytest

from hl7_quality.adapters.hl7 import StructureValidation
from hl7_quality.domain.quality.analyse import (
    analyse_data_quality,
    analyse_message_batch,
)
from hl7_quality.domain.quality.models import (
    AnalysisSettings,
    Category,
    CheckResult,
    Issue,
    Severity,
)
from hl7_quality.domain.quality.samples import sample_adt_message
from hl7_quality.schemas.quality import QualityReport

pytestmark = pytest.mark.unit

PROBLEMATIC_MESSAGE = "\r".join(
    (
        "MSH|^~\\&|SendingApp||ReceivingApp||20240101||ADT^A01|12345|P|2.5",
        "PID|1|||||19800115|X|||123 MAIN ST|CITY|ST|12345|USA||555-123-4567",
    ),
)


def _sample_segments() -> dict[str, str]:
    lines = sample_adt_message().split("\r")
    return {line[:3]: line for line in lines}


def _visit_message(admit: str, discharge: str) -> str:
    segments = _sample_segments()
    pv1 = "|".join(["PV1", "1", "I", *[""] * 41, admit, discharge])
    return "\r".join((segments["MSH"], segments["PID"], pv1))


def _issue(field: str) -> Issue:
    return Issue(
        category=Category.BUSINESS_RULES,
        severity=Severity.INFO,
        field=field,
        issue="Custom rule",
        details="details",
        recommendation="Apply custom rule",
    )


def test_analyse_returns_quality_report() -> None:
    """
    ARRANGE: sample ADT message
    ACT:     analyse_data_quality
    ASSERT:  returns QualityReport instance
    """
    actual = analyse_data_quality(sample_adt_message())

    assert isinstance(actual, QualityReport)


def test_analyse_sample_message_is_clean() -> None:
    """
    ARRANGE: fully populated sample ADT message
    ACT:     analyse_data_quality
    ASSERT:  score 100, valid, no issues or recommendations
    """
    actual = analyse_data_quality(sample_adt_message())

    assert (
        actual.overall_score,
        actual.is_valid,
        actual.issues,
        actual.recommendations,
    ) == (100, True, (), ())


def test_analyse_sample_message_metadata() -> None:
    """
    ARRANGE: sample ADT message with six segments
    ACT:     analyse_data_quality
    ASSERT:  message type and segment count reported
    """
    actual = analyse_data_quality(sample_adt_message())

    assert (actual.message_type, actual.total_segments) == ("ADT^A01^ADT_A01", 6)


def test_analyse_accepts_newline_delimiters() -> None:
    """
    ARRANGE: sample message with \\n segment breaks
    ACT:     analyse_data_quality
    ASSERT:  score 100
    """
    message = sample_adt_message().replace("\r", "\n")

    actual = analyse_data_quality(message)

    assert actual.overall_score == 100


def test_analyse_structure_failure() -> None:
    """
    ARRANGE: message that does not start with MSH
    ACT:     analyse_data_quality
    ASSERT:  score 70, invalid, single structure issue
    """
    actual = analyse_data_quality("PID|1||MRN123")

    assert (
        actual.overall_score,
        actual.is_valid,
        [issue.field for issue in actual.issues],
    ) == (70, False, ["Message Structure"])


def test_analyse_structure_failure_logs_warning(caplog) -> None:
    """
    ARRANGE: message that does not start with MSH
    ACT:     analyse_data_quality
    ASSERT:  warning logged
    """
    with caplog.at_level(logging.WARNING):
        analyse_data_quality("PID|1||MRN123")

    assert "failed structural validation" in caplog.text


def test_analyse_empty_message() -> None:
    """
    ARRANGE: empty string
    ACT:     analyse_data_quality
    ASSERT:  score 70 with empty-message details
    """
    actual = analyse_data_quality("")

    assert (actual.overall_score, actual.issues[0].details) == (70, "Message is empty")


def test_analyse_adt_without_patient_segment() -> None:
    """
    ARRANGE: ADT message with MSH and PV1 only
    ACT:     analyse_data_quality
    ASSERT:  single Critical PID issue, no PID field issues
    """
    segments = _sample_segments()
    message = "\r".join((segments["MSH"], segments["PV1"]))

    actual = analyse_data_quality(message)

    assert (
        actual.overall_score,
        [(issue.field, issue.severity) for issue in actual.issues],
    ) == (85, [("PID", Severity.CRITICAL)])


def test_analyse_discharge_before_admit() -> None:
    """
    ARRANGE: visit discharged before it was admitted
    ACT:     analyse_data_quality
    ASSERT:  one business rule issue, score 95
    """
    actual = analyse_data_quality(_visit_message("20240110", "20240105"))

    assert (
        actual.overall_score,
        [(issue.category, issue.field) for issue in actual.issues],
    ) == (95, [(Category.BUSINESS_RULES, "PV1-44/45")])


def test_analyse_discharge_after_admit() -> None:
    """
    ARRANGE: visit admitted before discharge
    ACT:     analyse_data_quality
    ASSERT:  score 100
    """
    actual = analyse_data_quality(_visit_message("20240105", "20240110"))

    assert actual.overall_score == 100


def test_analyse_delimited_birth_date() -> None:
    """
    ARRANGE: sample message with PID-7 written as 1980/01/15
    ACT:     analyse_data_quality
    ASSERT:  two PID-7 format issues, score 97
    """
    message = sample_adt_message().replace("19800115", "1980/01/15")

    actual = analyse_data_quality(message)

    assert (
        actual.overall_score,
        [issue.field for issue in actual.issues],
    ) == (97, ["PID-7", "PID-7"])


def test_analyse_problematic_message_score() -> None:
    """
    ARRANGE: message with missing and malformed fields
    ACT:     analyse_data_quality
    ASSERT:  score 69 with eleven issues
    """
    actual = analyse_data_quality(PROBLEMATIC_MESSAGE)

    assert (actual.overall_score, len(actual.issues)) == (69, 11)


def test_analyse_problematic_message_issue_order() -> None:
    """
    ARRANGE: message with missing and malformed fields
    ACT:     analyse_data_quality
    ASSERT:  issues follow battery order
    """
    expected = [
        "MSH-4",
        "MSH-6",
        "MSH-7",
        "PV1",
        "PID-5",
        "PID-3",
        "PID-7",
        "PID-8",
        "PID-7",
        "PID-11",
        "PID-14",
    ]

    actual = analyse_data_quality(PROBLEMATIC_MESSAGE)

    assert [issue.field for issue in actual.issues] == expected


def test_analyse_problematic_message_recommendations_distinct() -> None:
    """
    ARRANGE: message whose PID-7 is flagged by two checks
    ACT:     analyse_data_quality
    ASSERT:  recommendations contain no duplicates
    """
    actual = analyse_data_quality(PROBLEMATIC_MESSAGE)

    assert len(actual.recommendations) == len(set(actual.recommendations))


def test_analyse_parse_failure_scores_zero() -> None:
    """
    ARRANGE: parser that raises
    ACT:     analyse_data_quality with the parser injected
    ASSERT:  score 0, invalid, parse issue carries the error text
    """

    def failing_parse(raw: str) -> None:
        raise ValueError("unreadable segment")

    actual = analyse_data_quality(sample_adt_message(), parse_fn=failing_parse)

    assert (
        actual.overall_score,
        actual.is_valid,
        actual.issues[0].field,
        actual.issues[0].details,
    ) == (0, False, "Message Parsing", "unreadable segment")


def test_analyse_failing_check_scores_zero() -> None:
    """
    ARRANGE: check battery containing a check that raises
    ACT:     analyse_data_quality
    ASSERT:  score 0
    """

    def broken_check(message: object, settings: object) -> CheckResult:
        raise KeyError("PID")

    actual = analyse_data_quality(sample_adt_message(), checks=(broken_check,))

    assert actual.overall_score == 0


def test_analyse_injected_validator() -> None:
    """
    ARRANGE: validator rejecting every message
    ACT:     analyse_data_quality with the validator injected
    ASSERT:  structure failure with the validator's error
    """

    def reject(raw: str) -> StructureValidation:
        return StructureValidation(is_valid=False, errors=("Rejected by policy",))

    actual = analyse_data_quality(sample_adt_message(), validate_fn=reject)

    assert (actual.overall_score, actual.issues[0].details) == (
        70,
        "Rejected by policy",
    )


def test_analyse_custom_checks_replace_battery() -> None:
    """
    ARRANGE: battery of one custom check with penalty 4
    ACT:     analyse_data_quality on the problematic message
    ASSERT:  only the custom issue reported, score 96
    """

    def custom_check(message: object, settings: object) -> CheckResult:
        return CheckResult(
            issues=(_issue("ZZ1"),),
            score_penalty=4,
            recommendations=("Review custom rules",),
        )

    actual = analyse_data_quality(PROBLEMATIC_MESSAGE, checks=(custom_check,))

    assert (
        actual.overall_score,
        [issue.field for issue in actual.issues],
        actual.recommendations,
    ) == (96, ["ZZ1"], ("Review custom rules", "Apply custom rule"))


def test_analyse_empty_battery_scores_100() -> None:
    """
    ARRANGE: problematic message with no checks
    ACT:     analyse_data_quality
    ASSERT:  score 100
    """
    actual = analyse_data_quality(PROBLEMATIC_MESSAGE, checks=())

    assert actual.overall_score == 100


def test_analyse_score_clamped_at_zero() -> None:
    """
    ARRANGE: check with a penalty of 500
    ACT:     analyse_data_quality
    ASSERT:  score 0, message still valid
    """

    def severe_check(message: object, settings: object) -> CheckResult:
        return CheckResult(issues=(_issue("MSH"),), score_penalty=500)

    actual = analyse_data_quality(sample_adt_message(), checks=(severe_check,))

    assert (actual.overall_score, actual.is_valid) == (0, True)


def test_analyse_parallel_matches_sequential() -> None:
    """
    ARRANGE: problematic message, sequential and four-worker settings
    ACT:     analyse_data_quality with each
    ASSERT:  identical scores and issue order
    """
    sequential = analyse_data_quality(PROBLEMATIC_MESSAGE, AnalysisSettings())

    actual = analyse_data_quality(
        PROBLEMATIC_MESSAGE,
        AnalysisSettings(max_workers=4),
    )

    assert (actual.overall_score, actual.issues) == (
        sequential.overall_score,
        sequential.issues,
    )


def test_analyse_custom_placeholder() -> None:
    """
    ARRANGE: sending facility set to N/A with N/A as the placeholder
    ACT:     analyse_data_quality
    ASSERT:  MSH-4 reported missing
    """
    message = sample_adt_message().replace("SendingFacility", "N/A")

    actual = analyse_data_quality(message, AnalysisSettings(placeholder_value="N/A"))

    assert [issue.field for issue in actual.issues] == ["MSH-4"]


def test_analyse_message_batch_reports_in_order() -> None:
    """
    ARRANGE: batch of the sample and the problematic message
    ACT:     analyse_message_batch
    ASSERT:  scores 100 then 69
    """
    content = "\n".join((sample_adt_message(), PROBLEMATIC_MESSAGE))

    actual = analyse_message_batch(content)

    assert [report.overall_score for report in actual] == [100, 69]


def test_analyse_message_batch_empty_content() -> None:
    """
    ARRANGE: blank batch content
    ACT:     analyse_message_batch
    ASSERT:  no reports
    """
    actual = analyse_message_batch("  \n ")

    assert actual == ()


def test_analyse_message_batch_forwards_checks() -> None:
    """
    ARRANGE: two-message batch with an empty battery
    ACT:     analyse_message_batch
    ASSERT:  both reports score 100
    """
    content = "\r".join((PROBLEMATIC_MESSAGE, PROBLEMATIC_MESSAGE))

    actual = analyse_message_batch(content, checks=())

    assert [report.overall_score for report in actual] == [100, 100]


def test_analyse_message_batch_envelope_not_counted() -> None:
    """
    ARRANGE: two sample messages inside a file and batch envelope
    ACT:     analyse_message_batch
    ASSERT:  both reports score 100 over six segments
    """
    content = "\r".join(
        ("FHS|^~\\&", "BHS|^~\\&", sample_adt_message(), sample_adt_message())
        + ("BTS|2", "FTS|1"),
    )

    actual = analyse_message_batch(content)

    assert [(report.overall_score, report.total_segments) for report in actual] == [
        (100, 6),
        (100, 6),
    ]


def test_analyse_message_batch_reports_leading_fragment() -> None:
    """
    ARRANGE: malformed text ahead of a valid message
    ACT:     analyse_message_batch
    ASSERT:  fragment fails the structural gate, message scores 100
    """
    content = f"garbage line\r{sample_adt_message()}"

    actual = analyse_message_batch(content)

    assert [(report.overall_score, report.is_valid) for report in actual] == [
        (70, False),
        (100, True),
    ]


def test_analyse_message_batch_forwards_parser() -> None:
    """
    ARRANGE: two-message batch with a parser that raises
    ACT:     analyse_message_batch with the parser injected
    ASSERT:  both reports score 0
    """

    def failing_parse(raw: str) -> None:
        raise ValueError("unreadable segment")

    content = "\r".join((sample_adt_message(), sample_adt_message()))

    actual = analyse_message_batch(content, parse_fn=failing_parse)

    assert [report.overall_score for report in actual] == [0, 0]
