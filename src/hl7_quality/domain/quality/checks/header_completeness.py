# quality/checks/header_completeness.py

import re

from hl7_quality.adapters.hl7 import ParsedMessage, Segment

from ..models import AnalysisSettings, Category, CheckResult, Issue, Severity
from ._helpers import flag, is_blank, matches

_MISSING_HEADER_PENALTY = 20
_MISSING_FIELD_PENALTY = 2
_TIMESTAMP_FORMAT_PENALTY = 1
_MISSING_TIMESTAMP_PENALTY = 2

# MSH-7: YYYYMMDDHHMMSS[.SSSS][+/-ZZZZ]
_TIMESTAMP_PATTERN = re.compile(r"\d{14}(\.\d{1,4})?([+-]\d{4})?")

_REQUIRED_FIELDS = (
    (3, "Sending Application"),
    (4, "Sending Facility"),
    (5, "Receiving Application"),
    (6, "Receiving Facility"),
    (9, "Message Type"),
    (10, "Message Control ID"),
    (12, "Version ID"),
)


def check_header_completeness(
    message: ParsedMessage,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Check that the MSH header is present and carries its routing metadata.

    A missing header is reported on its own; otherwise each required field and
    the message timestamp are checked.

    Args:
        message: Parsed message to assess.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: Header completeness issues and their penalty.
    """
    msh = message.segment("MSH")
    if msh is None:
        return flag(
            Issue(
                category=Category.COMPLETENESS,
                severity=Severity.CRITICAL,
                field="MSH",
                issue="Missing MSH segment",
                details="All HL7 messages must start with an MSH segment",
                recommendation="Add MSH segment as the first segment",
            ),
            _MISSING_HEADER_PENALTY,
        )

    return detect_missing_header_fields(msh, settings) + detect_timestamp_issues(
        msh,
        settings,
    )


def detect_missing_header_fields(
    msh: Segment,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Flag each required MSH field that is empty or holds the placeholder value.

    Args:
        msh: The message header segment.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: One High issue per missing field.
    """
    return sum(
        (
            flag(_missing_field_issue(position, name), _MISSING_FIELD_PENALTY)
            for position, name in _REQUIRED_FIELDS
            if is_blank(msh.value(position), settings.placeholder_value)
        ),
        CheckResult(),
    )


def detect_timestamp_issues(
    msh: Segment,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Check MSH-7 is populated and formatted as a full HL7 timestamp.

    Args:
        msh: The message header segment.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: A missing or badly formatted timestamp issue, if any.
    """
    timestamp = msh.value(7)

    if is_blank(timestamp, settings.placeholder_value):
        return flag(
            Issue(
                category=Category.COMPLETENESS,
                severity=Severity.HIGH,
                field="MSH-7",
                issue="Missing Date/Time of Message",
                details="Message timestamp is required",
                recommendation="Add Date/Time of Message in MSH-7",
            ),
            _MISSING_TIMESTAMP_PENALTY,
        )

    if matches(_TIMESTAMP_PATTERN, timestamp):
        return CheckResult()

    return flag(
        Issue(
            category=Category.FORMATTING,
            severity=Severity.MEDIUM,
            field="MSH-7",
            issue="Invalid Date/Time format",
            details="Date/Time should be in format YYYYMMDDHHMMSS[.SSSS][+/-ZZZZ]",
            recommendation="Format date/time as YYYYMMDDHHMMSS (e.g., 20240101120000)",
        ),
        _TIMESTAMP_FORMAT_PENALTY,
    )


def _missing_field_issue(position: int, name: str) -> Issue:
    """
    Build the issue raised for an unpopulated required header field.

    Returns:
        Issue: Completeness issue naming the MSH field.
    """
    return Issue(
        category=Category.COMPLETENESS,
        severity=Severity.HIGH,
        field=f"MSH-{position}",
        issue=f"Missing {name}",
        details=f"{name} is required in MSH segment",
        recommendation=f"Populate MSH-{position} with appropriate value",
    )
