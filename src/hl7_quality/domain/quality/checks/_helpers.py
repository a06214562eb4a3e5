# quality/checks/_helpers.py

import re
from datetime import date, datetime

from ..models import CheckResult, Issue

# HL7 DT/DTM value: YYYYMMDD[HHMMSS][fraction][+/-ZZZZ]
HL7_DATE_PATTERN = re.compile(r"\d{8}(\d{6})?(\d{1,4})?([+-]\d{4})?")

_CALENDAR_DATE_LENGTH = 8


def flag(issue: Issue, penalty: int) -> CheckResult:
    """
    Wrap a single issue and its penalty as a check result.

    Args:
        issue: The issue raised by a rule.
        penalty: Score points deducted for the issue.

    Returns:
        CheckResult: Result holding exactly this issue.
    """
    return CheckResult(issues=(issue,), score_penalty=penalty)


def is_blank(value: str | None, placeholder: str | None = None) -> bool:
    """
    Check whether a field value is absent, empty, or a placeholder.

    Returns:
        bool: True when the value carries no usable data.
    """
    return not value or (placeholder is not None and value == placeholder)


def matches(pattern: re.Pattern[str], value: str) -> bool:
    """
    Check whether the whole value matches a pattern.

    Returns:
        bool: True on a full match.
    """
    return pattern.fullmatch(value) is not None


def calendar_date(value: str | None) -> date | None:
    """
    Read the calendar date from the first eight digits of an HL7 date value.

    Time of day and offsets are ignored.

    Returns:
        date | None: The date, or None when the value is absent or unparsable.
    """
    if not value or len(value) < _CALENDAR_DATE_LENGTH:
        return None

    digits = value[:_CALENDAR_DATE_LENGTH]
    if not digits.isdigit():
        return None

    try:
        return datetime.strptime(digits, "%Y%m%d").date()
    except ValueError:
        return None
