# quality/checks/phone_formats.py

import re

from hl7_quality.adapters.hl7 import ParsedMessage, Segment

from ..models import AnalysisSettings, Category, CheckResult, Issue, Severity
from ._helpers import flag

_PHONE_FORMAT_PENALTY = 1

# Permissive: any digit, dash, parenthesis or whitespace run is accepted
_PHONE_PATTERN = re.compile(r"[\d\-()\s]+")

_PHONE_FIELDS = (
    (13, "Phone Number - Home"),
    (14, "Phone Number - Business"),
)


def check_phone_formats(
    message: ParsedMessage,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Check the home (PID-13) and business (PID-14) phone numbers look numeric.

    Args:
        message: Parsed message to assess.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: One Low issue per phone field with no numeric content.
    """
    pid = message.segment("PID")
    if pid is None:
        return CheckResult()

    return sum(
        (
            _check_phone_field(pid, position, name)
            for position, name in _PHONE_FIELDS
        ),
        CheckResult(),
    )


def _check_phone_field(pid: Segment, position: int, name: str) -> CheckResult:
    """
    Check a single phone field against the permissive phone pattern.

    Returns:
        CheckResult: Formatting issue when the value has no phone characters.
    """
    phone = pid.value(position)
    if not phone or _PHONE_PATTERN.search(phone):
        return CheckResult()

    return flag(
        Issue(
            category=Category.FORMATTING,
            severity=Severity.LOW,
            field=f"PID-{position}",
            issue=f"Invalid {name} format",
            details=f'Phone number "{phone}" may not be properly formatted',
            recommendation="Format phone as [NNN][(999)]999-9999[X99999]",
        ),
        _PHONE_FORMAT_PENALTY,
    )
