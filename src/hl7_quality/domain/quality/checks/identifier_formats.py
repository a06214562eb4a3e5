# quality/checks/identifier_formats.py

import re

from hl7_quality.adapters.hl7 import ParsedMessage

from ..models import AnalysisSettings, Category, CheckResult, Issue, Severity
from ._helpers import flag, matches

_SSN_FORMAT_PENALTY = 2

# Nine digits, optionally dashed as XXX-XX-XXXX
_SSN_PATTERN = re.compile(r"\d{3}-?\d{2}-?\d{4}")


def check_identifier_formats(
    message: ParsedMessage,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Check the patient SSN (PID-19) is nine digits, dashed or not.

    Args:
        message: Parsed message to assess.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: Formatting issue for a malformed SSN, if any.
    """
    pid = message.segment("PID")
    ssn = pid.value(19) if pid else None

    if not ssn or matches(_SSN_PATTERN, ssn):
        return CheckResult()

    return flag(
        Issue(
            category=Category.FORMATTING,
            severity=Severity.MEDIUM,
            field="PID-19",
            issue="Invalid SSN format",
            details=f'SSN "{ssn}" does not match expected format',
            recommendation="Format SSN as XXX-XX-XXXX or XXXXXXXXX",
        ),
        _SSN_FORMAT_PENALTY,
    )
