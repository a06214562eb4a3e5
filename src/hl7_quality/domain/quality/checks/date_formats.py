# quality/checks/date_formats.py

from hl7_quality.adapters.hl7 import ParsedMessage

from ..models import AnalysisSettings, Category, CheckResult, Issue, Severity
from ._helpers import HL7_DATE_PATTERN, flag, matches

_DATE_FORMAT_PENALTY = 1

# (segment, position, name) of every date field swept for format
_DATE_FIELDS = (
    ("MSH", 7, "Date/Time of Message"),
    ("PID", 7, "Date of Birth"),
    ("PID", 29, "Patient Death Date"),
    ("PV1", 44, "Admit Date/Time"),
    ("PV1", 45, "Discharge Date/Time"),
    ("EVN", 2, "Recorded Date/Time"),
)


def check_date_formats(
    message: ParsedMessage,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Sweep the known date fields of the message for HL7 date formatting.

    Absent segments and empty fields are skipped; only populated values that
    are not YYYYMMDD[HHMMSS][fraction][+/-ZZZZ] are reported.

    Args:
        message: Parsed message to assess.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: One Medium issue per malformed date field.
    """
    return sum(
        (
            _check_date_field(message, segment_type, position, name)
            for segment_type, position, name in _DATE_FIELDS
        ),
        CheckResult(),
    )


def _check_date_field(
    message: ParsedMessage,
    segment_type: str,
    position: int,
    name: str,
) -> CheckResult:
    """
    Check a single date field against the HL7 date pattern.

    Returns:
        CheckResult: Formatting issue when the value is present and malformed.
    """
    segment = message.segment(segment_type)
    value = segment.value(position) if segment else None

    if not value or matches(HL7_DATE_PATTERN, value):
        return CheckResult()

    return flag(
        Issue(
            category=Category.FORMATTING,
            severity=Severity.MEDIUM,
            field=f"{segment_type}-{position}",
            issue=f"Invalid {name} format",
            details=f'Date value "{value}" does not match HL7 date format',
            recommendation="Format dates as YYYYMMDD or YYYYMMDDHHMMSS",
        ),
        _DATE_FORMAT_PENALTY,
    )
