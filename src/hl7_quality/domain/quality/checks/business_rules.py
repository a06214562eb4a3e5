# quality/checks/business_rules.py

from hl7_quality.adapters.hl7 import ParsedMessage

from ..models import AnalysisSettings, Category, CheckResult, Issue, Severity
from ._helpers import calendar_date, flag

_DATE_ORDER_PENALTY = 5


def check_business_rules(
    message: ParsedMessage,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Check the chronology of visit and life-event dates.

    Args:
        message: Parsed message to assess.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: Business rule issues and their penalty.
    """
    return detect_discharge_before_admit(message) + detect_death_before_birth(
        message,
    )


def detect_discharge_before_admit(message: ParsedMessage) -> CheckResult:
    """
    Flag a visit discharged (PV1-45) before it was admitted (PV1-44).

    Dates are compared by calendar day; an unparsable date skips the rule.

    Returns:
        CheckResult: High issue when discharge precedes admission.
    """
    pv1 = message.segment("PV1")
    if pv1 is None or not _precedes(pv1.value(45), pv1.value(44)):
        return CheckResult()

    return flag(
        Issue(
            category=Category.BUSINESS_RULES,
            severity=Severity.HIGH,
            field="PV1-44/45",
            issue="Discharge date before admit date",
            details="Discharge date should not be earlier than admit date",
            recommendation="Verify and correct admit and discharge dates",
        ),
        _DATE_ORDER_PENALTY,
    )


def detect_death_before_birth(message: ParsedMessage) -> CheckResult:
    """
    Flag a patient death date (PID-29) earlier than the birth date (PID-7).

    Dates are compared by calendar day; an unparsable date skips the rule.

    Returns:
        CheckResult: High issue when death precedes birth.
    """
    pid = message.segment("PID")
    if pid is None or not _precedes(pid.value(29), pid.value(7)):
        return CheckResult()

    return flag(
        Issue(
            category=Category.BUSINESS_RULES,
            severity=Severity.HIGH,
            field="PID-7/29",
            issue="Death date before birth date",
            details="Death date should not be earlier than birth date",
            recommendation="Verify and correct birth and death dates",
        ),
        _DATE_ORDER_PENALTY,
    )


def _precedes(earlier: str | None, later: str | None) -> bool:
    """
    Check whether one HL7 date falls on a strictly earlier day than another.

    Returns:
        bool: True when both dates parse and the first is before the second.
    """
    first = calendar_date(earlier)
    second = calendar_date(later)
    return first is not None and second is not None and first < second
