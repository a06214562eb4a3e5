# quality/checks/required_segments.py

from hl7_quality.adapters.hl7 import ParsedMessage

from ..models import AnalysisSettings, Category, CheckResult, Issue, Severity
from ._helpers import flag

_MISSING_PID_PENALTY = 15
_MISSING_PV1_PENALTY = 10


def check_required_segments(
    message: ParsedMessage,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Check that ADT messages carry the PID and PV1 segments they depend on.

    Other message types have no required segments beyond the header.

    Args:
        message: Parsed message to assess.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: Missing segment issues and their penalty.
    """
    if not _is_adt(message):
        return CheckResult()

    return detect_missing_patient_segment(message) + detect_missing_visit_segment(
        message,
    )


def detect_missing_patient_segment(message: ParsedMessage) -> CheckResult:
    """
    Flag an absent PID segment.

    Returns:
        CheckResult: Critical issue when PID is missing, empty otherwise.
    """
    if message.has_segment("PID"):
        return CheckResult()

    return flag(
        Issue(
            category=Category.COMPLETENESS,
            severity=Severity.CRITICAL,
            field="PID",
            issue="Missing PID segment",
            details="ADT messages require a PID (Patient Identification) segment",
            recommendation="Add PID segment with patient identification information",
        ),
        _MISSING_PID_PENALTY,
    )


def detect_missing_visit_segment(message: ParsedMessage) -> CheckResult:
    """
    Flag an absent PV1 segment.

    Returns:
        CheckResult: High issue when PV1 is missing, empty otherwise.
    """
    if message.has_segment("PV1"):
        return CheckResult()

    return flag(
        Issue(
            category=Category.COMPLETENESS,
            severity=Severity.HIGH,
            field="PV1",
            issue="Missing PV1 segment",
            details="ADT messages typically require a PV1 (Patient Visit) segment",
            recommendation="Add PV1 segment with patient visit information",
        ),
        _MISSING_PV1_PENALTY,
    )


def _is_adt(message: ParsedMessage) -> bool:
    """Check whether the message type names an ADT message."""
    return "ADT" in (message.message_type or "")
