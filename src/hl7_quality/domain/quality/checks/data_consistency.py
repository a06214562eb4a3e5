# quality/checks/data_consistency.py

from hl7_quality.adapters.hl7 import ParsedMessage

from ..models import AnalysisSettings, Category, CheckResult, Issue, Severity
from ._helpers import flag

_INVALID_PATIENT_CLASS_PENALTY = 2


def check_data_consistency(
    message: ParsedMessage,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Check the visit's patient class (PV1-2) when patient and visit both exist.

    Args:
        message: Parsed message to assess.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: Consistency issue for an unrecognised patient class.
    """
    pv1 = message.segment("PV1")
    if pv1 is None or not message.has_segment("PID"):
        return CheckResult()

    patient_class = pv1.value(2)
    if not patient_class or patient_class in settings.valid_patient_classes:
        return CheckResult()

    return flag(
        Issue(
            category=Category.CONSISTENCY,
            severity=Severity.MEDIUM,
            field="PV1-2",
            issue="Invalid Patient Class",
            details=f'Patient class "{patient_class}" is not a valid code',
            recommendation=(
                "Use valid codes: I (Inpatient), O (Outpatient), E (Emergency), "
                "P (Preadmit), R (Recurring), B (Obstetrics), N (Newborn), "
                "U (Unknown)"
            ),
        ),
        _INVALID_PATIENT_CLASS_PENALTY,
    )
