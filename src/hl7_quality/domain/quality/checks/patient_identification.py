# quality/checks/patient_identification.py

from hl7_quality.adapters.hl7 import ParsedMessage, Segment

from ..models import AnalysisSettings, Category, CheckResult, Issue, Severity
from ._helpers import HL7_DATE_PATTERN, flag, is_blank, matches

_MISSING_NAME_PENALTY = 5
_MISSING_IDENTIFIER_PENALTY = 5
_MISSING_BIRTH_DATE_PENALTY = 3
_BIRTH_DATE_FORMAT_PENALTY = 2
_MISSING_SEX_PENALTY = 1
_INVALID_SEX_PENALTY = 2


def check_patient_identification(
    message: ParsedMessage,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Check the PID segment for the demographics needed to identify a patient.

    Nothing is reported when the message has no PID segment; its absence is
    the concern of the required segment check.

    Args:
        message: Parsed message to assess.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: Patient identification issues and their penalty.
    """
    pid = message.segment("PID")
    if pid is None:
        return CheckResult()

    return (
        detect_missing_name(pid)
        + detect_missing_identifier(pid)
        + detect_birth_date_issues(pid)
        + detect_sex_issues(pid, settings)
    )


def detect_missing_name(pid: Segment) -> CheckResult:
    """
    Flag an empty patient name (PID-5).

    Returns:
        CheckResult: High issue when the name is missing.
    """
    if not is_blank(pid.value(5)):
        return CheckResult()

    return flag(
        Issue(
            category=Category.COMPLETENESS,
            severity=Severity.HIGH,
            field="PID-5",
            issue="Missing Patient Name",
            details="Patient name is typically required for patient identification",
            recommendation=(
                "Add patient name in PID-5 (format: Last^First^Middle^Suffix)"
            ),
        ),
        _MISSING_NAME_PENALTY,
    )


def detect_missing_identifier(pid: Segment) -> CheckResult:
    """
    Flag an empty patient identifier list (PID-3).

    Returns:
        CheckResult: High issue when the identifier is missing.
    """
    if not is_blank(pid.value(3)):
        return CheckResult()

    return flag(
        Issue(
            category=Category.COMPLETENESS,
            severity=Severity.HIGH,
            field="PID-3",
            issue="Missing Patient Identifier",
            details="Patient identifier is required for proper patient matching",
            recommendation="Add patient identifier list in PID-3",
        ),
        _MISSING_IDENTIFIER_PENALTY,
    )


def detect_birth_date_issues(pid: Segment) -> CheckResult:
    """
    Check the date of birth (PID-7) is present and in HL7 date format.

    Returns:
        CheckResult: Missing or badly formatted birth date issue, if any.
    """
    birth_date = pid.value(7)

    if is_blank(birth_date):
        return flag(
            Issue(
                category=Category.COMPLETENESS,
                severity=Severity.MEDIUM,
                field="PID-7",
                issue="Missing Date of Birth",
                details=(
                    "Date of birth is important for patient identification "
                    "and age calculation"
                ),
                recommendation="Add date of birth in PID-7 (format: YYYYMMDD)",
            ),
            _MISSING_BIRTH_DATE_PENALTY,
        )

    if matches(HL7_DATE_PATTERN, birth_date):
        return CheckResult()

    return flag(
        Issue(
            category=Category.FORMATTING,
            severity=Severity.MEDIUM,
            field="PID-7",
            issue="Invalid Date of Birth format",
            details="Date of birth should be in format YYYYMMDD",
            recommendation="Format date of birth as YYYYMMDD (e.g., 19800115)",
        ),
        _BIRTH_DATE_FORMAT_PENALTY,
    )


def detect_sex_issues(pid: Segment, settings: AnalysisSettings) -> CheckResult:
    """
    Check administrative sex (PID-8) is present and a recognised code.

    Returns:
        CheckResult: Missing or invalid administrative sex issue, if any.
    """
    sex = pid.value(8)

    if is_blank(sex):
        return flag(
            Issue(
                category=Category.COMPLETENESS,
                severity=Severity.LOW,
                field="PID-8",
                issue="Missing Administrative Sex",
                details="Administrative sex is useful for demographic reporting",
                recommendation="Add administrative sex in PID-8 (M, F, O, U, or A)",
            ),
            _MISSING_SEX_PENALTY,
        )

    if sex in settings.valid_sex_codes:
        return CheckResult()

    return flag(
        Issue(
            category=Category.ACCURACY,
            severity=Severity.MEDIUM,
            field="PID-8",
            issue="Invalid Administrative Sex value",
            details=f'Value "{sex}" is not a valid administrative sex code',
            recommendation=(
                "Use valid codes: M (Male), F (Female), O (Other), U (Unknown), "
                "A (Ambiguous)"
            ),
        ),
        _INVALID_SEX_PENALTY,
    )
