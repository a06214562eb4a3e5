# quality/checks/version_compliance.py

from hl7_quality.adapters.hl7 import ParsedMessage

from ..models import AnalysisSettings, Category, CheckResult, Issue, Severity
from ._helpers import flag

_UNUSUAL_VERSION_PENALTY = 2


def check_version_compliance(
    message: ParsedMessage,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Check the declared version (MSH-12) is a standard HL7 v2.x release.

    Args:
        message: Parsed message to assess.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: Compliance issue for an unrecognised version.
    """
    msh = message.segment("MSH")
    version = msh.value(12) if msh else None

    if not version or version in settings.valid_versions:
        return CheckResult()

    return flag(
        Issue(
            category=Category.COMPLIANCE,
            severity=Severity.MEDIUM,
            field="MSH-12",
            issue="Unusual HL7 version",
            details=f'Version "{version}" is not a standard HL7 v2.x version',
            recommendation=(
                "Verify version ID matches actual message structure "
                "(common versions: 2.3, 2.4, 2.5, 2.8)"
            ),
        ),
        _UNUSUAL_VERSION_PENALTY,
    )
