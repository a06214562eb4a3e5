# quality/checks/address_formats.py

from hl7_quality.adapters.hl7 import ParsedMessage

from ..models import AnalysisSettings, Category, CheckResult, Issue, Severity
from ._helpers import flag

_ADDRESS_FORMAT_PENALTY = 1


def check_address_formats(
    message: ParsedMessage,
    settings: AnalysisSettings,
) -> CheckResult:
    """
    Check the patient address (PID-11) is split into components.

    Only plain string values are inspected. A parser that delivers the address
    already split into components has nothing for this rule to flag.

    Args:
        message: Parsed message to assess.
        settings: Rule configuration for the analysis.

    Returns:
        CheckResult: Low issue for an address with no component separator.
    """
    pid = message.segment("PID")
    address = pid.value(11) if pid else None
    separator = message.component_separator

    if not isinstance(address, str) or not address or separator in address:
        return CheckResult()

    return flag(
        Issue(
            category=Category.FORMATTING,
            severity=Severity.LOW,
            field="PID-11",
            issue="Address may be missing components",
            details=(
                f"HL7 addresses should have components separated by {separator} "
                f"(Street{separator}City{separator}State{separator}Zip"
                f"{separator}Country)"
            ),
            recommendation=(
                f"Format address with components: Street{separator}City"
                f"{separator}State{separator}Zip{separator}Country"
            ),
        ),
        _ADDRESS_FORMAT_PENALTY,
    )
