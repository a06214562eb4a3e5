# quality/samples.py

from dataclasses import dataclass

# Fully populated ADT^A01 message that passes every check
_SAMPLE_ADT_SEGMENTS = (
    "MSH|^~\\&|SendingApp|SendingFacility|ReceivingApp|ReceivingFacility"
    "|20240101120000||ADT^A01^ADT_A01|12345|P|2.5",
    "EVN|A01|20240101120000|||SendingUserID",
    "PID|1||MRN123456789^^^HOSPITAL^MR||DOE^JOHN^MIDDLE^JR^^L||19800115|M"
    "|||123 MAIN ST^^CITY^ST^12345^USA||555-123-4567|||SSN123456789"
    "||DL123456789^STATE^20250101",
    "NK1|1|SMITH^JANE^M^||WIFE|456 SECOND ST^^CITY^ST^67890^USA|555-987-6543"
    "|555-111-2222|||20200101",
    "PV1|1|I|ICU^101^A|||123456^DOCTOR^JOHN^MD^^MD|||SUR|||||123456789|||V123456"
    "||20240101100000|20240101120000",
    "OBX|1|NM|HR^Heart Rate^LN||72|/min^beats per minute^UCUM|N|||F|||20240101120000",
)


@dataclass(frozen=True)
class UseCase:
    """
    A scenario in which message quality analysis is applied.
    """

    title: str
    description: str
    benefits: tuple[str, ...]


_USE_CASES = (
    UseCase(
        title="Pre-Integration Validation",
        description=(
            "Validate HL7 messages before integrating with downstream systems to "
            "prevent data quality issues from propagating."
        ),
        benefits=(
            "Prevent integration failures",
            "Reduce data cleanup costs",
            "Improve system reliability",
        ),
    ),
    UseCase(
        title="Compliance Auditing",
        description=(
            "Audit HL7 messages for compliance with HL7 standards, organizational "
            "policies, and regulatory requirements."
        ),
        benefits=(
            "Ensure regulatory compliance",
            "Identify non-standard implementations",
            "Document data quality metrics",
        ),
    ),
    UseCase(
        title="Data Migration Quality Assurance",
        description=(
            "Assess data quality during system migrations to ensure data integrity "
            "and completeness."
        ),
        benefits=(
            "Identify data gaps early",
            "Plan migration remediation",
            "Ensure data completeness",
        ),
    ),
    UseCase(
        title="Ongoing Monitoring",
        description=(
            "Continuously monitor HL7 message quality from source systems to "
            "identify and address issues proactively."
        ),
        benefits=(
            "Early issue detection",
            "Proactive problem resolution",
            "Trend analysis and reporting",
        ),
    ),
    UseCase(
        title="Training and Education",
        description=(
            "Use quality reports to educate staff on HL7 standards and best "
            "practices for message construction."
        ),
        benefits=(
            "Improve staff knowledge",
            "Reduce future errors",
            "Standardize practices",
        ),
    ),
)


def sample_adt_message() -> str:
    """
    Return a fully populated sample ADT^A01 message.

    Returns:
        str: HL7 message text with \\r segment delimiters.
    """
    return "\r".join(_SAMPLE_ADT_SEGMENTS)


def use_cases() -> tuple[UseCase, ...]:
    """
    Return the catalogue of quality analysis use cases.

    Returns:
        tuple[UseCase, ...]: Use cases in presentation order.
    """
    return _USE_CASES
