# quality/checks/__init__.py

from ..models import Check
from ._helpers import HL7_DATE_PATTERN, calendar_date, flag, is_blank, matches
from .address_formats import check_address_formats
from .business_rules import (
    check_business_rules,
    detect_death_before_birth,
    detect_discharge_before_admit,
)
from .data_consistency import check_data_consistency
from .date_formats import check_date_formats
from .header_completeness import (
    check_header_completeness,
    detect_missing_header_fields,
    detect_timestamp_issues,
)
from .identifier_formats import check_identifier_formats
from .patient_identification import (
    check_patient_identification,
    detect_birth_date_issues,
    detect_missing_identifier,
    detect_missing_name,
    detect_sex_issues,
)
from .phone_formats import check_phone_formats
from .required_segments import (
    check_required_segments,
    detect_missing_patient_segment,
    detect_missing_visit_segment,
)
from .version_compliance import check_version_compliance

# Battery order is the order issues appear in the report
DEFAULT_CHECKS: tuple[Check, ...] = (
    check_header_completeness,
    check_required_segments,
    check_patient_identification,
    check_date_formats,
    check_identifier_formats,
    check_address_formats,
    check_phone_formats,
    check_data_consistency,
    check_business_rules,
    check_version_compliance,
)

__all__ = [
    "DEFAULT_CHECKS",
    "HL7_DATE_PATTERN",
    "calendar_date",
    "check_address_formats",
    "check_business_rules",
    "check_data_consistency",
    "check_date_formats",
    "check_header_completeness",
    "check_identifier_formats",
    "check_patient_identification",
    "check_phone_formats",
    "check_required_segments",
    "check_version_compliance",
    "detect_birth_date_issues",
    "detect_death_before_birth",
    "detect_discharge_before_admit",
    "detect_missing_header_fields",
    "detect_missing_identifier",
    "detect_missing_name",
    "detect_missing_patient_segment",
    "detect_missing_visit_segment",
    "detect_sex_issues",
    "detect_timestamp_issues",
    "flag",
    "is_blank",
    "matches",
]
