# hl7_quality/__init__.py

from .domain import (
    analyse_data_quality,
    analyse_message_batch,
    sample_adt_message,
    use_cases,
)
from .domain.quality import AnalysisSettings, Category, CheckResult, Issue, Severity
from .schemas import IssueOutput, QualityReport

__all__ = [
    "analyse_data_quality",
    "analyse_message_batch",
    "sample_adt_message",
    "use_cases",
    "AnalysisSettings",
    "Category",
    "CheckResult",
    "Issue",
    "Severity",
    "IssueOutput",
    "QualityReport",
]
