# quality/__init__.py

from .analyse import analyse_data_quality, analyse_message_batch
from .checks import DEFAULT_CHECKS
from .formatters import (
    count_by_severity,
    format_issue,
    format_report_header,
    format_report_summary,
    group_by_category,
    sort_issues,
)
from .models import (
    AnalysisSettings,
    Category,
    Check,
    CheckResult,
    Issue,
    Severity,
    default_settings,
)
from .report import build_quality_report
from .samples import UseCase, sample_adt_message, use_cases

__all__ = [
    "DEFAULT_CHECKS",
    "AnalysisSettings",
    "Category",
    "Check",
    "CheckResult",
    "Issue",
    "Severity",
    "UseCase",
    "analyse_data_quality",
    "analyse_message_batch",
    "build_quality_report",
    "count_by_severity",
    "default_settings",
    "format_issue",
    "format_report_header",
    "format_report_summary",
    "group_by_category",
    "sample_adt_message",
    "sort_issues",
    "use_cases",
]
