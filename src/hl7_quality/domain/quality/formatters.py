# quality/formatters.py

from collections import Counter
from collections.abc import Iterable

from hl7_quality.schemas.quality import IssueOutput, QualityReport

from .models import Category, Severity


def sort_issues(issues: Iterable[IssueOutput]) -> tuple[IssueOutput, ...]:
    """
    Order issues from most to least urgent, keeping check order within a level.

    Returns:
        tuple[IssueOutput, ...]: Issues sorted by severity.
    """
    return tuple(sorted(issues, key=lambda issue: issue.severity.rank))


def group_by_category(
    issues: Iterable[IssueOutput],
) -> dict[Category, tuple[IssueOutput, ...]]:
    """
    Group issues by category, in category declaration order.

    Returns:
        dict[Category, tuple[IssueOutput, ...]]: Non-empty groups only.
    """
    materialised = tuple(issues)
    groups = {
        category: tuple(issue for issue in materialised if issue.category == category)
        for category in Category
    }
    return {category: group for category, group in groups.items() if group}


def count_by_severity(issues: Iterable[IssueOutput]) -> dict[Severity, int]:
    """
    Count issues per severity, most urgent first.

    Returns:
        dict[Severity, int]: Counts for severities with at least one issue.
    """
    counts = Counter(issue.severity for issue in issues)
    return {severity: counts[severity] for severity in Severity if counts[severity]}


def format_issue(issue: IssueOutput) -> str:
    """
    Render an issue as a single summary line.

    Returns:
        str: e.g. "[High] Missing Patient Name (PID-5)".
    """
    return f"[{issue.severity}] {issue.issue} ({issue.field})"


def format_report_header(report: QualityReport) -> tuple[str, ...]:
    """
    Render the headline figures of a report.

    Returns:
        tuple[str, ...]: Score, validity, message metadata and counts.
    """
    segments = "n/a" if report.total_segments is None else report.total_segments
    return (
        f"Overall Score: {report.overall_score}/100",
        f"Valid: {report.is_valid}",
        f"Message Type: {report.message_type or 'n/a'}",
        f"Total Segments: {segments}",
        f"Issues Found: {len(report.issues):,}",
        f"Recommendations: {len(report.recommendations):,}",
    )


def format_report_summary(report: QualityReport) -> tuple[str, ...]:
    """
    Render the headline figures and issue lines of a report.

    Returns:
        tuple[str, ...]: Summary lines ready for printing.
    """
    return format_report_header(report) + tuple(
        format_issue(issue) for issue in sort_issues(report.issues)
    )
