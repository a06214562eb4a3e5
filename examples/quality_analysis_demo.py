#!/usr/bin/env python3
"""
Quality Analysis Demo for the hl7-quality package.

This script runs the data-quality analysis on the bundled sample ADT message
and on a message with known problems, printing the score, the issues grouped
by category and severity, and the catalogue of use cases.
"""

import logging
import sys

from hl7_quality import QualityReport, analyse_data_quality, sample_adt_message, use_cases
from hl7_quality.domain.quality import (
    count_by_severity,
    format_issue,
    format_report_header,
    group_by_category,
)

PROBLEMATIC_MESSAGE = "\r".join(
    (
        "MSH|^~\\&|SendingApp||ReceivingApp||20240101||ADT^A01|12345|P|2.5",
        "PID|1|||||19800115|X|||123 MAIN ST|CITY|ST|12345|USA||555-123-4567",
    ),
)


def print_separator(title: str) -> None:
    """Print a formatted section separator."""
    print(f"\n{'=' * 60}")
    print(f" {title}")
    print(f"{'=' * 60}")


def print_report(report: QualityReport) -> None:
    """Print the summary and categorised issues of a report."""
    for line in format_report_header(report):
        print(f"  {line}")

    if not report.issues:
        print("\nNo issues found! Message quality is excellent.")
        return

    print("\nIssues by Category:")
    for category, issues in group_by_category(report.issues).items():
        print(f"  {category}: {len(issues)}")
        for issue in issues:
            print(f"    - {format_issue(issue)}")

    print("\nIssues by Severity:")
    for severity, count in count_by_severity(report.issues).items():
        print(f"  {severity}: {count}")


def demo_sample_message() -> None:
    """Analyse the fully populated sample ADT message."""
    print_separator("EXAMPLE 1: SAMPLE ADT MESSAGE ANALYSIS")
    message = sample_adt_message()
    print(message.replace("\r", "\n")[:200] + "...")

    print_report(analyse_data_quality(message))


def demo_problematic_message() -> None:
    """Analyse a message with missing and malformed fields."""
    print_separator("EXAMPLE 2: MESSAGE WITH QUALITY ISSUES")
    print(PROBLEMATIC_MESSAGE.replace("\r", "\n"))

    report = analyse_data_quality(PROBLEMATIC_MESSAGE)
    print_report(report)

    print("\nDetailed Issues:")
    for index, issue in enumerate(report.issues, start=1):
        print(f"\n{index}. {issue.issue}")
        print(f"   Category: {issue.category}")
        print(f"   Severity: {issue.severity}")
        print(f"   Field: {issue.field}")
        print(f"   Details: {issue.details}")
        print(f"   Recommendation: {issue.recommendation}")


def demo_use_cases() -> None:
    """List the use cases for message quality analysis."""
    print_separator("USE CASES")
    for case in use_cases():
        print(f"\n{case.title}")
        print(f"  {case.description}")
        for benefit in case.benefits:
            print(f"    - {benefit}")


def main() -> int:
    """Run every demo section."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        demo_sample_message()
        demo_problematic_message()
        demo_use_cases()
    except Exception as e:
        print(f"❌ Demo failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
