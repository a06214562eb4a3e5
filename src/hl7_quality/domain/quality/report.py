# quality/report.py

import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from hl7_quality.adapters.hl7 import ParsedMessage, StructureValidation
from hl7_quality.schemas.quality import IssueOutput, QualityReport

from .models import Category, CheckResult, Issue, Severity

logger = logging.getLogger(__name__)

MAX_SCORE = 100
MIN_SCORE = 0
# Fixed deduction for a message that fails the structural gate
STRUCTURE_FAILURE_PENALTY = 30

PARSE_FAILURE_RECOMMENDATION = (
    "Fix parsing errors before proceeding with quality analysis"
)


def build_quality_report(
    results: Sequence[CheckResult],
    message: ParsedMessage,
) -> QualityReport:
    """
    Fold check results into a QualityReport for a parsed message.

    Issues keep battery order, penalties are summed and the score is clamped
    to [0, 100].

    Args:
        results: Check results in battery order.
        message: The parsed message the checks ran against.

    Returns:
        QualityReport: Complete report with is_valid set.
    """
    combined = sum(results, CheckResult())

    return QualityReport(
        overall_score=clamp_score(MAX_SCORE - combined.score_penalty),
        is_valid=True,
        message_type=message.message_type,
        total_segments=message.total_segments,
        analysis_date=_timestamp(),
        issues=tuple(_convert_issue(issue) for issue in combined.issues),
        recommendations=collect_recommendations(combined),
    )


def build_structure_failure_report(validation: StructureValidation) -> QualityReport:
    """
    Build the report for a message rejected by the structural gate.

    Args:
        validation: The failed structural validation.

    Returns:
        QualityReport: Invalid report with a single Critical formatting issue.
    """
    issue = Issue(
        category=Category.FORMATTING,
        severity=Severity.CRITICAL,
        field="Message Structure",
        issue="Invalid HL7 message format",
        details=(
            "; ".join(validation.errors)
            or "Message does not conform to HL7 standards"
        ),
        recommendation=(
            "Ensure message starts with MSH segment and contains proper delimiters"
        ),
    )

    return QualityReport(
        overall_score=clamp_score(MAX_SCORE - STRUCTURE_FAILURE_PENALTY),
        is_valid=False,
        analysis_date=_timestamp(),
        issues=(_convert_issue(issue),),
    )


def build_parse_failure_report(error: Exception) -> QualityReport:
    """
    Build the report for a message whose parsing or analysis raised.

    Args:
        error: The exception raised during parsing or checking.

    Returns:
        QualityReport: Invalid report scored 0 with a single Critical issue.
    """
    issue = Issue(
        category=Category.FORMATTING,
        severity=Severity.CRITICAL,
        field="Message Parsing",
        issue="Failed to parse message",
        details=str(error) or type(error).__name__,
        recommendation=(
            "Review message format and ensure it follows HL7 v2.x standards"
        ),
    )

    return QualityReport(
        overall_score=MIN_SCORE,
        is_valid=False,
        analysis_date=_timestamp(),
        issues=(_convert_issue(issue),),
        recommendations=(PARSE_FAILURE_RECOMMENDATION,),
    )


def clamp_score(score: int) -> int:
    """
    Clamp a raw score into the [0, 100] range.

    Returns:
        int: The clamped score.
    """
    return max(MIN_SCORE, min(MAX_SCORE, score))


def collect_recommendations(result: CheckResult) -> tuple[str, ...]:
    """
    Gather distinct recommendations from a combined check result.

    Explicit check-level recommendations come first, followed by the
    recommendation of every issue, each kept at its first occurrence.

    Args:
        result: Combined result of the whole battery.

    Returns:
        tuple[str, ...]: De-duplicated recommendations in first-seen order.
    """
    return _distinct(
        (
            *result.recommendations,
            *(issue.recommendation for issue in result.issues),
        ),
    )


def _distinct(values: Iterable[str]) -> tuple[str, ...]:
    """Drop empty and repeated strings, preserving first occurrence."""
    return tuple(dict.fromkeys(value for value in values if value))


def _convert_issue(issue: Issue) -> IssueOutput:
    """
    Convert an internal Issue dataclass to a Pydantic IssueOutput.

    Returns:
        IssueOutput: Pydantic-serialisable issue.
    """
    return IssueOutput(
        category=issue.category,
        severity=issue.severity,
        field=issue.field,
        issue=issue.issue,
        details=issue.details,
        recommendation=issue.recommendation,
    )


def _timestamp() -> str:
    """Current UTC time in ISO-8601 form."""
    return datetime.now(UTC).isoformat()
