# schemas/quality.py

from pydantic import BaseModel, ConfigDict, Field

from hl7_quality.domain.quality.models import Category, Severity


class IssueOutput(BaseModel):
    """
    A single data-quality issue as exposed in a quality report.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    category: Category
    severity: Severity
    field: str
    issue: str
    details: str
    recommendation: str


class QualityReport(BaseModel):
    """
    Machine-readable envelope for the quality analysis of one HL7 message.

    Issues appear in check order and are not sorted by severity. The message
    type and segment count are only present when the message could be parsed.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    overall_score: int = Field(ge=0, le=100)
    is_valid: bool
    message_type: str | None = None
    total_segments: int | None = None
    analysis_date: str
    issues: tuple[IssueOutput, ...] = ()
    recommendations: tuple[str, ...] = ()
