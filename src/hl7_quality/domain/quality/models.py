# quality/models.py

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from hl7_quality.adapters.hl7 import ParsedMessage

logger = logging.getLogger(__name__)

# Environment variable controlling the check worker pool size
MAX_WORKERS_ENV = "HL7_QUALITY_MAX_WORKERS"


class Category(StrEnum):
    """
    Closed set of categories a quality issue can belong to.
    """

    COMPLETENESS = "Completeness"
    ACCURACY = "Accuracy"
    CONSISTENCY = "Consistency"
    COMPLIANCE = "Compliance"
    FORMATTING = "Formatting"
    BUSINESS_RULES = "Business Rules"


class Severity(StrEnum):
    """
    Closed set of issue severities, declared in decreasing order of urgency.
    """

    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    INFO = "Info"

    @property
    def rank(self) -> int:
        """
        Sort key for the severity, where 0 is the most urgent.

        Returns:
            int: Position of the severity in declaration order.
        """
        return list(Severity).index(self)


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Configuration values controlling the rule battery.
    """

    # MSH-12 values recognised as standard HL7 v2.x releases
    valid_versions: frozenset[str] = frozenset(
        {
            "2.1",
            "2.2",
            "2.3",
            "2.3.1",
            "2.4",
            "2.5",
            "2.5.1",
            "2.6",
            "2.7",
            "2.8",
            "2.8.1",
            "2.8.2",
        },
    )
    # PID-8 administrative sex codes (HL7 table 0001)
    valid_sex_codes: frozenset[str] = frozenset({"M", "F", "O", "U", "A"})
    # PV1-2 patient class codes (HL7 table 0004)
    valid_patient_classes: frozenset[str] = frozenset(
        {"I", "O", "E", "P", "R", "B", "N", "U"},
    )
    # Header values equal to this are treated as not populated
    placeholder_value: str = "Unknown"
    # Checks run on a thread pool when this is 2 or more
    max_workers: int = 1


def default_settings() -> AnalysisSettings:
    """
    Return default analysis settings, honouring HL7_QUALITY_MAX_WORKERS.

    Returns:
        AnalysisSettings: Default configuration values.
    """
    return AnalysisSettings(max_workers=_max_workers_from_env())


def _max_workers_from_env() -> int:
    """
    Read the worker pool size from the environment.

    Returns:
        int: Configured worker count, or 1 when unset or not an integer.
    """
    raw = os.getenv(MAX_WORKERS_ENV, "").strip()
    if not raw:
        return 1

    try:
        return max(int(raw), 1)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", MAX_WORKERS_ENV, raw)
        return 1


@dataclass(frozen=True)
class Issue:
    """
    A single data-quality problem found in a message.
    """

    category: Category
    severity: Severity
    # Locator such as "PID-7", or a segment name for segment-level issues
    field: str
    issue: str
    details: str
    recommendation: str


@dataclass(frozen=True)
class CheckResult:
    """
    Output of one rule check: its issues and the score penalty they carry.

    Results combine with +, so a check can be written as the sum of its
    individual rules.
    """

    issues: tuple[Issue, ...] = ()
    score_penalty: int = 0
    recommendations: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.score_penalty < 0:
            raise ValueError(
                f"score_penalty must be non-negative, got {self.score_penalty}",
            )

    def __add__(self, other: "CheckResult") -> "CheckResult":
        if not isinstance(other, CheckResult):
            return NotImplemented
        return CheckResult(
            issues=self.issues + other.issues,
            score_penalty=self.score_penalty + other.score_penalty,
            recommendations=self.recommendations + other.recommendations,
        )


# Shared contract for every rule in the battery
Check = Callable[[ParsedMessage, AnalysisSettings], CheckResult]
