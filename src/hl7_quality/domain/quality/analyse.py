# quality/analyse.py

import logging
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from hl7_quality.adapters.hl7 import (
    ParsedMessage,
    StructureValidation,
    parse_message,
    split_messages,
    validate_structure,
)
from hl7_quality.schemas.quality import QualityReport

from .checks import DEFAULT_CHECKS
from .models import AnalysisSettings, Check, CheckResult, default_settings
from .report import (
    build_parse_failure_report,
    build_quality_report,
    build_structure_failure_report,
)

logger = logging.getLogger(__name__)


def analyse_data_quality(
    raw_message: str,
    settings: AnalysisSettings | None = None,
    *,
    checks: Sequence[Check] | None = None,
    validate_fn: Callable[[str], StructureValidation] | None = None,
    parse_fn: Callable[[str], ParsedMessage] | None = None,
) -> QualityReport:
    """
    Run the complete data-quality analysis on one raw HL7 message.

    The message is gated structurally, parsed, and passed through every check
    in the battery. A structurally invalid message stops at the gate; any
    exception raised while validating, parsing or checking yields a report
    scored 0 rather than propagating.

    Args:
        raw_message: Raw HL7 v2.x message text.
        settings: Optional rule configuration (defaults to standard settings).
        checks: Optional check battery (defaults to DEFAULT_CHECKS).
        validate_fn: Structural validator; defaults to validate_structure.
        parse_fn: Message parser; defaults to parse_message.

    Returns:
        QualityReport: The completed quality report.
    """
    active_settings = settings or default_settings()
    active_checks = DEFAULT_CHECKS if checks is None else tuple(checks)
    validate = validate_fn or validate_structure
    parse = parse_fn or parse_message

    try:
        validation = validate(raw_message)
        if not validation.is_valid:
            logger.warning(
                "HL7 message failed structural validation: %s",
                "; ".join(validation.errors),
            )
            return build_structure_failure_report(validation)

        message = parse(raw_message)
        results = _run_checks(message, active_checks, active_settings)
        report = build_quality_report(results, message)

    except Exception as error:
        logger.exception("Quality analysis failed: %s", error)
        return build_parse_failure_report(error)

    logger.info(
        "Quality analysis complete: score %d with %d issues",
        report.overall_score,
        len(report.issues),
    )
    return report


def analyse_message_batch(
    content: str,
    settings: AnalysisSettings | None = None,
    *,
    checks: Sequence[Check] | None = None,
    validate_fn: Callable[[str], StructureValidation] | None = None,
    parse_fn: Callable[[str], ParsedMessage] | None = None,
) -> tuple[QualityReport, ...]:
    """
    Analyse every message found in batch content.

    Args:
        content: Text holding one or more HL7 messages.
        settings: Optional rule configuration shared by all messages.
        checks: Optional check battery applied to every message.
        validate_fn: Structural validator; defaults to validate_structure.
        parse_fn: Message parser; defaults to parse_message.

    Returns:
        tuple[QualityReport, ...]: One report per message, in file order.
    """
    active_settings = settings or default_settings()
    reports = tuple(
        analyse_data_quality(
            raw,
            active_settings,
            checks=checks,
            validate_fn=validate_fn,
            parse_fn=parse_fn,
        )
        for raw in split_messages(content)
    )

    logger.info("Batch analysis complete: %d messages", len(reports))
    return reports


def _run_checks(
    message: ParsedMessage,
    checks: Sequence[Check],
    settings: AnalysisSettings,
) -> tuple[CheckResult, ...]:
    """
    Execute the check battery against a parsed message.

    Checks only read the message, so with max_workers of 2 or more they run on
    a thread pool. Results are returned in battery order either way.

    Args:
        message: Parsed message shared read-only by every check.
        checks: Check functions in battery order.
        settings: Rule configuration for the analysis.

    Returns:
        tuple[CheckResult, ...]: One result per check, in battery order.
    """

    def run(check: Check) -> CheckResult:
        return check(message, settings)

    if settings.max_workers > 1 and len(checks) > 1:
        with ThreadPoolExecutor(max_workers=settings.max_workers) as executor:
            results = tuple(executor.map(run, checks))
    else:
        results = tuple(run(check) for check in checks)

    for check, result in zip(checks, results, strict=True):
        logger.debug(
            "%s: %d issues, penalty %d",
            getattr(check, "__name__", repr(check)),
            len(result.issues),
            result.score_penalty,
        )

    return results
