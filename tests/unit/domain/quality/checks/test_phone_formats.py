# domain/quality/checks/test_phone_formats.py

import pytest

from hl7_quality.adapters.hl7 import ParsedMessage, Segment
from hl7_quality.domain.quality.checks.phone_formats import check_phone_formats
from hl7_quality.domain.quality.models import Severity, default_settings

pytestmark = pytest.mark.unit


def _message(**phones: str) -> ParsedMessage:
    fields = {int(key.removeprefix("f")): value for key, value in phones.items()}
    return ParsedMessage("ADT^A01", (Segment("MSH"), Segment("PID", fields)))


def test_check_phone_formats_valid_numbers() -> None:
    """
    ARRANGE: home and business numbers with digits
    ACT:     check_phone_formats
    ASSERT:  no issues
    """
    actual = check_phone_formats(
        _message(f13="555-123-4567", f14="(555)987-6543X123"),
        default_settings(),
    )

    assert actual.issues == ()


def test_check_phone_formats_business_number_without_digits() -> None:
    """
    ARRANGE: PID-14 holding text only
    ACT:     check_phone_formats
    ASSERT:  Low issue on PID-14 with penalty 1
    """
    actual = check_phone_formats(
        _message(f13="555-123-4567", f14="USA"),
        default_settings(),
    )

    assert (
        actual.issues[0].field,
        actual.issues[0].severity,
        actual.score_penalty,
    ) == ("PID-14", Severity.LOW, 1)


def test_check_phone_formats_both_numbers_invalid() -> None:
    """
    ARRANGE: PID-13 and PID-14 without digits
    ACT:     check_phone_formats
    ASSERT:  penalty == 2
    """
    expected = 2

    actual = check_phone_formats(_message(f13="none", f14="n/a"), default_settings())

    assert actual.score_penalty == expected


def test_check_phone_formats_absent_pid() -> None:
    """
    ARRANGE: message without PID
    ACT:     check_phone_formats
    ASSERT:  no issues
    """
    message = ParsedMessage("ADT^A01", (Segment("MSH"),))

    actual = check_phone_formats(message, default_settings())

    assert actual.issues == ()
