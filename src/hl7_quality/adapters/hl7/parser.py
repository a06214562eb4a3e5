# hl7/parser.py

import logging
import re

from .types import ParsedMessage, Segment, StructureValidation

logger = logging.getLogger(__name__)

# HL7 segment delimiter
SEGMENT_DELIMITER = "\r"
# File and batch envelope segments wrapping a group of messages
BATCH_ENVELOPE_SEGMENTS = frozenset({"FHS", "BHS", "BTS", "FTS"})
# Segment identifiers are three characters, Z-segments included
SEGMENT_NAME_PATTERN = re.compile(r"[A-Z][A-Z0-9]{2}")

_HEADER = "MSH"
_MIN_ENCODING_CHARACTERS = 4


class MessageParseError(ValueError):
    """Raised when text cannot be tokenised into an HL7 message."""


def validate_structure(raw_message: str) -> StructureValidation:
    """
    Check that a message is minimally well formed before parsing it.

    The message must start with an MSH segment carrying a field separator and
    the encoding characters, and every segment must have a valid identifier.

    Args:
        raw_message: Raw HL7 message text.

    Returns:
        StructureValidation: Validity flag with the list of structural errors.
    """
    lines = _segment_lines(raw_message)
    if not lines:
        return StructureValidation(is_valid=False, errors=("Message is empty",))

    header = lines[0]
    errors: list[str] = []

    if not header.startswith(_HEADER):
        errors.append("Message must start with an MSH segment")
        separator = "|"
    elif len(header) <= len(_HEADER):
        errors.append("MSH segment is missing the field separator")
        separator = "|"
    else:
        separator = header[len(_HEADER)]
        if len(_encoding_characters(header, separator)) < _MIN_ENCODING_CHARACTERS:
            errors.append("MSH segment is missing the encoding characters")

    errors.extend(
        f"Segment {index}: invalid segment identifier '{name}'"
        for index, name in enumerate(
            (line.split(separator, 1)[0].strip() for line in lines),
            start=1,
        )
        if not SEGMENT_NAME_PATTERN.fullmatch(name)
    )

    return StructureValidation(is_valid=not errors, errors=tuple(errors))


def parse_message(raw_message: str) -> ParsedMessage:
    """
    Tokenise an HL7 v2.x message into its ordered segment model.

    Delimiters are read from the MSH header. Fields are kept as raw strings,
    components included, so that rule checks see exactly what was sent.

    Args:
        raw_message: Raw HL7 message text with \\r, \\n or \\r\\n segment breaks.

    Returns:
        ParsedMessage: Segments in wire order with the MSH-9 message type.

    Raises:
        MessageParseError: If the text has no MSH header to read delimiters from.
    """
    lines = _segment_lines(raw_message)
    if not lines or not lines[0].startswith(_HEADER):
        raise MessageParseError("Message does not start with an MSH segment")
    if len(lines[0]) <= len(_HEADER):
        raise MessageParseError("MSH segment has no field separator")

    separator = lines[0][len(_HEADER)]
    encoding = _encoding_characters(lines[0], separator)

    segments = tuple(_parse_segment(line, separator) for line in lines)
    header = segments[0]

    logger.debug("Parsed HL7 message with %d segments", len(segments))

    return ParsedMessage(
        message_type=header.value(9),
        segments=segments,
        encoding_characters=encoding,
    )


def split_messages(content: str) -> tuple[str, ...]:
    """
    Split batch content into individual messages at each MSH header.

    File and batch envelope segments (FHS, BHS, BTS, FTS) are discarded. Any
    other text before the first MSH header is returned as a message of its
    own, so the structural gate reports it rather than it being lost.

    Args:
        content: File content holding one or more HL7 messages.

    Returns:
        tuple[str, ...]: Raw messages in file order.
    """
    chunks: list[list[str]] = []
    envelope_count = 0

    for line in _segment_lines(content):
        if line[: len(_HEADER)] in BATCH_ENVELOPE_SEGMENTS:
            envelope_count += 1
            continue
        if line.startswith(_HEADER) or not chunks:
            chunks.append([])
        chunks[-1].append(line)

    if envelope_count:
        logger.debug("Discarded %d batch envelope segments", envelope_count)

    return tuple(SEGMENT_DELIMITER.join(chunk) for chunk in chunks)


def _parse_segment(line: str, separator: str) -> Segment:
    """
    Tokenise one segment line into positional fields.

    MSH is numbered so that MSH-1 is the field separator itself.

    Returns:
        Segment: The segment with its non-empty fields.
    """
    parts = line.split(separator)
    segment_type = parts[0].strip()

    if segment_type == _HEADER:
        numbered = {1: separator}
        numbered.update(
            (position, value) for position, value in enumerate(parts[1:], start=2)
        )
    else:
        numbered = dict(enumerate(parts[1:], start=1))

    return Segment(
        segment_type=segment_type,
        fields={position: value for position, value in numbered.items() if value},
    )


def _encoding_characters(header: str, separator: str) -> str:
    """
    Read the encoding characters (MSH-2) that follow the field separator.

    Returns:
        str: The encoding characters, empty if none are present.
    """
    return header[len(_HEADER) + 1 :].split(separator, 1)[0]


def _segment_lines(raw_message: str) -> list[str]:
    """
    Split message text into non-blank segment lines.

    Returns:
        list[str]: Segment lines in wire order.
    """
    return [
        line
        for line in _normalise(raw_message).split(SEGMENT_DELIMITER)
        if line.strip()
    ]


def _normalise(raw: str) -> str:
    """Normalise line endings to the HL7 segment delimiter."""
    return raw.replace("\r\n", "\r").replace("\n", "\r").strip()
