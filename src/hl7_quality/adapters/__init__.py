# adapters/__init__.py

from .hl7 import (
    MessageParseError,
    ParsedMessage,
    Segment,
    StructureValidation,
    parse_message,
    split_messages,
    validate_structure,
)

__all__ = [
    "MessageParseError",
    "ParsedMessage",
    "Segment",
    "StructureValidation",
    "parse_message",
    "split_messages",
    "validate_structure",
]
