# hl7/__init__.py

from .parser import (
    MessageParseError,
    parse_message,
    split_messages,
    validate_structure,
)
from .types import (
    DEFAULT_ENCODING_CHARACTERS,
    ParsedMessage,
    Segment,
    StructureValidation,
)

__all__ = [
    "DEFAULT_ENCODING_CHARACTERS",
    "MessageParseError",
    "ParsedMessage",
    "Segment",
    "StructureValidation",
    "parse_message",
    "split_messages",
    "validate_structure",
]
