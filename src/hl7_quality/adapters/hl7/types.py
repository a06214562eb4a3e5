# hl7/types.py

from collections.abc import Mapping
from dataclasses import dataclass, field

DEFAULT_ENCODING_CHARACTERS = "^~\\&"


@dataclass(frozen=True)
class Segment:
    """
    A single HL7 segment with its fields keyed by HL7 position.

    Positions follow the standard numbering, so for the MSH segment position 1
    is the field separator and position 2 the encoding characters. Empty fields
    are not stored.
    """

    segment_type: str
    fields: Mapping[int, str] = field(default_factory=dict)

    def value(self, position: int) -> str | None:
        """
        Return the raw value held at a field position.

        Args:
            position: HL7 field number (e.g. 7 for PID-7).

        Returns:
            str | None: The field value, or None when the field is absent.
        """
        return self.fields.get(position) or None


@dataclass(frozen=True)
class ParsedMessage:
    """
    Ordered segment model of one HL7 v2.x message.

    Segment order is wire order. Lookups by segment type return the first
    match only; repeated segments of the same type are not visible through
    segment().
    """

    message_type: str | None
    segments: tuple[Segment, ...] = ()
    encoding_characters: str = DEFAULT_ENCODING_CHARACTERS

    @property
    def total_segments(self) -> int:
        return len(self.segments)

    @property
    def component_separator(self) -> str:
        return self.encoding_characters[:1] or DEFAULT_ENCODING_CHARACTERS[0]

    def segment(self, segment_type: str) -> Segment | None:
        """
        Return the first segment of the given type.

        Args:
            segment_type: Three-character segment tag, e.g. "PID".

        Returns:
            Segment | None: The first matching segment, or None if absent.
        """
        return next(
            (seg for seg in self.segments if seg.segment_type == segment_type),
            None,
        )

    def has_segment(self, segment_type: str) -> bool:
        return self.segment(segment_type) is not None


@dataclass(frozen=True)
class StructureValidation:
    """
    Outcome of the structural gate applied before parsing.
    """

    is_valid: bool
    errors: tuple[str, ...] = ()
