# domain/__init__.py

from .quality import (
    analyse_data_quality,
    analyse_message_batch,
    sample_adt_message,
    use_cases,
)

__all__ = [
    "analyse_data_quality",
    "analyse_message_batch",
    "sample_adt_message",
    "use_cases",
]
