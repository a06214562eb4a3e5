# schemas/__init__.py

from .quality import IssueOutput, QualityReport

__all__ = [
    "IssueOutput",
    "QualityReport",
]
