"""Application services for CLI and SDK callers."""

from .services import ApplyService, DescribeService, ListService

__all__ = [
    "ApplyService",
    "DescribeService",
    "ListService",
]
