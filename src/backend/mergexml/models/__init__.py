"""Data models and result types."""

from .file_models import (
    FileEntry,
    Collected,
    CountOutOfBounds,
    CollectionResult,
    MergeInputs
)

__all__ = [
    "FileEntry",
    "Collected",
    "CountOutOfBounds",
    "CollectionResult",
    "MergeInputs"
]
