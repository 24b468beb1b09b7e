"""File and collection result models."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileEntry(BaseModel):
    """A filesystem path as observed during a single operation."""
    model_config = ConfigDict(frozen=True)

    path: Path
    exists: bool = True

    @field_validator('path')
    @classmethod
    def path_must_not_be_empty(cls, v):
        if not str(v).strip() or str(v) == ".":
            raise ValueError('path cannot be empty')
        return v

    @property
    def name(self) -> str:
        return self.path.name

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "FileEntry":
        path = Path(path)
        return cls(path=path, exists=path.exists())


@dataclass(frozen=True)
class Collected:
    """Successful collection; files are in encounter order."""
    files: Tuple[FileEntry, ...]

    def __len__(self) -> int:
        return len(self.files)


@dataclass(frozen=True)
class CountOutOfBounds:
    """Collection stopped because the match count left [min_count, max_count].

    ``overflow`` is True when collection stopped early on the first match past
    ``max_count``; ``count`` is then ``max_count + 1``.
    """
    extension: str
    count: int
    min_count: int
    max_count: int
    overflow: bool


CollectionResult = Union[Collected, CountOutOfBounds]


class MergeInputs(BaseModel):
    """Files that passed every pre-merge check."""
    xml_files: List[FileEntry] = Field(default_factory=list)
    xsd_file: FileEntry
