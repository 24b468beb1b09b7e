"""Error types raised by the pre-merge checks."""

from pathlib import Path
from typing import Union


class MergeXmlError(Exception):
    """Base class for every error raised by mergexml."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(MergeXmlError):
    """Configuration file could not be read or holds invalid values."""


class DirectoryAccessError(MergeXmlError):
    """Fatal I/O failure while listing a directory."""

    def __init__(self, location: Union[str, Path]):
        super().__init__(f"Unable to read directory: {location}")
        self.location = location


class WrongFileCountError(MergeXmlError):
    """Number of XML files is outside the configured bounds."""

    def __init__(self, max_count: int):
        super().__init__(f"There are more than {max_count} xml files, or the files are missing")
        self.max_count = max_count


class WrongXsdCountError(MergeXmlError):
    """Directory does not hold exactly one XSD file."""

    def __init__(self, expected: int = 1):
        super().__init__(f"There are not exactly {expected} xsd files")
        self.expected = expected


class FileDoesNotExistError(MergeXmlError):
    def __init__(self, path: Union[str, Path]):
        super().__init__(f"File does not exist: {path}")
        self.path = path


class FileDeleteError(MergeXmlError):
    def __init__(self, path: Union[str, Path]):
        super().__init__(f"Unable to delete file: {path}")
        self.path = path


class DocumentParseError(MergeXmlError):
    """XML document could not be read or is not well-formed."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        message = f"Unable to parse XML document: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.path = path


class InvalidCurrencyCodeError(MergeXmlError):
    """Currency code in a document differs from the configured one."""

    def __init__(self, expected: str, actual: str = None):
        super().__init__(f"Допустимое значение кода валюты {expected}")
        self.expected = expected
        self.actual = actual


class MissingCurrencyCodeTagError(MergeXmlError):
    """Document has no currency code element at all."""

    def __init__(self, tag: str, path: Union[str, Path]):
        super().__init__(f"Element <{tag}> not found in {path}")
        self.tag = tag
        self.path = path
