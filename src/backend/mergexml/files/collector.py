"""Bounded collection of XML and XSD files from a directory."""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Union

from opentelemetry import trace

from ..exceptions import DirectoryAccessError, WrongFileCountError, WrongXsdCountError
from ..models import Collected, CollectionResult, CountOutOfBounds, FileEntry
from ..telemetry import SPAN_ATTRIBUTES, loggable, safe_set_span_attribute, safe_set_span_attributes

log = logging.getLogger(__name__)

XML_EXTENSION = ".xml"
XSD_EXTENSION = ".xsd"
XSD_FILES_COUNT = 1


@loggable
def collect(
    entries: Iterable[Union[str, Path]],
    extension: str,
    min_count: int,
    max_count: int
) -> CollectionResult:
    """
    Collect entries whose file name ends with ``extension``.

    Stops pulling from ``entries`` at the first match past ``max_count``.

    Returns:
        Collected with the matches in encounter order, or CountOutOfBounds.
    """
    if min_count < 0 or max_count < 0:
        raise ValueError(f"Count bounds cannot be negative: [{min_count}, {max_count}]")
    if min_count > max_count:
        raise ValueError(f"min_count {min_count} exceeds max_count {max_count}")

    matches: List[FileEntry] = []
    for entry in entries:
        path = Path(entry)
        if not path.name.endswith(extension):
            continue
        matches.append(FileEntry.from_path(path))
        if len(matches) > max_count:
            log.debug(f"[files] More than {max_count} '{extension}' files, stopped at {path}")
            return CountOutOfBounds(extension, len(matches), min_count, max_count, overflow=True)

    keys = SPAN_ATTRIBUTES["COLLECTION"]
    safe_set_span_attributes(trace.get_current_span(), {
        keys["extension"]: extension,
        keys["min_count"]: min_count,
        keys["max_count"]: max_count,
        keys["count"]: len(matches),
    })
    if len(matches) < min_count:
        log.debug(f"[files] Found {len(matches)} '{extension}' files, need at least {min_count}")
        return CountOutOfBounds(extension, len(matches), min_count, max_count, overflow=False)

    return Collected(tuple(matches))


def _collect_from_directory(location: Union[str, Path], extension: str,
                            min_count: int, max_count: int) -> CollectionResult:
    """Run collect() over the immediate children of ``location``."""
    safe_set_span_attribute(trace.get_current_span(), SPAN_ATTRIBUTES["COLLECTION"]["location"], str(location))
    try:
        with os.scandir(location) as it:
            return collect((Path(e.path) for e in it), extension, min_count, max_count)
    except OSError as e:
        log.error(f"[files] Unable to list {location}: {e}")
        raise DirectoryAccessError(location) from e


@loggable
def list_xml(location: Union[str, Path], min_count: int, max_count: int) -> List[FileEntry]:
    """
    Return the XML files in ``location``.

    Raises:
        WrongFileCountError: the number of XML files is outside [min_count, max_count].
        DirectoryAccessError: the directory cannot be read.
    """
    result = _collect_from_directory(location, XML_EXTENSION, min_count, max_count)
    if isinstance(result, CountOutOfBounds):
        raise WrongFileCountError(max_count)

    log.info(f"[files] Found {len(result)} xml files in {location}")
    return list(result.files)


@loggable
def xsd(location: Union[str, Path]) -> FileEntry:
    """
    Return the single XSD file in ``location``.

    Raises:
        WrongXsdCountError: there is not exactly one XSD file.
        DirectoryAccessError: the directory cannot be read.
    """
    result = _collect_from_directory(location, XSD_EXTENSION, XSD_FILES_COUNT, XSD_FILES_COUNT)
    if isinstance(result, CountOutOfBounds):
        raise WrongXsdCountError(XSD_FILES_COUNT)

    log.info(f"[files] Found xsd file {result.files[0].path}")
    return result.files[0]
