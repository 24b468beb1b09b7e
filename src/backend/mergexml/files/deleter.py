"""File removal."""

import logging
from pathlib import Path
from typing import Union

from opentelemetry import trace

from ..exceptions import FileDeleteError, FileDoesNotExistError
from ..models import FileEntry
from ..telemetry import loggable, set_file_span_attributes

log = logging.getLogger(__name__)


@loggable
def delete(file: Union[str, Path, FileEntry]) -> None:
    """
    Delete a file or an empty directory.

    Existence is checked before removal, so a file removed by someone else in
    between is reported as FileDeleteError. Symlinks are removed, never followed.

    Raises:
        FileDoesNotExistError: the file did not exist.
        FileDeleteError: the file exists but could not be removed, including a
            non-empty directory.
    """
    path = file.path if isinstance(file, FileEntry) else Path(file)
    file_present = path.exists()
    set_file_span_attributes(trace.get_current_span(), path, exists=file_present)
    try:
        if path.is_dir() and not path.is_symlink():
            path.rmdir()
        else:
            path.unlink()
    except OSError as e:
        if not file_present:
            raise FileDoesNotExistError(path) from e
        log.error(f"[files] Unable to delete {path}: {e}")
        raise FileDeleteError(path) from e

    log.info(f"[files] Deleted {path}")
