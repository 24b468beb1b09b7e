"""Currency code validation."""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from opentelemetry import trace

from ..config import ConfigProperties
from ..documents import CURRCODE, find_elements, parse_document, text_content
from ..exceptions import InvalidCurrencyCodeError, MissingCurrencyCodeTagError
from ..models import FileEntry
from ..telemetry import SPAN_ATTRIBUTES, loggable, safe_set_span_attributes, set_file_span_attributes

log = logging.getLogger(__name__)

PathLike = Union[str, Path, FileEntry]


def _as_path(file: PathLike) -> Path:
    return file.path if isinstance(file, FileEntry) else Path(file)


@loggable
def check_currency_code(
    file: PathLike,
    expected_code: Union[int, str],
    tag: str = CURRCODE,
    parser: Optional[Callable] = None
) -> bool:
    """
    Check that the first ``tag`` element of ``file`` holds ``expected_code``.

    The element text is compared as a string with ``str(expected_code)``.

    Returns:
        True when the code matches.

    Raises:
        MissingCurrencyCodeTagError: the document has no ``tag`` element.
        InvalidCurrencyCodeError: the code differs from ``expected_code``.
        DocumentParseError: the file is not a readable XML document.
    """
    path = _as_path(file)
    span = trace.get_current_span()
    set_file_span_attributes(span, path)
    document = (parser or parse_document)(path)

    element = next(find_elements(document, tag), None)
    if element is None:
        raise MissingCurrencyCodeTagError(tag, path)

    curr_code = text_content(element)
    valid_curr_code = str(expected_code)
    keys = SPAN_ATTRIBUTES["VALIDATION"]
    safe_set_span_attributes(span, {
        keys["tag"]: tag,
        keys["expected"]: valid_curr_code,
        keys["actual"]: curr_code,
    })
    if curr_code != valid_curr_code:
        log.warning(f"[validators] {path.name}: currency code {curr_code!r}, expected {valid_curr_code!r}")
        raise InvalidCurrencyCodeError(valid_curr_code, curr_code)
    return True


class CurrencyCodeValidator:
    """Currency code check bound to one configuration."""

    def __init__(self, config: ConfigProperties, parser: Optional[Callable] = None):
        self.expected_code = config.expected_currency_code
        self.tag = config.currency_code_tag
        self._parser = parser

    def validate(self, file: PathLike) -> bool:
        return check_currency_code(file, self.expected_code, tag=self.tag, parser=self._parser)

    def __call__(self, file: PathLike) -> bool:
        return self.validate(file)
