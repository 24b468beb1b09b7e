"""XML document access."""

from .parser import parse_document, find_elements, text_content
from .xml_tags import CURRCODE

__all__ = [
    "parse_document",
    "find_elements",
    "text_content",
    "CURRCODE"
]
