"""File discovery and removal."""

from .collector import collect, list_xml, xsd, XML_EXTENSION, XSD_EXTENSION
from .deleter import delete

__all__ = [
    "collect",
    "list_xml",
    "xsd",
    "delete",
    "XML_EXTENSION",
    "XSD_EXTENSION"
]
