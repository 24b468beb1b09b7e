"""XML document parsing helpers."""

import logging
from pathlib import Path
from typing import Iterator, Union

from lxml import etree

from ..exceptions import DocumentParseError

log = logging.getLogger(__name__)


def _make_parser() -> etree.XMLParser:
    # Input files come from outside; never expand entities or fetch DTDs.
    return etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)


def parse_document(path: Union[str, Path]) -> etree._ElementTree:
    """
    Parse an XML file.

    Raises:
        DocumentParseError: the file is unreadable or not well-formed.
    """
    try:
        document = etree.parse(str(path), _make_parser())
    except etree.XMLSyntaxError as e:
        raise DocumentParseError(path, str(e)) from e
    except OSError as e:
        raise DocumentParseError(path, e.strerror or str(e)) from e

    log.debug(f"[documents] Parsed {path}, root <{etree.QName(document.getroot()).localname}>")
    return document


def qualified_name(element: etree._Element) -> str:
    """Tag name as written in the document, ``prefix:local`` or ``local``."""
    local = etree.QName(element).localname
    return f"{element.prefix}:{local}" if element.prefix else local


def find_elements(document: Union[etree._ElementTree, etree._Element], tag: str) -> Iterator[etree._Element]:
    """
    Yield elements whose qualified name is ``tag``, in document order.

    Like DOM getElementsByTagName: ``CurrCode`` matches unprefixed elements in
    any default namespace but not ``a:CurrCode``; ``a:CurrCode`` matches only
    that prefix.
    """
    local = tag.split(":", 1)[-1]
    return (el for el in document.iter(f"{{*}}{local}") if qualified_name(el) == tag)


def text_content(element: etree._Element) -> str:
    """Concatenated text of the element and all its descendants."""
    return "".join(element.itertext())
