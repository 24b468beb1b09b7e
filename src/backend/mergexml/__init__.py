"""
Pre-merge checks for XML payment documents.

Collects the XML files and the XSD schema of an input directory, validates
the currency code of each document and removes files that are no longer needed.
"""

# Version info
__version__ = "0.1.0"
__title__ = "mergexml"
__description__ = "File discovery and validation before an XML merge"

from .config import ConfigProperties, load_config
from .files import collect, list_xml, xsd, delete
from .models import FileEntry, Collected, CountOutOfBounds, MergeInputs
from .preprocess import prepare_merge_inputs
from .telemetry import setup_telemetry
from .validators import check_currency_code, CurrencyCodeValidator

__all__ = [
    # Configuration
    "ConfigProperties",
    "load_config",

    # Files
    "collect",
    "list_xml",
    "xsd",
    "delete",

    # Validation
    "check_currency_code",
    "CurrencyCodeValidator",

    # Workflow
    "prepare_merge_inputs",

    # Models
    "FileEntry",
    "Collected",
    "CountOutOfBounds",
    "MergeInputs",

    # Telemetry
    "setup_telemetry",

    # Package info
    "__version__",
    "__title__",
    "__description__"
]
