"""
Merge input preparation: collect the XML files and the XSD schema from a
directory and gate every XML file through the currency code check.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import ConfigProperties, load_config
from .exceptions import ConfigurationError
from .files import list_xml, xsd
from .models import MergeInputs
from .telemetry import loggable
from .validators import CurrencyCodeValidator

log = logging.getLogger(__name__)


@loggable
def prepare_merge_inputs(
    location: Optional[Union[str, Path]] = None,
    config: Optional[ConfigProperties] = None
) -> MergeInputs:
    """
    Collect and validate the files a merge needs.

    Args:
        location: input directory, defaults to ``config.location``
        config: loaded with load_config() when omitted

    Raises:
        ConfigurationError: no input directory is known.
        MergeXmlError: any count or validation failure, unchanged.
    """
    if config is None:
        config = load_config()
    location = location or config.location
    if not location:
        raise ConfigurationError("No input location given and none configured")

    xml_files = list_xml(location, config.min_count_file, config.max_count_file)
    xsd_file = xsd(location)

    validator = CurrencyCodeValidator(config)
    for xml_file in xml_files:
        validator(xml_file)

    log.info(f"[preprocess] {len(xml_files)} xml files in {location} passed validation")
    return MergeInputs(xml_files=xml_files, xsd_file=xsd_file)
