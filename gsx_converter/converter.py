"""
Conversion pipeline: input file -> canonical configuration -> JSON document.

Section files (``.base``, ``.ini``) are parsed directly. Override files need
the section file with the same base name next to them; it is parsed first
and the override is merged into it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from .exceptions import MissingBaseForOverrideError, MissingInputFileError, UnsupportedExtensionError
from .merger import merge
from .models import Configuration
from .parsers import ParserFactory
from .serializer import write_json

logger = logging.getLogger(__name__)

SECTION_EXTENSIONS = ('.base', '.ini')
# override extension -> extension of the section file it overrides
OVERRIDE_BASE_EXTENSIONS: Dict[str, str] = {
    '.override': '.base',
    '.py': '.ini',
}
OUTPUT_SUFFIX = '.canonical.json'


@dataclass
class ConversionResult:
    """What a conversion read and wrote."""

    config: Configuration
    input_path: Path
    output_path: Optional[Path] = None
    base_path: Optional[Path] = None

    def summary(self) -> str:
        config = self.config
        return (f"Airport: {config.airport or 'unknown'} | Gates: {len(config.gates)} | "
                f"De-ice areas: {len(config.deices)} | "
                f"Jetway heights: {len(config.jetway_rootfloor_heights)} | "
                f"Groups: {len(config.gate_groups)}")


def supported_extensions():
    return list(SECTION_EXTENSIONS) + list(OVERRIDE_BASE_EXTENSIONS)


def default_output_path(input_path: Union[str, Path]) -> Path:
    """``<input without extension>.canonical.json``"""
    input_path = Path(input_path)
    return input_path.with_name(input_path.stem + OUTPUT_SUFFIX)


def sibling_base_path(override_path: Union[str, Path]) -> Path:
    """
    Path of the section file an override applies to.

    Raises:
        UnsupportedExtensionError: If the path is not an override file
    """
    override_path = Path(override_path)
    extension = override_path.suffix.lower()
    if extension not in OVERRIDE_BASE_EXTENSIONS:
        raise UnsupportedExtensionError(extension, supported_extensions())
    return override_path.with_suffix(OVERRIDE_BASE_EXTENSIONS[extension])


def load_configuration(input_path: Union[str, Path]) -> ConversionResult:
    """
    Parse an input file (and its base file for overrides) into a configuration.

    The extension is checked before the file system is touched.

    Raises:
        UnsupportedExtensionError: Unknown input extension
        MissingInputFileError: The input file does not exist
        MissingBaseForOverrideError: An override has no sibling section file
    """
    input_path = Path(input_path)
    extension = input_path.suffix.lower()
    if extension not in SECTION_EXTENSIONS and extension not in OVERRIDE_BASE_EXTENSIONS:
        raise UnsupportedExtensionError(extension, supported_extensions())
    if not input_path.is_file():
        raise MissingInputFileError(str(input_path))

    if extension in SECTION_EXTENSIONS:
        logger.info(f"Parsing section file {input_path}")
        config = ParserFactory.get_parser(extension).parse_file(input_path)
        return ConversionResult(config=config, input_path=input_path)

    base_path = sibling_base_path(input_path)
    if not base_path.is_file():
        raise MissingBaseForOverrideError(str(base_path))

    logger.info(f"Parsing base file {base_path}")
    base = ParserFactory.get_parser(base_path.suffix.lower()).parse_file(base_path)
    logger.info(f"Parsing override file {input_path}")
    override = ParserFactory.get_parser(extension).parse_file(input_path)
    config = merge(base, override)
    return ConversionResult(config=config, input_path=input_path, base_path=base_path)


def convert_file(input_path: Union[str, Path],
                 output_path: Optional[Union[str, Path]] = None) -> ConversionResult:
    """
    Convert one input file into a canonical JSON document.

    Args:
        input_path: Section or override file
        output_path: Destination; defaults to ``<input>.canonical.json``

    Returns:
        ConversionResult with the configuration and the written path
    """
    result = load_configuration(input_path)
    result.output_path = write_json(result.config, output_path or default_output_path(input_path))
    logger.info(f"Wrote {result.output_path}")
    return result
