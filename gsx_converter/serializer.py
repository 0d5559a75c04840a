"""
JSON serialization of the canonical configuration.

Documents are produced completely in memory before anything is written, so
a failed conversion never leaves a partial output file behind.
"""

import json
import logging
from pathlib import Path
from typing import Union

from .exceptions import SerializationError
from .models import Configuration

logger = logging.getLogger(__name__)


def to_json(config: Configuration, indent: int = 2) -> str:
    """
    Serialize a configuration to a JSON document.

    Args:
        config: Configuration to serialize
        indent: JSON indentation

    Returns:
        The JSON text

    Raises:
        SerializationError: If the configuration is inconsistent or holds
            values JSON cannot represent
    """
    result = config.validate()
    for warning in result.warnings:
        logger.warning(warning)
    if not result.is_valid:
        raise SerializationError("Configuration is inconsistent", result)

    try:
        return json.dumps(config.to_dict(), indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot serialize configuration: {e}") from e


def from_json(text: str) -> Configuration:
    """
    Rebuild a configuration from a canonical JSON document.

    Raises:
        SerializationError: If the document is not valid JSON or has an
            invalid stop position value
    """
    try:
        return Configuration.from_dict(json.loads(text))
    except (ValueError, KeyError, TypeError) as e:
        raise SerializationError(f"Invalid canonical document: {e}") from e


def write_json(config: Configuration, path: Union[str, Path]) -> Path:
    """Serialize a configuration and write it as UTF-8; returns the written path."""
    path = Path(path)
    document = to_json(config)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(document + '\n', encoding='utf-8')
    logger.debug(f"Wrote {len(document)} characters to {path}")
    return path


def read_json(path: Union[str, Path]) -> Configuration:
    return from_json(Path(path).read_text(encoding='utf-8'))
