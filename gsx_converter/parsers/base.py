import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Union

from ..exceptions import MissingInputFileError
from ..models import Configuration

logger = logging.getLogger(__name__)


class ConfigParser(ABC):
    """Base interface for GSX configuration parsers."""

    @abstractmethod
    def parse(self, text: str, airport: str = '') -> Configuration:
        """
        Parse configuration text.

        Args:
            text: Raw file content
            airport: Airport code to stamp on the configuration

        Returns:
            A freshly built Configuration
        """
        pass

    @abstractmethod
    def get_supported_extensions(self) -> List[str]:
        """
        Get list of file extensions this parser reads.

        Returns:
            List of lower-case extensions including the dot (e.g., ['.ini'])
        """
        pass

    def parse_file(self, path: Union[str, Path]) -> Configuration:
        """
        Read and parse a file; the airport code is the upper-cased file stem.

        Raises:
            MissingInputFileError: If the file does not exist
        """
        path = Path(path)
        if not path.is_file():
            raise MissingInputFileError(str(path))
        logger.debug(f"Reading {path}")
        text = path.read_text(encoding='utf-8-sig', errors='replace')
        return self.parse(text, airport=path.stem.upper())
