from typing import Dict, List, Type

from ..exceptions import UnsupportedExtensionError
from .base import ConfigParser


class ParserFactory:
    """Factory for creating configuration parsers based on file extension."""

    _parsers: Dict[str, Type[ConfigParser]] = {}

    @classmethod
    def register_parser(cls, extension: str, parser_class: Type[ConfigParser]) -> None:
        """
        Register a parser for a file extension.

        Args:
            extension: Extension including the dot (e.g., '.ini')
            parser_class: Parser class to register
        """
        cls._parsers[extension.lower()] = parser_class

    @classmethod
    def get_parser(cls, extension: str) -> ConfigParser:
        """
        Get a parser for a file extension.

        Raises:
            UnsupportedExtensionError: If no parser is registered for the extension
        """
        parser_class = cls._parsers.get(extension.lower())
        if parser_class is None:
            raise UnsupportedExtensionError(extension, cls.get_supported_extensions())
        return parser_class()

    @classmethod
    def get_supported_extensions(cls) -> List[str]:
        return list(cls._parsers.keys())
