"""Tests for parser selection by extension."""

import pytest

from gsx_converter.exceptions import UnsupportedExtensionError
from gsx_converter.parsers import OverrideConfigParser, ParserFactory, SectionConfigParser


class TestParserFactory:
    """Tests for ParserFactory."""

    @pytest.mark.parametrize('extension,parser_class', [
        ('.ini', SectionConfigParser),
        ('.BASE', SectionConfigParser),
        ('.py', OverrideConfigParser),
        ('.override', OverrideConfigParser),
    ])
    def test_registered_parsers(self, extension, parser_class):
        assert isinstance(ParserFactory.get_parser(extension), parser_class)

    def test_unsupported_extension(self):
        with pytest.raises(UnsupportedExtensionError) as exc_info:
            ParserFactory.get_parser('.cfg')

        assert exc_info.value.extension == '.cfg'
        assert exc_info.value.exit_code == 4
        assert '.ini' in str(exc_info.value)

    def test_supported_extensions(self):
        assert set(ParserFactory.get_supported_extensions()) >= {'.ini', '.base', '.py', '.override'}
