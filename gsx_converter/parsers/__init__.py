from .base import ConfigParser
from .factory import ParserFactory
from .sections import Section, tokenize_sections
from .section_mapper import SectionConfigParser, SectionKind, classify_section
from .override import OverrideConfigParser, StopFunction, split_display_name
from .pyscan import parse_module, tokenize

# Register the section parsers
ParserFactory.register_parser('.ini', SectionConfigParser)
ParserFactory.register_parser('.base', SectionConfigParser)

# Register the override parsers
ParserFactory.register_parser('.py', OverrideConfigParser)
ParserFactory.register_parser('.override', OverrideConfigParser)

__all__ = [
    'ConfigParser',
    'ParserFactory',
    'Section',
    'tokenize_sections',
    'SectionConfigParser',
    'SectionKind',
    'classify_section',
    'OverrideConfigParser',
    'StopFunction',
    'split_display_name',
    'parse_module',
    'tokenize',
]
