"""
GSX ground-service profile converter.

Reads GSX airport profiles, either the section (INI-like) format or the
Python override format merged onto its section file, and produces one
canonical JSON document describing gates, services, de-ice areas, gate
groups and per-aircraft stop distances.

The main public API includes:
- Configuration: Root of the canonical model
- SectionConfigParser / OverrideConfigParser: Format parsers
- ParserFactory: Parser selection by file extension
- merge: Field-level override merge
- convert_file: Full file-to-document pipeline
"""

__version__ = '0.1.0'
__all__ = [
    'Configuration',
    'Gate',
    'SectionConfigParser',
    'OverrideConfigParser',
    'ParserFactory',
    'merge',
    'to_json',
    'from_json',
    'convert_file',
]

from .models import Configuration, Gate
from .parsers import SectionConfigParser, OverrideConfigParser, ParserFactory
from .merger import merge
from .serializer import to_json, from_json
from .converter import convert_file
