"""TCX parsers and decoders."""

from .builder import EntityTreeBuilder
from .extensions import ExtensionResolver, ExtensionSchema
from .tcx_parser import TcxParser, deserialize

__all__ = ['EntityTreeBuilder', 'ExtensionResolver', 'ExtensionSchema', 'TcxParser', 'deserialize']
