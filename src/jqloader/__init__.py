"""
jqloader: module resolution and loading for a jq-style query interpreter.
"""

from .module_system import ModuleLoader, PathResolver, SearchMeta, JSONStreamDecoder
from .frontend import Parser, ParseError
from .shared import (
    Module, Import, ConstObject, ConstObjectKeyVal, ConstTerm, ImportMetadata,
    JqLoaderError, JqSourceError, ModuleNotFoundError, QueryParseError, JSONParseError,
)

__all__ = [
    'ModuleLoader',
    'PathResolver',
    'SearchMeta',
    'JSONStreamDecoder',
    'Parser',
    'ParseError',
    'Module',
    'Import',
    'ConstObject',
    'ConstObjectKeyVal',
    'ConstTerm',
    'ImportMetadata',
    'JqLoaderError',
    'JqSourceError',
    'ModuleNotFoundError',
    'QueryParseError',
    'JSONParseError',
]
