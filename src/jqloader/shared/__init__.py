"""
Shared components: AST nodes, source locations, errors.
"""

from .source_location import SourceLocation
from .errors import (
    Error, format_error,
    JqLoaderError, JqSourceError, ModuleNotFoundError, QueryParseError, JSONParseError,
)
from .nodes import (
    ImportMetadata, Module, Import, ConstObject, ConstObjectKeyVal, ConstTerm,
)
