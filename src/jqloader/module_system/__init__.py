"""Module system: path resolution, module and data loading."""

from .path_resolver import PathResolver, SearchMeta
from .json_stream import JSONStreamDecoder
from .module_loader import ModuleLoader
from ..shared.errors import ModuleNotFoundError

__all__ = [
    'PathResolver',
    'SearchMeta',
    'JSONStreamDecoder',
    'ModuleLoader',
    'ModuleNotFoundError',
]
