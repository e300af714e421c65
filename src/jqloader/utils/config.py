"""
Configuration constants for module resolution and loading
"""

import os
import sys
import tempfile
from typing import List, Optional

# Module resolution constants
INIT_MODULE_FILENAME = ".jq"  # Eagerly loaded when listed directly as a search root
MODULE_FILE_EXTENSION = ".jq"
DATA_FILE_EXTENSION = ".json"

# Reserved import metadata keys
META_PATH_KEY = "$$path"  # Injected by the loader, never written by users
META_SEARCH_KEY = "search"

# jq's default library search path
ORIGIN_PREFIX = "$ORIGIN/"
HOME_PREFIX = "~/"
DEFAULT_SEARCH_PATHS = ("~/.jq", "$ORIGIN/../lib/jq", "$ORIGIN/../lib")

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"
DEFAULT_DECODE_ERRORS = "replace"  # Invalid UTF-8 becomes U+FFFD instead of failing the load

# Parser configuration constants (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "jqloader_header_parser.cache")


def expand_search_path(path: str, origin: Optional[str] = None) -> str:
    """
    Expand the prefixes jq understands in library paths.

    ``~/`` becomes the user's home directory and ``$ORIGIN/`` the directory
    holding the interpreter binary (``origin`` overrides it).
    """
    if path == "~" or path.startswith(HOME_PREFIX):
        return os.path.expanduser(path)
    if path.startswith(ORIGIN_PREFIX):
        if origin is None:
            origin = os.path.dirname(os.path.abspath(sys.executable))
        return os.path.join(origin, path[len(ORIGIN_PREFIX):])
    return path


def default_search_paths(origin: Optional[str] = None) -> List[str]:
    """Default search roots with prefixes expanded"""
    return [expand_search_path(p, origin) for p in DEFAULT_SEARCH_PATHS]
