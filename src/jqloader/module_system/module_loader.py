"""
Module Loader

Loads jq modules and JSON data files found on the search roots.

This class handles:
- Eager loading of init modules (search roots named ``.jq``)
- On-demand loading of imported modules and data files
- Recording, on every import that carries metadata, the path of the file
  that declared it, so that nested ``search`` imports resolve relative to
  their importer

Nothing is cached: every call probes the filesystem again.
"""

import json
import logging
import os
import stat
from typing import Any, Iterable, List, Optional, Tuple

from .json_stream import JSONStreamDecoder
from .path_resolver import PathResolver
from ..frontend.parser import ParseError, Parser
from ..shared.errors import JSONParseError, QueryParseError
from ..shared.nodes import ConstTerm, ImportMetadata, Module
from ..utils.config import (
    DATA_FILE_EXTENSION,
    INIT_MODULE_FILENAME,
    META_PATH_KEY,
    MODULE_FILE_EXTENSION,
)
from ..utils.io_utils import open_data_file, read_source_file

logger = logging.getLogger(__name__)

PARSE_ERROR_KIND = "query in module"


class ModuleLoader:
    """
    Module loader over an ordered list of search roots.

    The loader is the only component that reads files; path computation is
    delegated to PathResolver and parsing to the header Parser.
    """

    def __init__(self, paths: Iterable[str], parser: Optional[Parser] = None):
        """
        Args:
            paths: Search roots in priority order
            parser: Parser instance (auto-created if None)
        """
        self.path_resolver = PathResolver(paths)

        # Support dependency injection or build the grammar once here
        if parser is None:
            self.parser = Parser()
        else:
            self.parser = parser

    @property
    def search_roots(self) -> Tuple[str, ...]:
        return self.path_resolver.search_roots

    def load_init_modules(self) -> List[Module]:
        """
        Load every search root that is itself an init module file.

        Roots whose base name is not ``.jq`` are ignored, as are ``.jq``
        roots that are missing or are directories.

        Raises:
            QueryParseError: On the first init module that fails to parse
            OSError: On any I/O failure other than a missing file
        """
        modules = []
        for path in self.search_roots:
            if os.path.basename(path) != INIT_MODULE_FILENAME:
                continue
            try:
                st = os.stat(path)
            except FileNotFoundError:
                logger.debug(f"Skipping missing init module {path}")
                continue
            if stat.S_ISDIR(st.st_mode):
                logger.debug(f"Skipping init module directory {path}")
                continue
            source = read_source_file(path)
            modules.append(self.parse_module(path, source))
        logger.debug(f"Loaded {len(modules)} init modules")
        return modules

    def load_module_with_meta(self, name: str, meta: Optional[ImportMetadata] = None) -> Module:
        """
        Load the module imported as ``name``.

        Args:
            name: Import path, e.g. ``"lib/util"``
            meta: Decoded import metadata (``search`` and ``$$path`` steer
                  resolution)

        Raises:
            ModuleNotFoundError: If no candidate file exists
            QueryParseError: If the file does not parse
            OSError: If the file cannot be read
        """
        path = self.path_resolver.resolve(name, MODULE_FILE_EXTENSION, meta)
        source = read_source_file(path)
        module = self.parse_module(path, source)
        logger.debug(f"Loaded module {name!r} from {path}: {len(module.imports)} imports")
        return module

    def load_json_with_meta(self, name: str, meta: Optional[ImportMetadata] = None) -> List[Any]:
        """
        Load the data file imported as ``import "name" as $x;``.

        Returns:
            Every JSON value in the file, in order (empty for an empty file)

        Raises:
            ModuleNotFoundError: If no candidate file exists
            JSONParseError: If the file is not a sequence of JSON values
            OSError: If the file cannot be opened or read
        """
        path = self.path_resolver.resolve(name, DATA_FILE_EXTENSION, meta)
        with open_data_file(path) as stream:
            decoder = JSONStreamDecoder(stream)
            try:
                values = list(decoder)
            except json.JSONDecodeError as e:
                raise JSONParseError(path, decoder.consumed, e) from e
        logger.debug(f"Loaded {len(values)} JSON values from {path}")
        return values

    def parse_module(self, path: str, source: str) -> Module:
        """
        Parse module source and record ``path`` on its imports.

        Every import that has metadata gets a ``$$path`` entry holding the
        quoted path of this file; imports without metadata are left alone.
        """
        try:
            module = self.parser.parse(source, path)
        except ParseError as e:
            raise QueryParseError(PARSE_ERROR_KIND, path, source, e) from e
        quoted_path = json.dumps(path, ensure_ascii=False)
        for imp in module.imports:
            if imp.meta is None:
                continue
            imp.meta.append(META_PATH_KEY, ConstTerm(string=quoted_path))
        return module
