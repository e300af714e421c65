"""
Module Path Resolution

Pure path resolution for jq modules and data files:

- foo      → root/foo.jq or root/foo/foo.jq
- lib/foo  → root/lib/foo.jq or root/lib/foo/foo.jq

for every search root in priority order. An import carrying
``{search: "..."}`` metadata is first looked up relative to the file that
declared it (``$$path``), ahead of all configured roots.

This class is stateless apart from its search roots and can be shared/reused.
"""

import logging
import os
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from ..shared.errors import ModuleNotFoundError
from ..shared.nodes import ImportMetadata
from ..utils.config import META_PATH_KEY, META_SEARCH_KEY

logger = logging.getLogger(__name__)


def _join(*elems: str) -> str:
    """Join non-empty elements with the separator, then normalize"""
    parts = [e for e in elems if e]
    if not parts:
        return ""
    path = parts[0]
    for part in parts[1:]:
        # A leading separator does not restart the path
        path = os.path.join(path, part.lstrip(os.sep))
    return os.path.normpath(path)


@dataclass(frozen=True)
class SearchMeta:
    """
    The part of an import's metadata that steers resolution.

    Missing keys and values of the wrong type both count as absent.
    """
    importer_path: Optional[str] = None
    search: Optional[str] = None

    @classmethod
    def from_meta(cls, meta: Optional[ImportMetadata]) -> "SearchMeta":
        if not meta:
            return cls()
        importer_path = meta.get(META_PATH_KEY)
        search = meta.get(META_SEARCH_KEY)
        return cls(
            importer_path=importer_path if isinstance(importer_path, str) else None,
            search=search if isinstance(search, str) else None,
        )

    def search_root(self) -> Optional[str]:
        """Directory of the importer joined with the search hint"""
        if self.importer_path is None or self.search is None:
            return None
        return _join(os.path.dirname(self.importer_path) or ".", self.search)


class PathResolver:
    """
    Pure path resolution over an ordered list of search roots.

    Two layouts are probed under each root, the flat file first and then the
    package directory that repeats the module's base name. The first existing
    candidate wins.
    """

    def __init__(self, search_roots: Iterable[str]):
        """
        Args:
            search_roots: Directories (or files) in priority order; made
                          absolute once, here, and never changed afterwards.
        """
        self.search_roots: Tuple[str, ...] = tuple(
            os.path.abspath(os.fspath(root)) for root in search_roots
        )
        logger.debug(f"PathResolver: search roots {list(self.search_roots)}")

    def effective_roots(self, meta: Optional[ImportMetadata] = None) -> List[str]:
        """Search roots for one lookup, the importer-relative root first"""
        roots = list(self.search_roots)
        search_root = SearchMeta.from_meta(meta).search_root()
        if search_root:
            roots.insert(0, search_root)
        return roots

    def candidates(
        self,
        name: str,
        extension: str,
        meta: Optional[ImportMetadata] = None,
    ) -> Iterator[str]:
        """
        Yield every path probed for ``name``, in probe order.

        Examples:
            candidates('lib/foo', '.jq') under root '/r' →
                '/r/lib/foo.jq', '/r/lib/foo/foo.jq'
        """
        base_name = os.path.basename(os.path.normpath(name))
        for root in self.effective_roots(meta):
            yield _join(root, name + extension)
            yield _join(root, name, base_name + extension)

    def resolve(
        self,
        name: str,
        extension: str,
        meta: Optional[ImportMetadata] = None,
    ) -> str:
        """
        Resolve a module name to the first existing candidate path.

        Raises:
            ModuleNotFoundError: If no candidate exists on any root
        """
        for path in self.candidates(name, extension, meta):
            if os.path.exists(path):
                logger.debug(f"Resolved {name!r} ({extension}) to {path}")
                return path
        raise ModuleNotFoundError(name)
