"""
Parser

Parses the header of a jq module (module/import/include directives) with
Lark; the body after the directives is kept as raw text.
"""

import logging
from pathlib import Path
from typing import Optional

from lark import Lark
from lark.exceptions import (
    UnexpectedCharacters,
    UnexpectedEOF,
    UnexpectedInput,
    UnexpectedToken,
    VisitError,
)

from ..shared.nodes import Module
from ..shared.source_location import SourceLocation
from ..utils.config import DEFAULT_PARSER_CACHE_FILE
from .transformers.base import ModuleTransformer

logger = logging.getLogger("jqloader.frontend.parser")


class ParseError(Exception):
    """Parse error with source location"""
    def __init__(self, message: str, source_file: str, location: Optional[SourceLocation] = None):
        self.message = message
        self.source_file = source_file
        self.location = location
        super().__init__(f"{message} in {source_file}")


def _describe(e: UnexpectedInput) -> str:
    if isinstance(e, UnexpectedToken):
        if e.token.type == "$END":
            return "unexpected end of input"
        return f"unexpected token {str(e.token)!r}"
    if isinstance(e, UnexpectedCharacters):
        return f"unexpected character {e.char!r}"
    if isinstance(e, UnexpectedEOF):
        return "unexpected end of input"
    return str(e)


class Parser:
    """
    Module header parser.

    - Takes source text, returns a Module
    - Preserves source locations of imports
    - Converts Lark errors into ParseError
    - Uses Lark's grammar cache (LALR tables only, never parsed modules)
    """

    def __init__(self, cache_file: str = DEFAULT_PARSER_CACHE_FILE):
        grammar_path = Path(__file__).parent / "grammar.lark"
        self.parser = Lark.open(
            str(grammar_path),
            start='start',
            parser='lalr',              # Required for caching
            cache=cache_file,
            propagate_positions=True,   # Locations for imports and errors
            maybe_placeholders=False,
        )

    def parse(self, source: str, source_file: str = "<module>") -> Module:
        """Parse source text to a Module"""
        try:
            tree = self.parser.parse(source)
            # Fresh transformer per call so one parser can serve several threads
            return ModuleTransformer(source_file).transform(tree)

        except UnexpectedInput as e:
            location = None
            line = getattr(e, "line", -1)
            if isinstance(line, int) and line > 0:
                location = SourceLocation(file=source_file, line=line, column=e.column)
            logger.debug(f"Parse error in {source_file} at {location}: {_describe(e)}")
            raise ParseError(_describe(e), source_file, location) from e

        except VisitError as e:
            # Rejected constant (e.g. bad string escape) inside a valid shape
            location = None
            meta = getattr(e.obj, "meta", None)
            if meta is not None and not meta.empty:
                location = SourceLocation(
                    file=source_file,
                    line=meta.line,
                    column=meta.column,
                    end_line=meta.end_line,
                    end_column=meta.end_column,
                )
            raise ParseError(str(e.orig_exc), source_file, location) from e
