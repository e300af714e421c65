"""
Module Header Transformer
Converts the Lark parse tree of a module header into Module / Import nodes
"""

import json
import logging
from typing import Optional, Union

from lark import Transformer, v_args
from lark.lexer import Token
from typing_extensions import TypeAlias

from ...shared.nodes import ConstObject, ConstObjectKeyVal, ConstTerm, Import, Module
from ...shared.source_location import SourceLocation

# Lark Meta object carries the position of a rule match
LarkMeta: TypeAlias = Union[None, object]
ConstValue: TypeAlias = Union[ConstTerm, ConstObject]

logger: logging.Logger = logging.getLogger(__name__)


def _decode_string(token: Token) -> str:
    """Decode a quoted string literal (JSON escapes)"""
    return json.loads(str(token))


def _as_term(value: ConstValue) -> ConstTerm:
    # const_object is inlined into const_value, wrap it here
    if isinstance(value, ConstObject):
        return ConstTerm(object=value)
    return value


@v_args(inline=True, meta=True)
class ModuleTransformer(Transformer):
    """
    Module header transformer.

    One instance per parse: ``current_file`` is baked into every location.
    """

    def __init__(self, source_file: str) -> None:
        super().__init__()
        self.current_file: str = source_file

    def _extract_location(self, meta: LarkMeta) -> Optional[SourceLocation]:
        """Extract location from Lark meta object"""
        if meta is None or getattr(meta, "empty", True):
            return None
        return SourceLocation(
            file=self.current_file,
            line=meta.line,
            column=meta.column,
            end_line=meta.end_line,
            end_column=meta.end_column,
        )

    # =========================================================================
    # MODULE STRUCTURE
    # =========================================================================

    def start(self, meta: LarkMeta, *items: Union[ConstObject, Import, Token]) -> Module:
        module = Module()
        for item in items:
            if isinstance(item, Import):
                module.imports.append(item)
            elif isinstance(item, ConstObject):
                module.meta = item
            else:
                module.body = str(item)
        logger.debug(f"Parsed module header of {self.current_file}: {len(module.imports)} imports")
        return module

    def module_directive(self, meta: LarkMeta, obj: ConstObject) -> ConstObject:
        return obj

    def import_stmt(self, meta: LarkMeta, path: Token, alias: Token, obj: Optional[ConstObject] = None) -> Import:
        """Grammar: "import" STRING "as" (IDENT | VARIABLE) const_object? ";" """
        return Import(
            import_path=_decode_string(path),
            import_alias=str(alias),
            meta=obj,
            location=self._extract_location(meta),
        )

    def include_stmt(self, meta: LarkMeta, path: Token, obj: Optional[ConstObject] = None) -> Import:
        """Grammar: "include" STRING const_object? ";" """
        return Import(
            include_path=_decode_string(path),
            meta=obj,
            location=self._extract_location(meta),
        )

    # =========================================================================
    # CONSTANT TERMS
    # =========================================================================

    def const_object(self, meta: LarkMeta, *key_vals: ConstObjectKeyVal) -> ConstObject:
        return ConstObject(key_vals=list(key_vals))

    def const_kv(self, meta: LarkMeta, key: str, value: ConstValue) -> ConstObjectKeyVal:
        return ConstObjectKeyVal(key=key, val=_as_term(value))

    def ident_key(self, meta: LarkMeta, token: Token) -> str:
        return str(token)

    def string_key(self, meta: LarkMeta, token: Token) -> str:
        return _decode_string(token)

    def const_array(self, meta: LarkMeta, *values: ConstValue) -> ConstTerm:
        return ConstTerm(array=[_as_term(v) for v in values])

    def const_number(self, meta: LarkMeta, token: Token) -> ConstTerm:
        return ConstTerm(number=str(token))

    def const_string(self, meta: LarkMeta, token: Token) -> ConstTerm:
        _decode_string(token)  # reject invalid escapes at parse time
        return ConstTerm(string=str(token))

    def const_null(self, meta: LarkMeta) -> ConstTerm:
        return ConstTerm(keyword="null")

    def const_true(self, meta: LarkMeta) -> ConstTerm:
        return ConstTerm(keyword="true")

    def const_false(self, meta: LarkMeta) -> ConstTerm:
        return ConstTerm(keyword="false")
