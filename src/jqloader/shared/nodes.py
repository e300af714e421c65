"""
Module AST Definitions

Nodes produced by the module header parser: the module itself, its import
directives and the constant metadata objects attached to them.

Constant strings keep their quoted source form so that a node can be
rendered back to jq source unchanged; ``to_value()`` decodes them.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from typing_extensions import TypeAlias

from .source_location import SourceLocation

# Decoded import metadata as handed to the loader
ImportMetadata: TypeAlias = Dict[str, Any]

_IDENT_RE = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

_KEYWORD_VALUES: Dict[str, Any] = {"null": None, "true": True, "false": False}


def _parse_number(text: str) -> Any:
    """Parse numeric literal"""
    if "." in text or "e" in text.lower():
        return float(text)
    return int(text)


@dataclass
class ConstTerm:
    """
    Constant term: exactly one of the fields is set.

    ``string`` holds the quoted literal (e.g. ``'"lib"'``), ``number`` the
    literal digits and ``keyword`` one of ``null``, ``true``, ``false``.
    """
    object: Optional[ConstObject] = None
    array: Optional[List[ConstTerm]] = None
    number: Optional[str] = None
    string: Optional[str] = None
    keyword: Optional[str] = None

    def to_value(self) -> Any:
        if self.object is not None:
            return self.object.to_value()
        if self.array is not None:
            return [term.to_value() for term in self.array]
        if self.number is not None:
            return _parse_number(self.number)
        if self.string is not None:
            return json.loads(self.string)
        return _KEYWORD_VALUES[self.keyword]

    def __str__(self) -> str:
        if self.object is not None:
            return str(self.object)
        if self.array is not None:
            return "[" + ", ".join(str(term) for term in self.array) + "]"
        if self.number is not None:
            return self.number
        if self.string is not None:
            return self.string
        return self.keyword or "null"


@dataclass
class ConstObjectKeyVal:
    key: str
    val: ConstTerm

    def __str__(self) -> str:
        key = self.key if _IDENT_RE.match(self.key) else json.dumps(self.key, ensure_ascii=False)
        return f"{key}: {self.val}"


@dataclass
class ConstObject:
    """Constant object literal, e.g. the metadata of an import"""
    key_vals: List[ConstObjectKeyVal] = field(default_factory=list)

    def append(self, key: str, val: ConstTerm) -> None:
        self.key_vals.append(ConstObjectKeyVal(key=key, val=val))

    def to_value(self) -> Dict[str, Any]:
        # Later keys win, as in a jq object construction
        return {kv.key: kv.val.to_value() for kv in self.key_vals}

    def __str__(self) -> str:
        return "{" + ", ".join(str(kv) for kv in self.key_vals) + "}"


@dataclass
class Import:
    """
    One ``import`` or ``include`` directive.

    ``import "p" as name;`` and ``import "p" as $name;`` set ``import_path``
    and ``import_alias``; ``include "p";`` sets ``include_path``.
    """
    import_path: str = ""
    import_alias: str = ""
    include_path: str = ""
    meta: Optional[ConstObject] = None
    location: Optional[SourceLocation] = None

    @property
    def name(self) -> str:
        """Module name the directive refers to"""
        return self.import_path or self.include_path

    @property
    def is_data(self) -> bool:
        """True for ``import "p" as $name;`` (JSON data import)"""
        return self.import_alias.startswith("$")

    def meta_value(self) -> Optional[ImportMetadata]:
        if self.meta is None:
            return None
        return self.meta.to_value()

    def __str__(self) -> str:
        if self.include_path:
            head = f"include {json.dumps(self.include_path, ensure_ascii=False)}"
        else:
            head = f"import {json.dumps(self.import_path, ensure_ascii=False)} as {self.import_alias}"
        if self.meta is not None:
            head += f" {self.meta}"
        return head + ";"


@dataclass
class Module:
    """Parsed module: optional ``module`` metadata, imports, raw body"""
    meta: Optional[ConstObject] = None
    imports: List[Import] = field(default_factory=list)
    body: str = ""

    def __str__(self) -> str:
        lines = []
        if self.meta is not None:
            lines.append(f"module {self.meta};")
        lines.extend(str(i) for i in self.imports)
        if self.body:
            lines.append(self.body)
        return "\n".join(lines)
