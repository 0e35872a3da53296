# tsinfo/models.py

"""
Information model for doclet-relevant TypeScript source nodes.

Every record is a small dataclass with a fixed ``kind`` discriminator. The
records replace direct work with the syntax tree: a source file becomes a
flat list of records (``SourceInfo.code``) that the resolver, the
inheritance flattener and the documentation tooling consume.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class MetaInfo:
    """Position of a record in its source file (character offsets)."""

    begin: int
    end: int
    overhead: int = 0  # width of leading trivia before ``begin``
    syntax: str = ""  # tree-sitter node type
    kind: str = field(default="Meta", init=False)


@dataclass
class DocletInfo:
    """A parsed ``/** ... */`` block: tag name -> list of tag texts."""

    tags: Dict[str, List[str]] = field(default_factory=dict)
    meta: Optional[MetaInfo] = None
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = field(default="Doclet", init=False)


@dataclass
class VariableInfo:
    """Variable declaration, function parameter or generic type parameter."""

    name: str
    type: Optional[str] = None
    value: Any = None
    flags: Optional[List[str]] = None
    doclet: Optional[DocletInfo] = None
    meta: Optional[MetaInfo] = None
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = field(default="Variable", init=False)


@dataclass
class PropertyInfo:
    """Class field, interface member or object literal property."""

    name: str
    type: Optional[str] = None
    value: Any = None
    inherited: Optional[bool] = None
    flags: Optional[List[str]] = None
    doclet: Optional[DocletInfo] = None
    meta: Optional[MetaInfo] = None
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = field(default="Property", init=False)


@dataclass
class FunctionInfo:
    """Function, method or constructor declaration."""

    name: str
    generics: Optional[List[VariableInfo]] = None
    parameters: Optional[List[VariableInfo]] = None
    return_: Optional[str] = None
    inherited: Optional[bool] = None
    flags: Optional[List[str]] = None
    doclet: Optional[DocletInfo] = None
    meta: Optional[MetaInfo] = None
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = field(default="Function", init=False)


@dataclass
class ObjectInfo:
    """Object literal, optionally written with a type assertion."""

    properties: List[Union[PropertyInfo, DocletInfo]] = field(default_factory=list)
    type: Optional[str] = None
    flags: Optional[List[str]] = None
    doclet: Optional[DocletInfo] = None
    meta: Optional[MetaInfo] = None
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = field(default="Object", init=False)


@dataclass
class ClassInfo:
    name: str
    extends: Optional[List[str]] = None
    implements: Optional[List[str]] = None
    generics: Optional[List[VariableInfo]] = None
    properties: List[Any] = field(default_factory=list)
    flags: Optional[List[str]] = None
    doclet: Optional[DocletInfo] = None
    meta: Optional[MetaInfo] = None
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = field(default="Class", init=False)


@dataclass
class InterfaceInfo:
    name: str
    extends: Optional[List[str]] = None
    implements: Optional[List[str]] = None
    generics: Optional[List[VariableInfo]] = None
    properties: List[Any] = field(default_factory=list)
    flags: Optional[List[str]] = None
    doclet: Optional[DocletInfo] = None
    meta: Optional[MetaInfo] = None
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = field(default="Interface", init=False)


@dataclass
class ImportInfo:
    """
    Import declaration.

    ``imports`` maps each original exported name to the name bound in the
    importing file; a default import uses the key ``"default"``.
    """

    from_: str
    imports: Dict[str, str] = field(default_factory=dict)
    flags: Optional[List[str]] = None
    doclet: Optional[DocletInfo] = None
    meta: Optional[MetaInfo] = None
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = field(default="Import", init=False)


@dataclass
class ExportInfo:
    name: Optional[str] = None
    object: Any = None
    flags: Optional[List[str]] = None
    doclet: Optional[DocletInfo] = None
    meta: Optional[MetaInfo] = None
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = field(default="Export", init=False)


@dataclass
class DeconstructInfo:
    """Destructuring pattern: source property name -> bound local name."""

    deconstructs: Dict[str, str] = field(default_factory=dict)
    from_: Optional[str] = None
    type: Optional[str] = None
    flags: Optional[List[str]] = None
    doclet: Optional[DocletInfo] = None
    meta: Optional[MetaInfo] = None
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = field(default="Deconstruct", init=False)


@dataclass
class SourceInfo:
    path: str
    code: List[Any] = field(default_factory=list)
    node: Any = field(default=None, repr=False, compare=False)
    kind: str = field(default="Source", init=False)


@dataclass
class ResolvedInfo:
    """Result of a type resolution query."""

    type: str
    path: str
    resolved_path: str
    resolved_info: Any = None
    kind: str = field(default="Resolved", init=False)


CodeInfo = Union[
    ClassInfo,
    DeconstructInfo,
    DocletInfo,
    ExportInfo,
    FunctionInfo,
    ImportInfo,
    InterfaceInfo,
    ObjectInfo,
    PropertyInfo,
    SourceInfo,
    VariableInfo,
]

# Records that carry a ``name`` usable for lookups
NAMED_KINDS = frozenset({"Class", "Function", "Interface", "Property", "Variable"})
