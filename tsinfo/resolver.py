# tsinfo/resolver.py

"""
Type resolution across files.

A type name is looked up in the imports of a source file first; a matching
import is followed into the imported file and the lookup repeats there for
the originally exported name. Only when no import leads to a declaration
are the file's own top-level declarations searched.
"""

from __future__ import annotations

import os
import re
import logging
from typing import Callable, Dict, Iterable, List, Optional

from .filesystem import FileSystem
from .models import ResolvedInfo, SourceInfo
from .utils.text_utils import TextUtils

logger = logging.getLogger(__name__)

# Names that never refer to a declaration in user code
NATIVE_TYPES = (
    'Array', 'Function', 'NaN', 'Number', 'Object', 'String', 'Symbol',
    'Extract', 'Omit', 'Partial', 'Record', 'Require',
    'Boolean', 'Date', 'Error', 'Exclude', 'InstanceType', 'Map',
    'NonNullable', 'Parameters', 'Pick', 'Promise', 'Readonly', 'RegExp',
    'Required', 'ReturnType', 'Set',
)

_TYPE_SPLIT = re.compile(r"[\W.]+")

_DECLARATION_KINDS = ("Class", "Interface", "Object", "Variable")


def is_native_type(type_name: str, native_types: Iterable[str] = NATIVE_TYPES) -> bool:
    """
    Test whether a type name belongs to the language rather than to user code.

    Short names, names that do not start upper case (type parameters such as
    ``T`` and primitives such as ``number``) and listed names are native.
    """
    return (
        len(type_name) < 2 or
        not TextUtils.is_capital_case(type_name) or
        type_name in native_types
    )


def extract_types(type_string: str, include_native_types: bool = False,
                  native_types: Iterable[str] = NATIVE_TYPES) -> List[str]:
    """
    Extract all type names of a type expression.

    Args:
        type_string: Type expression, e.g. ``Base<Options>|Other``
        include_native_types: Keep native names in the result
        native_types: Names treated as native

    Returns:
        Distinct names in order of appearance, e.g. ``['Base', 'Options', 'Other']``
    """
    native_types = frozenset(native_types)
    types: List[str] = []

    for part in _TYPE_SPLIT.split(type_string or ''):
        if not include_native_types and is_native_type(part, native_types):
            continue
        if part and part not in types:
            types.append(part)

    return types


class TypeResolver:
    """Finds the declaration behind a type name, following imports."""

    def __init__(self, load_source: Callable[[str], SourceInfo],
                 filesystem: Optional[FileSystem] = None,
                 native_types: Iterable[str] = NATIVE_TYPES):
        """
        Initialize the resolver.

        Args:
            load_source: Reads and classifies a file, returning its SourceInfo
            filesystem: Filesystem used to locate imported modules
            native_types: Type names excluded by ``extract_types``
        """
        self.load_source = load_source
        self.filesystem = filesystem or FileSystem()
        self.native_types = frozenset(native_types)

    def extract_types(self, type_string: str, include_native_types: bool = False) -> List[str]:
        return extract_types(type_string, include_native_types, self.native_types)

    def resolve(self, source_info: SourceInfo, type_name: str,
                _stack: Optional[Dict[str, SourceInfo]] = None) -> Optional[ResolvedInfo]:
        """
        Resolve a type name relative to a source file.

        Args:
            source_info: Source information to start from
            type_name: Name to resolve
            _stack: Files on the current resolution path (internal)

        Returns:
            Resolved information, or None if the name is not declared in
            reachable user code
        """
        if _stack is None:
            _stack = {os.path.abspath(source_info.path): source_info}

        # Imports first, in declaration order
        for info in source_info.code:

            if info.kind != 'Import':
                continue

            for original_name, local_name in info.imports.items():

                if type_name not in (original_name, local_name):
                    continue

                resolved_path = self.filesystem.resolve_module_path(
                    source_info.path, info.from_
                )

                if resolved_path is None:
                    continue

                if resolved_path in _stack:
                    logger.debug(
                        f"Circular import of {resolved_path} while resolving '{type_name}'"
                    )
                    return None

                resolved_source = self.load_source(resolved_path)
                _stack[resolved_path] = resolved_source

                resolved_import = self.resolve(resolved_source, original_name, _stack)

                if resolved_import is not None:
                    del _stack[resolved_path]
                    logger.debug(
                        f"Resolved '{type_name}' in {source_info.path} "
                        f"to {resolved_import.resolved_path}"
                    )
                    return ResolvedInfo(
                        type=type_name,
                        path=source_info.path,
                        resolved_path=resolved_import.resolved_path,
                        resolved_info=resolved_import.resolved_info,
                    )

        declaration = self._find_declaration(source_info, type_name)

        if declaration is None:
            return None

        return ResolvedInfo(
            type=type_name,
            path=source_info.path,
            resolved_path=source_info.path,
            resolved_info=declaration,
        )

    def _find_declaration(self, source_info: SourceInfo, type_name: str):
        """First top-level Export/Class/Interface/Object/Variable matching the name."""
        for info in source_info.code:
            if info.kind == 'Export':
                if info.object is None:
                    continue
                # Expression exports are default exports or "export ="
                if type_name in ('default', info.name, getattr(info.object, 'name', None)):
                    return info.object
            elif info.kind in _DECLARATION_KINDS:
                if getattr(info, 'name', None) == type_name:
                    return info
                if type_name == 'default' and 'default' in (info.flags or []):
                    return info
        return None
