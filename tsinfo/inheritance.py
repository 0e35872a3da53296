# tsinfo/inheritance.py

"""
Inheritance flattening for classes and interfaces.

Members of resolved base declarations are copied into the extending record
and marked as inherited, so documentation tooling can treat the record as
self-contained.
"""

import logging
from dataclasses import fields, is_dataclass, replace
from typing import Any, List, Optional, Sequence

from .models import NAMED_KINDS, ClassInfo, InterfaceInfo, SourceInfo
from .resolver import TypeResolver

logger = logging.getLogger(__name__)

_EXTENDABLE_KINDS = ("Class", "Interface")


def extract_info(infos: Sequence[Any], name: str) -> Optional[List[Any]]:
    """Return all named records (class, function, ...) with the given name, or None."""
    found = [
        info for info in infos
        if info.kind in NAMED_KINDS and info.name == name
    ]
    return found or None


def _copy_value(value: Any) -> Any:
    if isinstance(value, list):
        return [_copy_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _copy_value(item) for key, item in value.items()}
    if is_dataclass(value) and not isinstance(value, type):
        return new_code_info(value)
    # Strings, numbers and syntax tree nodes are shared
    return value


def new_code_info(template: Any) -> Any:
    """
    Create a copy of a record.

    Nested records, lists and doclet tags are copied; the attached syntax
    tree node is shared with the template.
    """
    changes = {
        f.name: _copy_value(getattr(template, f.name))
        for f in fields(template)
        if f.init and f.name != "node"
    }
    return replace(template, **changes)


class InheritanceFlattener:
    """Copies inherited members into classes and interfaces."""

    def __init__(self, resolver: TypeResolver):
        self.resolver = resolver

    def get_base_types(self, info) -> List[str]:
        """
        Collect the user types named in the ``extends`` clause of a record.

        Native names and the record's own type parameters are left out.
        """
        own_generics = {generic.name for generic in (info.generics or [])}
        base_types: List[str] = []
        for extends_type in info.extends or []:
            for type_name in self.resolver.extract_types(extends_type):
                if type_name not in own_generics and type_name not in base_types:
                    base_types.append(type_name)
        return base_types

    def auto_extend_info(self, source_info: SourceInfo, info):
        """
        Add the members of all base declarations to a class or interface.

        Args:
            source_info: Source file the record belongs to
            info: Class or interface record; modified in place

        Returns:
            The record, or None if a base type could not be resolved; the
            record is left untouched in that case
        """
        if not isinstance(info, (ClassInfo, InterfaceInfo)):
            raise TypeError(f"Cannot extend {type(info).__name__} records")

        bases = []

        for type_name in self.get_base_types(info):
            resolved = self.resolver.resolve(source_info, type_name)

            if resolved is None:
                logger.debug(f"Base type '{type_name}' of '{info.name}' not found")
                return None

            base = resolved.resolved_info
            if base is None or base.kind not in _EXTENDABLE_KINDS:
                continue

            bases.append(base)

        for base in bases:
            for member in base.properties:
                member_name = getattr(member, "name", None)

                if not member_name or extract_info(info.properties, member_name):
                    continue

                inherited = new_code_info(member)
                inherited.inherited = True
                info.properties.append(inherited)

        logger.debug(f"Extended '{info.name}' with {len(bases)} base type(s)")

        return info
