# tsinfo/__init__.py
"""
TypeScript Source Info

Turns TypeScript syntax trees into a doclet-aware information model:
classification of declarations, doclet parsing, cross-file type
resolution, inheritance flattening and offset-based source rewriting.
"""

from typing import Optional

from .analyzer import SourceAnalyzer
from .config_loader import ConfigLoader, setup_logging
from .doclets import (
    add_tag,
    extract_tag_text,
    merge_doclet_infos,
    new_doclet_info,
    remove_all_doclets,
    remove_tag,
)
from .edits import Edit, apply_edits
from .inheritance import extract_info, new_code_info
from .models import ResolvedInfo, SourceInfo
from .resolver import extract_types, is_native_type
from .serialization import to_dict, to_doclet_string, to_json_string

__version__ = "1.0.0"

_default_analyzer: Optional[SourceAnalyzer] = None


def get_default_analyzer() -> SourceAnalyzer:
    """Return the analyzer behind the module-level functions, creating it on first use."""
    global _default_analyzer
    if _default_analyzer is None:
        _default_analyzer = SourceAnalyzer()
    return _default_analyzer


def get_source_info(path: str, text: Optional[str] = None,
                    include_nodes: bool = False) -> SourceInfo:
    return get_default_analyzer().get_source_info(path, text, include_nodes)


def resolve_type(source_info: SourceInfo, type_name: str) -> Optional[ResolvedInfo]:
    return get_default_analyzer().resolve_type(source_info, type_name)


def auto_extend_info(source_info: SourceInfo, info):
    return get_default_analyzer().auto_extend_info(source_info, info)


__all__ = [
    'ConfigLoader',
    'Edit',
    'SourceAnalyzer',
    'add_tag',
    'apply_edits',
    'auto_extend_info',
    'extract_info',
    'extract_tag_text',
    'extract_types',
    'get_default_analyzer',
    'get_source_info',
    'is_native_type',
    'merge_doclet_infos',
    'new_code_info',
    'new_doclet_info',
    'remove_all_doclets',
    'remove_tag',
    'resolve_type',
    'setup_logging',
    'to_dict',
    'to_doclet_string',
    'to_json_string',
]
