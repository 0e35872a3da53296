# tsinfo/serialization.py

"""
Rendering of records: doclet comment blocks and JSON-ready dictionaries.
"""

import json
import logging
from dataclasses import fields, is_dataclass
from typing import Any, Optional, Union

from tree_sitter import Node

from .models import DocletInfo
from .parser import SourceFile
from .utils.text_utils import TextUtils

logger = logging.getLogger(__name__)

# Dataclass field names that shadow Python keywords
_RENAMED_FIELDS = {
    "from_": "from",
    "return_": "return",
}


def _wrap_line(line: str, indent: str, line_width: int, min_break: int) -> str:
    line = line.rstrip()
    if len(line) > line_width:
        break_at = line[:line_width].rfind(" ")
        if break_at >= min_break:
            return line[:break_at] + indent + " * " + line[break_at:].strip()
    return line


def to_doclet_string(doclet: DocletInfo, indent: Union[int, str] = 0,
                     line_width: int = 80, min_break: int = 40) -> str:
    """
    Render a doclet as a ``/** ... */`` block.

    The description comes first, unlabeled, unless it starts with ``{``; all
    other tags follow as ``@tag text`` blocks separated by empty comment
    lines, with continuation lines aligned after the tag name.

    Args:
        doclet: Doclet to render
        indent: Indentation as a number of spaces or a string
        line_width: Lines longer than this are broken once at a space
        min_break: Lines are not broken before this column

    Returns:
        The block, starting with a newline and ending with ``*/`` and a newline
    """
    indent = "\n" + TextUtils.pad(indent).lstrip("\n")
    tag_names = list(doclet.tags)
    compiled = indent + "/**"

    description = doclet.tags.get("description")
    if description is not None:
        text = "\n\n".join(description).strip()
        if not text.startswith("{"):
            compiled += indent + " * " + (indent + " * ").join(text.split("\n"))
            tag_names.remove("description")

    for tag in tag_names:
        continuation = indent + " * " + " " * (len(tag) + 2)
        for text in doclet.tags[tag]:
            lines = [line.strip() for line in text.strip().split("\n")]
            compiled += indent + " *" + indent + " * @" + tag + " " + continuation.join(lines)

    compiled = "\n".join(
        _wrap_line(line, indent, line_width, min_break)
        for line in compiled.split("\n")
    )

    return compiled + indent + " */\n"


def _to_text(value: Union[Node, SourceFile]) -> str:
    if isinstance(value, SourceFile):
        return value.text
    return value.text.decode("utf-8")


def to_dict(value: Any) -> Any:
    """
    Convert records into plain dictionaries and lists.

    Empty optional fields are omitted; ``kind`` is always the first key.
    Attached syntax tree nodes are replaced by their source text.
    """
    if is_dataclass(value) and not isinstance(value, type):
        result = {"kind": value.kind}
        for f in fields(value):
            item = getattr(value, f.name)
            if f.name == "kind" or item is None:
                continue
            result[_RENAMED_FIELDS.get(f.name, f.name)] = to_dict(item)
        return result
    if isinstance(value, (Node, SourceFile)):
        return _to_text(value)
    if isinstance(value, dict):
        return {key: to_dict(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_dict(item) for item in value]
    return value


def to_json_string(tree: Any, indent: Optional[int] = None) -> str:
    """Serialize records (or lists of records) to JSON."""
    return json.dumps(to_dict(tree), indent=indent, ensure_ascii=False)
