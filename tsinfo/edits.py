# tsinfo/edits.py

"""Offset-based text edits on source code."""

import logging
from typing import Iterable, NamedTuple, Optional

from .parser import SourceFile, TypeScriptParser

logger = logging.getLogger(__name__)


class Edit(NamedTuple):
    """Replace the characters ``[start, end)`` of the original text."""

    start: int
    end: int
    text: str


def apply_edits(source_code: str, edits: Optional[Iterable]) -> str:
    """
    Apply range edits to source code.

    All offsets refer to the unmodified text. Edits are applied from the
    highest start offset down, so earlier edits never shift later ones;
    edits with the same start are applied in the order given.

    Args:
        source_code: Original text
        edits: ``Edit`` tuples or ``(start, end, text)`` sequences

    Returns:
        The edited text

    Raises:
        ValueError: An edit has ``start > end`` or reaches outside the text
    """
    if not edits:
        return source_code

    length = len(source_code)
    ordered = sorted((Edit(*edit) for edit in edits), key=lambda edit: edit.start, reverse=True)

    for start, end, text in ordered:
        if start < 0 or end > length or start > end:
            raise ValueError(f"Invalid edit range [{start}, {end}) for text of length {length}")
        source_code = source_code[:start] + text + source_code[end:]

    logger.debug(f"Applied {len(ordered)} edit(s)")

    return source_code


def change_source_file(parser: TypeScriptParser, source_file: SourceFile,
                       edits: Optional[Iterable]) -> SourceFile:
    """Apply edits to a parsed file and parse the result again."""
    if not edits:
        return source_file
    return parser.parse(source_file.path, apply_edits(source_file.text, edits))
