# tsinfo/doclets.py

"""
Doclet extraction and tag handling.

A doclet is a ``/** ... */`` block. It is stored as ``DocletInfo.tags``,
an ordered mapping from tag name to every text given for that tag. The
untagged leading text is stored under ``description``.
"""

import re
import logging
from typing import List, Optional, Tuple

from tree_sitter import Node

from .models import DocletInfo, MetaInfo
from .parser import SourceFile
from .utils.text_utils import TextUtils

logger = logging.getLogger(__name__)

DOCLET_PATTERN = re.compile(r"/\*\*.*?\*/", re.DOTALL)

# "@tag" at the start of a comment line, after the optional gutter asterisk
_TAG_START = re.compile(r"^[ \t]*\*?[ \t]*@([A-Za-z_$][\w$]*)", re.MULTILINE)
_GUTTER = re.compile(r"^[ \t]*\*?[ \t]?")
_LINE_BREAK = re.compile(r"\r?\n")
_TAG_LINE_BREAK = re.compile(r"\r?\n *\*?")

# Tags whose leading {type} is not part of the stored text
_RETURN_TAGS = ("return", "returns")

# Doclet removal: the block, leftover placeholder statements, blank runs
_REMOVE_DOCLET = re.compile(r"\n *\/\*\*.*?\*\/", re.DOTALL)
_REMOVE_PLACEHOLDER = re.compile(r"\n(\(?)''\1;[^\n]*", re.DOTALL)
_REMOVE_BLANK_RUN = re.compile(r"\n\s+\n", re.DOTALL)


def new_doclet_info(template: Optional[DocletInfo] = None) -> DocletInfo:
    """
    Create a new doclet, copying the tags of a template.

    The tag lists are copied, so the new doclet never shares state with the
    template.
    """
    doclet = DocletInfo()
    if template is not None:
        doclet.tags = {tag: list(texts) for tag, texts in template.tags.items()}
    return doclet


def add_tag(doclet: DocletInfo, tag: str, text: Optional[str] = None) -> DocletInfo:
    """
    Add a tag to a doclet.

    Args:
        doclet: Doclet to modify
        tag: Tag name
        text: Text to append; the tag is created even without text

    Returns:
        The modified doclet
    """
    texts = doclet.tags.setdefault(tag, [])
    if text:
        texts.append(text)
    return doclet


def remove_tag(doclet: DocletInfo, tag: str) -> List[str]:
    """Remove a tag and return its texts (empty if the tag was absent)."""
    return doclet.tags.pop(tag, [])


def extract_tag_text(doclet: DocletInfo, tag: str, all_text: bool = False) -> Optional[str]:
    """
    Retrieve tag text.

    Args:
        doclet: Doclet to read from
        tag: Tag name
        all_text: Join all occurrences with blank lines instead of
            returning the last one

    Returns:
        Tag text, or None if the tag has no text
    """
    texts = doclet.tags.get(tag)
    if not texts:
        return None
    if all_text:
        return "\n\n".join(texts)
    return texts[-1]


def merge_doclet_infos(target: Optional[DocletInfo], *sources: DocletInfo) -> DocletInfo:
    """
    Merge the tags of several doclets into the first.

    Identical texts of a tag are kept once, in first-seen order.

    Args:
        target: Doclet to merge into; a new one is created for None
        *sources: Doclets to merge from

    Returns:
        The target doclet
    """
    if target is None:
        target = new_doclet_info()
    for source in sources:
        for tag, texts in source.tags.items():
            target_texts = target.tags.setdefault(tag, [])
            for text in texts:
                if text not in target_texts:
                    target_texts.append(text)
    return target


def remove_all_doclets(source_code: str) -> str:
    """Remove every doclet block (and its line) from source code."""
    source_code = _REMOVE_DOCLET.sub("", source_code)
    source_code = _REMOVE_PLACEHOLDER.sub("", source_code)
    return _REMOVE_BLANK_RUN.sub("\n\n", source_code)


def parse_doclet(block: str, begin: int = 0) -> DocletInfo:
    """
    Parse one ``/** ... */`` block.

    Args:
        block: The raw comment block
        begin: Character offset of the block in its file

    Returns:
        Doclet with ``description`` (if any) and one entry per tag name
    """
    doclet = new_doclet_info()
    doclet.meta = MetaInfo(begin=begin, end=begin + len(block), syntax="comment")

    body = block[3:-2]
    tag_matches = list(_TAG_START.finditer(body))

    description_end = tag_matches[0].start() if tag_matches else len(body)
    description = "\n".join(
        _GUTTER.sub("", line).rstrip()
        for line in _LINE_BREAK.split(body[:description_end])
    ).strip()
    if description:
        add_tag(doclet, "description", description)

    for index, match in enumerate(tag_matches):
        tag_name = match.group(1)
        tag_end = (
            tag_matches[index + 1].start()
            if index + 1 < len(tag_matches) else
            len(body)
        )
        text = "\n".join(_TAG_LINE_BREAK.split(body[match.end():tag_end].strip())).strip()
        if tag_name in _RETURN_TAGS:
            text = TextUtils.strip_braced_prefix(text)
        add_tag(doclet, tag_name, text)

    return doclet


def get_doclets_between(source_file: SourceFile, start_node: Node, end_node: Node,
                        leading: bool = False) -> List[Tuple[int, str]]:
    """
    Find raw doclet blocks between two nodes.

    The span runs from the end of ``start_node`` to the start of
    ``end_node``; if both are the same node it starts at the node's full
    start, so the node's own leading comments are included. With ``leading``
    the span always starts at the full start of ``start_node``.

    Returns:
        ``(offset, block)`` pairs in source order
    """
    end = source_file.get_start(end_node)
    if leading or start_node == end_node:
        start = source_file.get_full_start(start_node)
    else:
        start = source_file.get_end(start_node)

    if start >= end:
        return []

    return [
        (match.start(), match.group(0))
        for match in DOCLET_PATTERN.finditer(source_file.text, start, end)
    ]


def get_doclet_infos_between(source_file: SourceFile, start_node: Node,
                             end_node: Node, leading: bool = False) -> List[DocletInfo]:
    """Parse every doclet block between two nodes."""
    return [
        parse_doclet(block, offset)
        for offset, block in get_doclets_between(
            source_file, start_node, end_node, leading
        )
    ]
