# tsinfo/parser.py

"""
Tree-sitter binding for TypeScript sources.

The rest of the engine never touches tree-sitter byte offsets: ``SourceFile``
converts them to character offsets into the decoded text, so the offsets in
``MetaInfo`` can be used directly for slicing and for range edits.
"""

import logging
from typing import Dict, List, Optional

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

logger = logging.getLogger(__name__)

# Closing tokens that end a sibling sequence (class bodies, parameter lists, ...)
END_OF_SEQUENCE = frozenset({"}", ")", "]", ">"})


def get_nodes_children(node: Node) -> List[Node]:
    """
    Retrieve the logical children of a node.

    Comments and separator tokens are skipped; a closing delimiter is kept as
    the end-of-sequence sentinel.
    """
    return [
        child for child in node.children
        if (child.is_named and child.type != "comment") or child.type in END_OF_SEQUENCE
    ]


class SourceFile:
    """Parsed source text together with its tree-sitter tree."""

    def __init__(self, path: str, text: str, tree: Tree):
        self.path = path
        self.text = text
        self.tree = tree
        self._bytes = text.encode("utf-8")
        self._ascii = len(self._bytes) == len(text)
        self._offsets: Dict[int, int] = {}

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def to_offset(self, byte_offset: int) -> int:
        """Convert a tree-sitter byte offset into a character offset."""
        if self._ascii:
            return byte_offset
        offset = self._offsets.get(byte_offset)
        if offset is None:
            offset = len(self._bytes[:byte_offset].decode("utf-8"))
            self._offsets[byte_offset] = offset
        return offset

    def get_text(self, node: Optional[Node]) -> str:
        """Return the verbatim source slice of a node."""
        if node is None:
            return ""
        return self._bytes[node.start_byte:node.end_byte].decode("utf-8")

    def get_start(self, node: Node) -> int:
        return self.to_offset(node.start_byte)

    def get_end(self, node: Node) -> int:
        return self.to_offset(node.end_byte)

    def get_full_start(self, node: Node) -> int:
        """
        Return where the node's leading trivia begins.

        That is the end of the previous non-comment sibling, the start of the
        parent for a first child, or 0 for the first top-level node.
        """
        sibling = node.prev_sibling
        while sibling is not None and sibling.type == "comment":
            sibling = sibling.prev_sibling
        if sibling is not None:
            return self.get_end(sibling)
        parent = node.parent
        if parent is None or parent.parent is None:
            return 0
        return self.get_start(parent)

    def get_leading_trivia_width(self, node: Node) -> int:
        return self.get_start(node) - self.get_full_start(node)

    def debug(self, node: Optional[Node] = None, depth: int = 0, indent: str = "") -> str:
        """
        Dump a node and ``depth`` levels of logical children.

        Returns:
            One line per node: ``<type> [<full start>:<end>]``
        """
        if node is None:
            node = self.root_node
        lines = [f"{indent}{node.type} [{self.get_full_start(node)}:{self.get_end(node)}]"]
        if depth > 0:
            for child in get_nodes_children(node):
                lines.append(self.debug(child, depth - 1, indent + "  "))
        dump = "\n".join(lines)
        if not indent:
            logger.debug(f"Syntax tree of {self.path}:\n{dump}")
        return dump


class TypeScriptParser:
    """Creates ``SourceFile`` objects with the tree-sitter TypeScript grammars."""

    GRAMMARS = {
        "typescript": tree_sitter_typescript.language_typescript,
        "tsx": tree_sitter_typescript.language_tsx,
    }

    def __init__(self, language: str = "typescript"):
        """
        Initialize the parser.

        Args:
            language: Grammar for files without a ``.tsx`` extension
        """
        if language not in self.GRAMMARS:
            raise ValueError(f"Unsupported grammar: {language}")
        self.language = language
        self._parsers: Dict[str, Parser] = {}

    def _get_parser(self, language: str) -> Parser:
        parser = self._parsers.get(language)
        if parser is None:
            parser = Parser(Language(self.GRAMMARS[language]()))
            self._parsers[language] = parser
            logger.debug(f"Initialized {language} grammar")
        return parser

    def language_for(self, path: str) -> str:
        """Pick the grammar for a file path."""
        if path.endswith(".tsx"):
            return "tsx"
        return self.language

    def parse(self, path: str, text: str) -> SourceFile:
        """
        Parse source text.

        Args:
            path: Virtual or real file name, used for grammar selection
            text: Source text

        Returns:
            Parsed source file
        """
        tree = self._get_parser(self.language_for(path)).parse(text.encode("utf-8"))
        return SourceFile(path, text, tree)
