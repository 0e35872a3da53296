# tsinfo/classifier.py

"""
Node classification: turns tree-sitter nodes into Info records.

Every node is tested against a fixed, ordered list of recognizers
(Variable, Property, Object, Interface, Import, Function, Export,
Deconstruct, Class); the first match builds the record. Nodes that match
nothing are skipped. Sibling sequences are classified into a flat list in
which doclet blocks found between nodes either attach to the following
declaration or stay as free-standing ``DocletInfo`` entries.
"""

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from tree_sitter import Node

from .doclets import get_doclet_infos_between
from .models import (
    ClassInfo,
    CodeInfo,
    DeconstructInfo,
    ExportInfo,
    FunctionInfo,
    ImportInfo,
    InterfaceInfo,
    MetaInfo,
    ObjectInfo,
    PropertyInfo,
    VariableInfo,
)
from .parser import END_OF_SEQUENCE, SourceFile, get_nodes_children
from .utils.path_utils import PathUtils
from .utils.text_utils import TextUtils

logger = logging.getLogger(__name__)

MODIFIERS = frozenset({
    "abstract", "async", "declare", "default", "export", "override",
    "private", "protected", "public", "readonly", "static",
})

_MODIFIER_NODES = frozenset({"accessibility_modifier", "override_modifier"})

_VARIABLE_NODES = frozenset({
    "optional_parameter", "required_parameter", "type_parameter",
    "variable_declarator",
})
_DECONSTRUCT_NODES = frozenset({
    "optional_parameter", "required_parameter", "variable_declarator",
})
_BINDING_PATTERNS = frozenset({"array_pattern", "object_pattern"})
_PROPERTY_NODES = frozenset({
    "pair", "property_signature", "public_field_definition",
    "shorthand_property_identifier",
})
_ASSERTION_NODES = frozenset({"as_expression", "satisfies_expression"})
_FUNCTION_NODES = frozenset({
    "abstract_method_signature", "function_declaration", "function_signature",
    "generator_function_declaration", "method_definition",
})
# anonymous declarations allowed after `export default`
_ANONYMOUS_DEFAULTS = frozenset({
    "class", "function", "function_expression", "generator_function",
})
_CLASS_NODES = frozenset({"abstract_class_declaration", "class_declaration"})
_VARIABLE_LISTS = frozenset({"lexical_declaration", "variable_declaration"})
_DECLARATION_WRAPPERS = frozenset({"ambient_declaration", "export_statement"})

_TYPEOF = {
    "arrow_function": "function",
    "false": "boolean",
    "function": "function",
    "function_expression": "function",
    "generator_function": "function",
    "object": "*",
    "string": "string",
    "template_string": "string",
    "true": "boolean",
}


class NodeClassifier:
    """Classifies the nodes of one parsed source file."""

    def __init__(self, source_file: SourceFile, include_nodes: bool = False,
                 strip_suffixes: Iterable[str] = ('.js',)):
        """
        Initialize the classifier.

        Args:
            source_file: Parsed file the nodes belong to
            include_nodes: Keep the tree-sitter node on every record
            strip_suffixes: Suffixes removed from import specifiers
        """
        self.source_file = source_file
        self.include_nodes = include_nodes
        self.strip_suffixes = list(strip_suffixes)

        # Order is significant: the first matching recognizer wins.
        self.recognizers: Tuple[Tuple[Callable[[Node], bool], Callable[[Node], Any]], ...] = (
            (self.is_variable, self.get_variable_info),
            (self.is_property, self.get_property_info),
            (self.is_object, self.get_object_info),
            (self.is_interface, self.get_interface_info),
            (self.is_import, self.get_import_info),
            (self.is_function, self.get_function_info),
            (self.is_export, self.get_export_info),
            (self.is_deconstruct, self.get_deconstruct_info),
            (self.is_class, self.get_class_info),
        )

    # ==================== Sequences ====================

    def classify_node(self, node: Node) -> Optional[CodeInfo]:
        """Return the record of the first matching recognizer, or None."""
        for matches, build in self.recognizers:
            if matches(node):
                return build(node)
        return None

    def get_child_infos(self, nodes: Sequence[Node]) -> List[CodeInfo]:
        """
        Classify a sequence of sibling nodes.

        Doclet blocks in the gap before each node are recovered. The nearest
        one attaches to the node's record unless the record is an import or
        export or the doclet carries ``@apioption``; the others stay in the
        list as free-standing doclets.
        """
        infos: List[CodeInfo] = []

        if not nodes:
            return infos

        previous_node = nodes[0]
        leading = True

        for node in nodes:

            if node.type in END_OF_SEQUENCE:
                break

            # decorators belong to the following member
            if node.type == "decorator":
                continue

            doclets = get_doclet_infos_between(
                self.source_file, previous_node, node, leading
            )
            previous_node = node
            leading = False

            children = self._classify_statement(node)

            if not children:
                infos.extend(doclets)
                continue

            if doclets:
                target = next((c for c in children if c.kind != "Doclet"), None)
                doclet = doclets[-1]
                if (
                    target is not None and
                    target.kind not in ("Export", "Import") and
                    "apioption" not in doclet.tags
                ):
                    target.doclet = doclets.pop()
                infos.extend(doclets)

            infos.extend(children)

        return infos

    def _classify_statement(self, node: Node) -> List[CodeInfo]:
        """Classify one sibling, unwrapping export/declare and variable lists."""
        outer = node
        wrapper_flags: List[str] = []

        while node.type in _DECLARATION_WRAPPERS:
            declaration = self._get_wrapped_declaration(node)
            if declaration is None:
                break
            wrapper_flags.extend(self._get_wrapper_flags(node))
            node = declaration

        if node.type in _VARIABLE_LISTS:
            children = self.get_child_infos(get_nodes_children(node))
            if wrapper_flags:
                for child in children:
                    if child.kind != "Doclet":
                        child.flags = wrapper_flags + (child.flags or [])
            return children

        info = self.classify_node(node)

        if info is None:
            return []

        if node != outer:
            info.flags = (wrapper_flags + (info.flags or [])) or None
            info.meta = self.get_info_meta(outer)

        return [info]

    def _get_wrapped_declaration(self, node: Node) -> Optional[Node]:
        if node.type == "export_statement":
            declaration = node.child_by_field_name("declaration")
            if declaration is not None:
                return declaration
            value = node.child_by_field_name("value")
            if value is not None and value.type in _ANONYMOUS_DEFAULTS:
                return value
            return None
        # ambient_declaration: `declare <declaration>`
        for child in node.named_children:
            if child.type == "comment":
                continue
            if child.type in ("statement_block", "property_identifier"):
                return None
            return child
        return None

    def _get_wrapper_flags(self, node: Node) -> List[str]:
        return [
            child.type for child in node.children
            if not child.is_named and child.type in ("declare", "default", "export")
        ]

    # ==================== Shared helpers ====================

    def get_text(self, node: Optional[Node]) -> str:
        return self.source_file.get_text(node)

    def get_info_meta(self, node: Node) -> MetaInfo:
        """Position of a node as character offsets."""
        source_file = self.source_file
        return MetaInfo(
            begin=source_file.get_start(node),
            end=source_file.get_end(node),
            overhead=source_file.get_leading_trivia_width(node),
            syntax=node.type,
        )

    def get_info_flags(self, node: Node, stop_at: Optional[Node] = None) -> Optional[List[str]]:
        """
        Collect modifier keywords written before ``stop_at``.

        Decorators are never flags. Returns None when there are no flags.
        """
        flags = []
        for child in node.children:
            if stop_at is not None and child == stop_at:
                break
            if child.type in _MODIFIER_NODES:
                flags.append(self.get_text(child))
            elif not child.is_named and child.type in MODIFIERS:
                flags.append(child.type)
        return flags or None

    def _finish(self, info: Any, node: Node, flags_stop: Optional[Node] = None,
                meta_node: Optional[Node] = None) -> Any:
        info.flags = self.get_info_flags(node, flags_stop)
        info.meta = self.get_info_meta(meta_node or node)
        if self.include_nodes:
            info.node = node
        return info

    def _get_type_text(self, node: Optional[Node]) -> Optional[str]:
        """Text of the type inside a type annotation, constraint or default."""
        if node is None:
            return None
        types = [c for c in node.named_children if c.type != "comment"]
        if types:
            return self.get_text(types[-1])
        return self.get_text(node).lstrip(":=").strip() or None

    def _get_heritage(self, clause: Node, keyword: str) -> List[str]:
        text = self.get_text(clause).strip()
        if text.startswith(keyword):
            text = text[len(keyword):]
        return TextUtils.split_top_level(text)

    def _get_value(self, initializer: Node, sanitize: bool) -> Any:
        value = self.classify_node(initializer)
        if value is not None:
            return value
        text = self.get_text(initializer)
        return TextUtils.sanitize_text(text) if sanitize else text

    def _get_name(self, node: Optional[Node]) -> str:
        if node is None:
            return ""
        if node.type == "string":
            return TextUtils.sanitize_text(self.get_text(node))
        return self.get_text(node)

    def _get_generics(self, node: Node) -> Optional[List[VariableInfo]]:
        parameters = node.child_by_field_name("type_parameters")
        if parameters is None:
            return None
        return [
            info for info in self.get_child_infos(get_nodes_children(parameters))
            if info.kind == "Variable"
        ]

    def _get_members(self, body: Optional[Node], kinds: Tuple[str, ...]) -> List[CodeInfo]:
        if body is None:
            return []
        return [
            info for info in self.get_child_infos(get_nodes_children(body))
            if info.kind in kinds
        ]

    @staticmethod
    def _child_of_type(node: Node, *types: str) -> Optional[Node]:
        for child in node.children:
            if child.type in types:
                return child
        return None

    @staticmethod
    def _get_binding(node: Node) -> Optional[Node]:
        if node.type in ("type_parameter", "variable_declarator"):
            return node.child_by_field_name("name")
        return node.child_by_field_name("pattern")

    def _get_binding_name(self, binding: Optional[Node]) -> str:
        if binding is None:
            return ""
        if binding.type == "rest_pattern":
            inner = [c for c in binding.named_children if c.type != "comment"]
            if inner:
                return self.get_text(inner[0])
        return self.get_text(binding)

    def to_typeof(self, node: Node) -> Optional[str]:
        """Reflect a literal initializer to its primitive type name."""
        if node.type == "number":
            return "bigint" if self.get_text(node).endswith("n") else "number"
        return _TYPEOF.get(node.type)

    # ==================== Variable ====================

    def is_variable(self, node: Node) -> bool:
        if node.type not in _VARIABLE_NODES:
            return False
        binding = self._get_binding(node)
        return binding is None or binding.type not in _BINDING_PATTERNS

    def get_variable_info(self, node: Node) -> VariableInfo:
        binding = self._get_binding(node)
        info = VariableInfo(name=self._get_binding_name(binding))

        if node.type == "type_parameter":
            constraint = (
                node.child_by_field_name("constraint") or
                self._child_of_type(node, "constraint")
            )
            default = (
                node.child_by_field_name("value") or
                self._child_of_type(node, "default_type")
            )
            if constraint is not None:
                info.type = self._get_type_text(constraint)
            if default is not None:
                info.value = self._get_type_text(default)
        else:
            info.type = self._get_type_text(node.child_by_field_name("type"))
            initializer = node.child_by_field_name("value")
            if initializer is not None:
                if info.type is None:
                    info.type = self.to_typeof(initializer)
                info.value = self._get_value(initializer, sanitize=True)

        return self._finish(info, node, binding)

    # ==================== Property ====================

    def is_property(self, node: Node) -> bool:
        return node.type in _PROPERTY_NODES

    def get_property_info(self, node: Node) -> PropertyInfo:
        if node.type == "shorthand_property_identifier":
            info = PropertyInfo(name=self.get_text(node))
            return self._finish(info, node)

        name_node = node.child_by_field_name("key" if node.type == "pair" else "name")
        info = PropertyInfo(name=self._get_name(name_node))

        if node.type != "pair":
            info.type = self._get_type_text(node.child_by_field_name("type"))

        if node.type != "property_signature":
            initializer = node.child_by_field_name("value")
            if initializer is not None:
                info.value = self._get_value(initializer, sanitize=False)

        return self._finish(info, node, name_node)

    # ==================== Object ====================

    def _unwrap_assertion(self, node: Node) -> Tuple[Node, Optional[str]]:
        """Split ``<expression> as <type>`` into the expression and the type text."""
        if node.type not in _ASSERTION_NODES:
            return node, None
        expressions = [c for c in node.named_children if c.type != "comment"]
        keyword = self._child_of_type(node, "as", "satisfies")
        if not expressions or keyword is None:
            return node, None
        type_text = self.source_file.text[
            self.source_file.get_end(keyword):self.source_file.get_end(node)
        ].strip()
        return expressions[0], type_text or None

    def is_object(self, node: Node) -> bool:
        return self._unwrap_assertion(node)[0].type == "object"

    def get_object_info(self, node: Node) -> ObjectInfo:
        node, type_text = self._unwrap_assertion(node)
        info = ObjectInfo(
            properties=self._get_members(node, ("Doclet", "Property")),
            type=type_text,
        )
        return self._finish(info, node)

    # ==================== Interface ====================

    def is_interface(self, node: Node) -> bool:
        return node.type == "interface_declaration"

    def get_interface_info(self, node: Node) -> InterfaceInfo:
        name_node = node.child_by_field_name("name")
        info = InterfaceInfo(name=self.get_text(name_node))
        info.generics = self._get_generics(node)

        clause = self._child_of_type(node, "extends_type_clause")
        if clause is not None:
            info.extends = self._get_heritage(clause, "extends")

        info.properties = self._get_members(
            node.child_by_field_name("body"),
            ("Doclet", "Interface", "Property")
        )
        return self._finish(info, node, name_node)

    # ==================== Import ====================

    def is_import(self, node: Node) -> bool:
        return (
            node.type == "import_statement" and
            node.child_by_field_name("source") is not None
        )

    def get_import_info(self, node: Node) -> ImportInfo:
        source = node.child_by_field_name("source")
        info = ImportInfo(from_=PathUtils.strip_suffix(
            TextUtils.sanitize_text(self.get_text(source)),
            self.strip_suffixes
        ))

        clause = self._child_of_type(node, "import_clause")
        if clause is not None:
            for child in clause.named_children:
                if child.type == "identifier":
                    info.imports["default"] = self.get_text(child)
                elif child.type == "named_imports":
                    for specifier in child.named_children:
                        if specifier.type != "import_specifier":
                            continue
                        name = specifier.child_by_field_name("name")
                        alias = specifier.child_by_field_name("alias")
                        info.imports[self._get_name(name)] = self.get_text(alias or name)

        return self._finish(info, node, clause or source)

    # ==================== Function ====================

    def is_function(self, node: Node) -> bool:
        if node.type in _FUNCTION_NODES:
            return True
        if node.parent is None:
            return False
        # overload signatures inside a class body
        if node.type == "method_signature":
            return node.parent.type == "class_body"
        # export default function () {}
        return (
            node.type in _ANONYMOUS_DEFAULTS and node.type != "class" and
            node.parent.type == "export_statement"
        )

    def get_function_info(self, node: Node) -> FunctionInfo:
        name_node = node.child_by_field_name("name")
        parameters = node.child_by_field_name("parameters")
        info = FunctionInfo(
            name=self._get_name(name_node) if name_node is not None else "default"
        )
        info.generics = self._get_generics(node)

        if parameters is not None:
            info.parameters = [
                parameter
                for parameter in self.get_child_infos(get_nodes_children(parameters))
                if parameter.kind == "Variable"
            ]

        info.return_ = self._get_type_text(node.child_by_field_name("return_type"))

        return self._finish(
            info, node, name_node if name_node is not None else parameters
        )

    # ==================== Export ====================

    def _get_exported_expression(self, node: Node) -> Optional[Node]:
        value = node.child_by_field_name("value")
        if value is not None:
            return value
        # export = <expression>
        seen_assign = False
        for child in node.children:
            if child.type == "=":
                seen_assign = True
            elif seen_assign and child.is_named and child.type != "comment":
                return child
        return None

    def is_export(self, node: Node) -> bool:
        return (
            node.type == "export_statement" and
            self._get_exported_expression(node) is not None
        )

    def get_export_info(self, node: Node) -> ExportInfo:
        expression = self._get_exported_expression(node)
        info = ExportInfo()

        if expression.type == "identifier":
            info.name = self.get_text(expression)
        else:
            exported = self.classify_node(expression)
            if exported is not None:
                if getattr(exported, "name", None):
                    info.name = exported.name
                info.object = exported

        info.meta = self.get_info_meta(node)
        if self.include_nodes:
            info.node = node
        return info

    # ==================== Deconstruct ====================

    def is_deconstruct(self, node: Node) -> bool:
        if node.type not in _DECONSTRUCT_NODES:
            return False
        binding = self._get_binding(node)
        return binding is not None and binding.type in _BINDING_PATTERNS

    def _get_bound_name(self, node: Optional[Node]) -> Optional[str]:
        """Local name bound by a pattern element, or None for nested patterns."""
        if node is None:
            return None
        if node.type in ("identifier", "shorthand_property_identifier_pattern"):
            return self.get_text(node)
        if node.type in ("assignment_pattern", "object_assignment_pattern"):
            return self._get_bound_name(node.child_by_field_name("left"))
        if node.type == "rest_pattern":
            inner = [c for c in node.named_children if c.type != "comment"]
            return self._get_bound_name(inner[0]) if inner else None
        return None

    def get_deconstruct_info(self, node: Node) -> DeconstructInfo:
        pattern = self._get_binding(node)
        info = DeconstructInfo()

        for element in pattern.named_children:
            if element.type == "pair_pattern":
                key = self._get_name(element.child_by_field_name("key"))
                bound = self._get_bound_name(element.child_by_field_name("value"))
            else:
                bound = self._get_bound_name(element)
                key = bound
            if key and bound:
                info.deconstructs[key] = bound

        initializer = node.child_by_field_name("value")
        if initializer is not None:
            info.from_ = self.get_text(initializer)
        info.type = self._get_type_text(node.child_by_field_name("type"))

        return self._finish(info, node, pattern)

    # ==================== Class ====================

    def is_class(self, node: Node) -> bool:
        if node.type in _CLASS_NODES:
            return True
        # `export default class {}` parsed as a class expression
        return (
            node.type == "class" and
            node.parent is not None and
            node.parent.type == "export_statement"
        )

    def get_class_info(self, node: Node) -> ClassInfo:
        name_node = node.child_by_field_name("name")
        body = node.child_by_field_name("body")
        info = ClassInfo(name=self.get_text(name_node) if name_node is not None else "default")
        info.generics = self._get_generics(node)

        heritage = self._child_of_type(node, "class_heritage")
        if heritage is not None:
            for clause in heritage.named_children:
                if clause.type == "extends_clause":
                    info.extends = self._get_heritage(clause, "extends")
                elif clause.type == "implements_clause":
                    info.implements = self._get_heritage(clause, "implements")

        info.properties = self._get_members(body, ("Doclet", "Function", "Property"))
        return self._finish(info, node, name_node or body)

