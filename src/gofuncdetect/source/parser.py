"""Declaration-level reading of Go source with tree-sitter.

The file is parsed with the `tree_sitter_go` grammar. Any ERROR or MISSING
node anywhere in the tree (function bodies and `var`/`const`/`type`
declarations included) is reported as a `ParseError`. From a clean tree the
package clause, the import specs and every top-level `func` declaration are
read. Parameter and result types are reduced to `TypeRef`s: `T`, `pkg.T`,
`*T`, `*pkg.T` (and parenthesized forms) keep their structure, anything else
is kept as opaque source text.
"""

from __future__ import annotations

import logging

import tree_sitter
import tree_sitter_go

from ..errors import ParseError
from ..model import Declaration, ImportSpec, ParsedFile, TypeRef

logger = logging.getLogger(__name__)

# Creating a parser loads the grammar; one per process is enough for sequential use.
_PARSER: tree_sitter.Parser | None = None

_DECLARATIONS = frozenset(
    {
        "function_declaration",
        "method_declaration",
        "type_declaration",
        "var_declaration",
        "const_declaration",
    }
)


def get_parser() -> tree_sitter.Parser:
    """Return the cached Go parser."""
    global _PARSER
    if _PARSER is None:
        _PARSER = tree_sitter.Parser(tree_sitter.Language(tree_sitter_go.language()))
    return _PARSER


def parse_source(source: str, *, path: str = "<source>") -> ParsedFile:
    """Parse one Go source file into its package name, imports and function declarations.

    Raises `ParseError` when the file is not syntactically valid Go. Columns
    are 1-based byte offsets within the line.
    """
    if source.startswith("\ufeff"):
        source = source[1:]
    data = source.encode("utf-8")
    tree = get_parser().parse(data)
    return _FileReader(data, path).read(tree.root_node)


class _FileReader:
    def __init__(self, source: bytes, path: str) -> None:
        self.source = source
        self.path = path

    def text(self, node: tree_sitter.Node) -> str:
        return self.source[node.start_byte : node.end_byte].decode("utf-8")

    def error(self, message: str, node: tree_sitter.Node) -> ParseError:
        row, col = node.start_point
        return ParseError(self.path, message, line=row + 1, column=col + 1)

    # -- file structure ------------------------------------------------------

    def read(self, root: tree_sitter.Node) -> ParsedFile:
        if root.has_error:
            raise self.syntax_error(root)

        package: str | None = None
        imports: list[ImportSpec] = []
        decls: list[Declaration] = []
        seen_decl = False
        for node in root.named_children:
            kind = node.type
            if kind == "comment":
                continue
            if package is None:
                if kind != "package_clause":
                    raise self.error(f"expected 'package', found {self._describe(node)}", node)
                package = self.text(node.named_children[0])
                continue
            if kind == "package_clause":
                raise self.error("unexpected package clause", node)
            if kind == "import_declaration":
                if seen_decl:
                    raise self.error("imports must appear before other declarations", node)
                imports.extend(self.import_specs(node))
                continue
            if kind not in _DECLARATIONS:
                raise self.error(f"non-declaration statement outside function body: {self._describe(node)}", node)
            seen_decl = True
            if kind in ("function_declaration", "method_declaration"):
                decls.append(self.func_decl(node))

        if package is None:
            raise ParseError(self.path, "expected 'package', found EOF", line=1, column=1)

        logger.debug(
            "parsed %s: package %s, %d import(s), %d func declaration(s)",
            self.path,
            package,
            len(imports),
            len(decls),
        )
        return ParsedFile(path=self.path, package=package, imports=tuple(imports), declarations=tuple(decls))

    def syntax_error(self, root: tree_sitter.Node) -> ParseError:
        node = _first_error(root) or root
        if node.is_missing:
            return self.error(f"missing {node.type!r}", node)
        snippet = self.text(node).strip().splitlines()
        if not snippet:
            return self.error("syntax error", node)
        return self.error(f"syntax error: unexpected {snippet[0][:40]!r}", node)

    def _describe(self, node: tree_sitter.Node) -> str:
        first = self.text(node).split()
        return repr(first[0]) if first else node.type

    def import_specs(self, node: tree_sitter.Node) -> list[ImportSpec]:
        specs: list[ImportSpec] = []
        for child in node.named_children:
            if child.type == "import_spec":
                specs.append(self.import_spec(child))
            elif child.type == "import_spec_list":
                specs.extend(self.import_spec(s) for s in child.named_children if s.type == "import_spec")
        return specs

    def import_spec(self, node: tree_sitter.Node) -> ImportSpec:
        name_node = node.child_by_field_name("name")
        path_node = node.child_by_field_name("path")
        # Interpreted or raw string literal; escape sequences are left as written.
        path = self.text(path_node)[1:-1]
        if not path:
            raise self.error("invalid import path: empty", path_node)
        name = self.text(name_node) if name_node is not None else None
        return ImportSpec(name=name, path=path, line=node.start_point[0] + 1)

    # -- functions -----------------------------------------------------------

    def func_decl(self, node: tree_sitter.Node) -> Declaration:
        receiver: TypeRef | None = None
        recv_node = node.child_by_field_name("receiver")
        if recv_node is not None:
            recv = self.param_list(recv_node)
            if len(recv) != 1:
                raise self.error("method has multiple receivers" if recv else "method has no receiver", recv_node)
            receiver = recv[0]

        result = node.child_by_field_name("result")
        if result is None:
            results: list[TypeRef] = []
        elif result.type == "parameter_list":
            results = self.param_list(result)
        else:
            results = [self.type_ref(result)]

        return Declaration(
            name=self.text(node.child_by_field_name("name")),
            params=tuple(self.param_list(node.child_by_field_name("parameters"))),
            results=tuple(results),
            receiver=receiver,
            type_params=node.child_by_field_name("type_parameters") is not None,
            line=node.start_point[0] + 1,
        )

    def param_list(self, node: tree_sitter.Node) -> list[TypeRef]:
        """Return one TypeRef per value of a receiver, parameter or result list."""
        out: list[TypeRef] = []
        named = unnamed = 0
        for child in node.named_children:
            if child.type == "parameter_declaration":
                ref = self.type_ref(child.child_by_field_name("type"))
            elif child.type == "variadic_parameter_declaration":
                ref = TypeRef(alias=None, name="..." + self._opaque_text(child.child_by_field_name("type")))
            else:
                continue
            names = len(child.children_by_field_name("name"))
            if names:
                named += 1
            else:
                unnamed += 1
            out.extend([ref] * max(names, 1))
        if named and unnamed:
            raise self.error("mixed named and unnamed parameters", node)
        return out

    # -- types ---------------------------------------------------------------

    def type_ref(self, node: tree_sitter.Node) -> TypeRef:
        node = _unparen(node)
        if node.type == "type_identifier":
            return TypeRef(alias=None, name=self.text(node))
        if node.type == "qualified_type":
            return TypeRef(
                alias=self.text(node.child_by_field_name("package")),
                name=self.text(node.child_by_field_name("name")),
            )
        if node.type == "pointer_type":
            inner = self.type_ref(node.named_children[0])
            if not inner.by_reference and (inner.alias is not None or inner.name.isidentifier()):
                return TypeRef(alias=inner.alias, name=inner.name, by_reference=True)
        return TypeRef(alias=None, name=self._opaque_text(node))

    def _opaque_text(self, node: tree_sitter.Node) -> str:
        return " ".join(self.text(node).split())


def _unparen(node: tree_sitter.Node) -> tree_sitter.Node:
    while node.type == "parenthesized_type":
        node = node.named_children[0]
    return node


def _first_error(node: tree_sitter.Node) -> tree_sitter.Node | None:
    """Return the first ERROR or MISSING node in source order."""
    if node.is_error or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None
