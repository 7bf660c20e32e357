from __future__ import annotations

import ast
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional, Union

from ruxt.domain.models import ExpandConfig
from ruxt.errors import ExpansionError
from ruxt.expanders.bootstrap.rewriter import expand_main_detailed
from ruxt.expanders.names import decorator_name, dotted_expr
from ruxt.expanders.signature import expand_route
from ruxt.pages.descriptor import RouteDescriptor

FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]
ExpansionKind = Literal["main", "route"]


@dataclass(frozen=True)
class ExpandedFunction:
    name: str
    kind: ExpansionKind
    lineno: int


@dataclass
class ExpandResult:
    source: str
    expanded: list[ExpandedFunction] = field(default_factory=list)
    routes: list[RouteDescriptor] = field(default_factory=list)
    rewritten_sites: int = 0


def marker_kind(func: FunctionNode, config: ExpandConfig) -> Optional[tuple[int, ExpansionKind]]:
    """
    (decorator index, kind) for the first ruxt marker on func, or None.
    @ruxt.main / @main -> "main", @ruxt.route / @route -> "route".
    """
    for i, dec in enumerate(func.decorator_list):
        name = decorator_name(dec)
        if name in config.main_markers:
            return (i, "main")
        if name in config.route_markers:
            return (i, "route")
    return None


class _MacroExpander(ast.NodeTransformer):
    def __init__(self, config: ExpandConfig) -> None:
        self.config = config
        self.expanded: list[ExpandedFunction] = []
        self.routes: list[RouteDescriptor] = []
        self.rewritten_sites = 0

    def visit_FunctionDef(self, node: ast.FunctionDef) -> ast.AST:
        return self._expand(node)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> ast.AST:
        return self._expand(node)

    def _expand(self, node: FunctionNode) -> ast.AST:
        # nested definitions first, so an outer expansion sees expanded inner ones
        self.generic_visit(node)

        marker = marker_kind(node, self.config)
        if marker is None:
            return node

        index, kind = marker
        if kind == "main":
            result = expand_main_detailed(node, self.config)
            out = result.function
            self.routes.extend(result.routes)
            self.rewritten_sites += int(result.rewritten)
        else:
            out = expand_route(node, self.config)

        # the marker is consumed by the expansion
        del out.decorator_list[index]
        if kind == "main" and self.config.runtime_decorator:
            runtime = dotted_expr(self.config.runtime_decorator.split("."))
            out.decorator_list.insert(index, ast.copy_location(runtime, node))

        self.expanded.append(ExpandedFunction(name=node.name, kind=kind, lineno=getattr(node, "lineno", 0)))
        return out


def expand_function(func: FunctionNode, config: ExpandConfig | None = None) -> FunctionNode:
    """Expand a single annotated function; unannotated functions come back as-is."""
    config = config or ExpandConfig()
    module = ast.Module(body=[func], type_ignores=[])
    _MacroExpander(config).visit(module)
    return module.body[0]


def expand_tree(tree: ast.Module, config: ExpandConfig | None = None) -> tuple[ast.Module, _MacroExpander]:
    config = config or ExpandConfig()
    expander = _MacroExpander(config)
    tree = expander.visit(tree)
    ast.fix_missing_locations(tree)
    return tree, expander


def expand_source(source: str, config: ExpandConfig | None = None, filename: str = "<unknown>") -> ExpandResult:
    """
    Parse Python source, expand every @ruxt.main / @ruxt.route function and
    return the rewritten source. Comments and formatting are not preserved.

    Raises ExpansionError on unparsable input and PagesDirectoryNotFoundError
    when a main expansion has no pages directory. Nothing is returned on failure.
    """
    try:
        tree = ast.parse(source, filename=filename)
    except SyntaxError as e:
        raise ExpansionError(e.msg, filename=filename, lineno=e.lineno) from e

    tree, expander = expand_tree(tree, config)
    return ExpandResult(
        source=ast.unparse(tree),
        expanded=expander.expanded,
        routes=expander.routes,
        rewritten_sites=expander.rewritten_sites,
    )


def expand_file(path: Path, config: ExpandConfig | None = None) -> ExpandResult:
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ExpansionError(f"cannot read source: {e}", filename=str(path)) from e
    return expand_source(source, config, filename=str(path))
