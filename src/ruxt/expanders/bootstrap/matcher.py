from __future__ import annotations

import ast
import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from ruxt.domain.models import ExpandConfig
from ruxt.expanders.names import dotted_parts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BootstrapCallSite:
    call: ast.Call
    closure: ast.Lambda
    callee: tuple[str, ...]
    lineno: int


def find_bootstrap_call(tree: ast.AST, config: ExpandConfig | None = None) -> Optional[BootstrapCallSite]:
    """
    Find the server construction call inside a function:
      HttpServer.new(lambda: App.new())
      actix.HttpServer.new(lambda: App.new().app_data(x))
    The callee must be a path containing both the factory name and the
    constructor name, and the first argument must be a lambda.

    A factory call built from a named function (HttpServer.new(app)) is not
    rewritten and not reported; the search continues past it.

    Read-only. Returns the first match in depth-first order, or None.
    """
    config = config or ExpandConfig()

    for node in _iter_depth_first(tree):
        if not isinstance(node, ast.Call):
            continue

        callee = dotted_parts(node.func)
        if callee is None:
            continue
        if config.factory_name not in callee or config.constructor_name not in callee:
            continue

        first = node.args[0] if node.args else None
        if not isinstance(first, ast.Lambda):
            logger.debug(
                "line %s: %s(...) has no inline lambda; not rewritten",
                getattr(node, "lineno", "?"),
                ".".join(callee),
            )
            continue

        return BootstrapCallSite(
            call=node,
            closure=first,
            callee=tuple(callee),
            lineno=getattr(node, "lineno", 0) or 0,
        )

    return None


def _iter_depth_first(node: ast.AST) -> Iterator[ast.AST]:
    # ast.walk is breadth-first; source order matters here
    yield node
    for child in ast.iter_child_nodes(node):
        yield from _iter_depth_first(child)
