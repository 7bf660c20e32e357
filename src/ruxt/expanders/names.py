from __future__ import annotations

import ast
from typing import Iterable, Optional


def dotted_parts(node: ast.AST) -> Optional[list[str]]:
    """
    Segments of a plain path expression:
      HttpServer.new        -> ["HttpServer", "new"]
      actix.HttpServer.new  -> ["actix", "HttpServer", "new"]
    Anything that is not a Name/Attribute chain (calls, subscripts) -> None.
    """
    parts: list[str] = []
    while isinstance(node, ast.Attribute):
        parts.append(node.attr)
        node = node.value
    if not isinstance(node, ast.Name):
        return None
    parts.append(node.id)
    parts.reverse()
    return parts


def dotted_expr(parts: Iterable[str]) -> ast.expr:
    # ["pages", "foo", "page"] -> pages.foo.page
    it = iter(parts)
    try:
        expr: ast.expr = ast.Name(id=next(it), ctx=ast.Load())
    except StopIteration:
        raise ValueError("a dotted name needs at least one segment") from None
    for part in it:
        expr = ast.Attribute(value=expr, attr=part, ctx=ast.Load())
    return expr


def decorator_name(node: ast.expr) -> Optional[str]:
    # @ruxt.main and @ruxt.main() both name "ruxt.main"
    if isinstance(node, ast.Call):
        node = node.func
    parts = dotted_parts(node)
    return ".".join(parts) if parts else None
