from __future__ import annotations

import ast
import copy
import logging
from typing import Union

from ruxt.domain.models import ExpandConfig
from ruxt.expanders.names import dotted_expr

logger = logging.getLogger(__name__)

FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]


def layout_annotation(config: ExpandConfig | None = None) -> ast.expr:
    # web.Data[Optional[ruxt.Layout]]
    config = config or ExpandConfig()
    optional = ast.Subscript(
        value=ast.Name(id="Optional", ctx=ast.Load()),
        slice=dotted_expr(config.layout_type.split(".")),
        ctx=ast.Load(),
    )
    return ast.Subscript(
        value=dotted_expr(config.layout_container.split(".")),
        slice=optional,
        ctx=ast.Load(),
    )


def layout_arg(config: ExpandConfig | None = None) -> ast.arg:
    config = config or ExpandConfig()
    return ast.arg(arg=config.layout_param, annotation=layout_annotation(config))


def expand_route(func: FunctionNode, config: ExpandConfig | None = None) -> FunctionNode:
    """
    Return a copy of func with one more parameter after the existing ones:
      def handler(a: T)  ->  def handler(a: T, layout: web.Data[Optional[ruxt.Layout]])

    Existing parameters are not inspected for duplicates. When the signature
    has defaults, *args, keyword-only params or **kwargs, the new parameter is
    keyword-only (a plain positional slot there would not compile).
    """
    config = config or ExpandConfig()
    logger.debug("route signature for %s:\n%s", func.name, ast.dump(func.args, indent=2))

    out = copy.deepcopy(func)
    args = out.args
    new_arg = layout_arg(config)

    if args.defaults or args.vararg or args.kwonlyargs or args.kwarg:
        args.kwonlyargs.append(new_arg)
        args.kw_defaults.append(None)
    else:
        args.args.append(new_arg)

    ast.copy_location(new_arg, out)
    ast.fix_missing_locations(out)
    return out
