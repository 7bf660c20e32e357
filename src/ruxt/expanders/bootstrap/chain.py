from __future__ import annotations

import ast
from typing import Iterable, Sequence

from ruxt.domain.models import ExpandConfig
from ruxt.expanders.bootstrap.matcher import BootstrapCallSite
from ruxt.expanders.names import dotted_expr
from ruxt.pages.descriptor import RouteDescriptor


def handler_wrapper(reference: Sequence[str], config: ExpandConfig | None = None) -> ast.Call:
    """
    <framework>.get().to(<reference>)

    Always GET: pages are registered for GET only.
    """
    config = config or ExpandConfig()
    get_call = ast.Call(
        func=ast.Attribute(value=dotted_expr(config.framework.split(".")), attr="get", ctx=ast.Load()),
        args=[],
        keywords=[],
    )
    return ast.Call(
        func=ast.Attribute(value=get_call, attr="to", ctx=ast.Load()),
        args=[dotted_expr(reference)],
        keywords=[],
    )


def route_call(receiver: ast.expr, descriptor: RouteDescriptor, config: ExpandConfig | None = None) -> ast.Call:
    # receiver.route("<url_path>", web.get().to(pages...page))
    return ast.Call(
        func=ast.Attribute(value=receiver, attr="route", ctx=ast.Load()),
        args=[
            ast.Constant(value=descriptor.url_path),
            handler_wrapper(descriptor.handler_reference, config),
        ],
        keywords=[],
    )


def synthesize_chain(
    body: ast.expr,
    descriptors: Iterable[RouteDescriptor],
    config: ExpandConfig | None = None,
) -> ast.expr:
    """
    Left fold, one .route(...) per descriptor in the given order:
      body.route(d1...).route(d2...)...
    No descriptors -> the body itself.
    """
    result = body
    for descriptor in descriptors:
        result = route_call(result, descriptor, config)
    return result


def rewrite_closure(
    site: BootstrapCallSite,
    descriptors: Iterable[RouteDescriptor],
    config: ExpandConfig | None = None,
) -> ast.Lambda:
    """
    Replace the matched lambda's body in place. Parameters are kept as-is.
    Not idempotent: existing .route(...) calls are not detected.
    """
    closure = site.closure
    closure.body = synthesize_chain(closure.body, descriptors, config)
    ast.fix_missing_locations(closure)
    return closure
