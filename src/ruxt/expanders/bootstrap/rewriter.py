from __future__ import annotations

import ast
import copy
import logging
from dataclasses import dataclass, field
from typing import Union

from ruxt.domain.models import ExpandConfig
from ruxt.expanders.bootstrap.chain import rewrite_closure
from ruxt.expanders.bootstrap.matcher import find_bootstrap_call
from ruxt.pages.descriptor import RouteDescriptor
from ruxt.pages.scanner import scan_pages

logger = logging.getLogger(__name__)

FunctionNode = Union[ast.FunctionDef, ast.AsyncFunctionDef]


@dataclass(frozen=True)
class MainExpansion:
    function: FunctionNode
    routes: list[RouteDescriptor] = field(default_factory=list)
    rewritten: bool = False


def expand_main_detailed(func: FunctionNode, config: ExpandConfig | None = None) -> MainExpansion:
    """
    Bootstrap rewrite of one annotated entry point.

    The input is left untouched; the returned function is a fresh copy.
    The pages directory is scanned on every call (missing directory is fatal).
    Without a bootstrap call the copy is returned unchanged.
    """
    config = config or ExpandConfig()
    routes = scan_pages(config=config)

    out = copy.deepcopy(func)
    site = find_bootstrap_call(out, config)
    if site is None:
        logger.debug("%s: no bootstrap call found; nothing to rewrite", func.name)
        return MainExpansion(function=out)

    rewrite_closure(site, routes, config)
    logger.info(
        "%s: registered %d route(s) on %s (line %d)",
        func.name,
        len(routes),
        ".".join(site.callee),
        site.lineno,
    )
    return MainExpansion(function=out, routes=routes, rewritten=True)


def expand_main(func: FunctionNode, config: ExpandConfig | None = None) -> FunctionNode:
    return expand_main_detailed(func, config).function
