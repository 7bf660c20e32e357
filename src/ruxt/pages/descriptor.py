from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ruxt.domain.models import ExpandConfig


@dataclass(frozen=True)
class RouteDescriptor:
    segments: tuple[str, ...]
    url_path: str
    handler_reference: tuple[str, ...]
    file_path: str = ""

    @property
    def handler_name(self) -> str:
        return ".".join(self.handler_reference)


def url_path_for(segments: Sequence[str], index_marker: str = "index") -> str:
    """
    pages/index       -> /
    pages/foo/index   -> /foo
    pages/foo/bar     -> /foo/bar
    Only a trailing index segment is elided.
    """
    parts = list(segments)
    if parts and parts[-1] == index_marker:
        parts[-1] = ""
    if parts and not parts[-1]:
        parts.pop()
    return "/" + "/".join(p for p in parts if p)


def is_module_support(segments: Sequence[str], config: ExpandConfig) -> bool:
    markers = set(config.module_markers)
    return any(s in markers for s in segments)


def build_descriptor(
    segments: Sequence[str],
    config: ExpandConfig | None = None,
    file_path: str = "",
) -> RouteDescriptor:
    """
    Pure: the same segments always give the same url_path and handler_reference.
    The handler reference keeps the original segments, index included.
    """
    config = config or ExpandConfig()
    original = tuple(segments)
    return RouteDescriptor(
        segments=original,
        url_path=url_path_for(original, config.index_marker),
        handler_reference=(config.root_symbol, *original, config.handler_symbol),
        file_path=file_path,
    )
