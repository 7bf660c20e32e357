from __future__ import annotations

import keyword
import logging
from pathlib import Path

from ruxt.domain.models import ExpandConfig
from ruxt.errors import InvalidPageNameError, PagesDirectoryNotFoundError
from ruxt.pages.descriptor import RouteDescriptor, build_descriptor, is_module_support
from ruxt.pages.ignore import should_ignore_dir

logger = logging.getLogger(__name__)


def scan_pages(pages_dir: Path | str | None = None, config: ExpandConfig | None = None) -> list[RouteDescriptor]:
    """
    Walk the pages directory and build one RouteDescriptor per page file.

    Segments are relative to the pages root: directory names followed by the
    file stem. Files with a module marker anywhere in their segments are
    support code and never become routes.

    Descriptors are returned sorted by segments, so route registration order
    does not depend on the filesystem's enumeration order.

    Raises PagesDirectoryNotFoundError if the root is missing or not a directory,
    and InvalidPageNameError when a page segment cannot be a Python name.
    """
    config = config or ExpandConfig()
    root = Path(pages_dir) if pages_dir is not None else config.pages_path

    if not root.is_dir():
        logger.debug("pages directory does not exist: %s", root)
        raise PagesDirectoryNotFoundError(root)

    out: list[RouteDescriptor] = []
    _visit_dir(root, [], out, config)
    out.sort(key=lambda d: d.segments)

    logger.debug("discovered %d page(s) under %s", len(out), root)
    return out


def _visit_dir(directory: Path, parts: list[str], out: list[RouteDescriptor], config: ExpandConfig) -> None:
    for entry in directory.iterdir():
        if entry.is_dir():
            if should_ignore_dir(entry):
                continue
            # accumulate the directory name only; never the full path
            _visit_dir(entry, [*parts, entry.name], out, config)
            continue

        if entry.suffix != config.extension:
            continue

        segments = [*parts, entry.stem]
        if is_module_support(segments, config):
            logger.debug("skipping support module %s", entry)
            continue

        for segment in segments:
            if not segment.isidentifier() or keyword.iskeyword(segment):
                raise InvalidPageNameError(entry, segment)

        descriptor = build_descriptor(segments, config, file_path=str(entry))
        logger.debug("page %s -> %s", entry, descriptor.url_path)
        out.append(descriptor)
