"""High-level API: compile pages from a directory tree.

Example:
    >>> from mooltipage import Mooltipage, MpOptions
    >>> mp = Mooltipage(MpOptions(in_path="site/", out_path="build/", formatter="minimized"))
    >>> mp.process_pages(["index.html", "about/index.html"])

"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from mooltipage.environment.interfaces import FileSystemInterface
from mooltipage.environment.options import MpOptions
from mooltipage.formatting import (
    MINIMIZED_PRESET,
    NONE_PRESET,
    PRETTY_PRESET,
    FormatterMode,
    HtmlFormatter,
    StandardHtmlFormatter,
)
from mooltipage.pipeline import Page, StandardPipeline
from mooltipage.utils.paths import fix_path_separators

logger = logging.getLogger(__name__)

_PRESETS = {
    FormatterMode.PRETTY: PRETTY_PRESET,
    FormatterMode.MINIMIZED: MINIMIZED_PRESET,
    FormatterMode.NONE: NONE_PRESET,
}


def create_formatter(options: MpOptions) -> HtmlFormatter:
    """Formatter for ``options.formatter``.

    Raises:
        ValueError: Unknown formatter name.
    """
    try:
        mode = FormatterMode(options.formatter.strip().lower())
    except ValueError:
        allowed = ", ".join(mode.value for mode in FormatterMode)
        raise ValueError(f"Unknown formatter '{options.formatter}' (expected one of: {allowed})") from None
    return StandardHtmlFormatter(_PRESETS[mode])


class Mooltipage:
    """Compile pages from ``options.in_path`` into ``options.out_path``.

    One pipeline is shared by every page processed through this instance,
    so fragments, components and linked resources are parsed and written
    once.
    """

    __slots__ = ("options", "pipeline")

    def __init__(self, options: MpOptions | None = None):
        self.options = options or MpOptions()
        interface = FileSystemInterface(self.options.in_path, self.options.out_path)
        self.pipeline = StandardPipeline(interface, create_formatter(self.options))

    def process_page(self, page_path: str) -> Page:
        res_path = fix_path_separators(page_path)
        logger.info("Compiling %s", res_path)
        page = self.pipeline.compile_page(res_path)
        if self.options.on_page_compiled is not None:
            self.options.on_page_compiled(page)
        return page

    def process_pages(self, page_paths: Iterable[str]) -> list[Page]:
        return [self.process_page(path) for path in page_paths]
