"""Options for the high-level ``Mooltipage`` API and the CLI."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mooltipage.pipeline.objects import Page


@dataclass(slots=True)
class MpOptions:
    """Configuration for a ``Mooltipage`` run.

    Attributes:
        in_path: Source directory; resource paths resolve against it.
            Defaults to the working directory.
        out_path: Output directory. Defaults to ``in_path``.
        formatter: ``pretty``, ``minimized`` or ``none``.
        on_page_compiled: Called with each page after it is written.
    """

    in_path: str | None = None
    out_path: str | None = None
    formatter: str = "pretty"
    on_page_compiled: Callable[[Page], None] | None = None
