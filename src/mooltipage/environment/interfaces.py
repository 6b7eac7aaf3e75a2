"""Pipeline interfaces: where resources come from and where output goes.

The pipeline never touches storage directly. It reads and writes through
a ``PipelineInterface`` identified by resource path and MIME type.

Built-in Interfaces:
- `FileSystemInterface`: Read from a source directory, write to a destination
- `MemoryInterface`: In-memory dictionaries (testing/embedded)

Custom Interfaces:
Implement the PipelineInterface protocol:
    ```python
    class DatabaseInterface:
        def get_resource(self, mime_type: MimeType, res_path: str) -> str:
            row = db.query("SELECT body FROM sources WHERE path = ?", res_path)
            if not row:
                raise ResourceNotFoundError(f"Resource '{res_path}' not found", res_path)
            return row.body

        def write_resource(self, mime_type: MimeType, res_path: str, contents: str) -> None:
            db.execute("REPLACE INTO output VALUES (?, ?)", res_path, contents)

        def create_resource(self, mime_type: MimeType, contents: str, source_res_path: str) -> str:
            res_path = create_res_path(mime_type, contents)
            self.write_resource(mime_type, res_path, contents)
            return res_path
    ```

"""

from __future__ import annotations

import logging
from difflib import get_close_matches
from pathlib import Path
from typing import Protocol, runtime_checkable

from mooltipage._types import MimeType
from mooltipage.environment.exceptions import ResourceNotFoundError
from mooltipage.utils.hashing import create_res_path
from mooltipage.utils.paths import fix_path_separators

logger = logging.getLogger(__name__)


@runtime_checkable
class PipelineInterface(Protocol):
    """Resource access used by the pipeline.

    An interface may additionally define
    ``relink_created_resource(mime_type, contents, source_res_path,
    original_res_path) -> str``. When present it is called instead of
    reusing a previously created resource path verbatim, so the interface
    can copy or re-emit the resource for a different page.
    """

    def get_resource(self, mime_type: MimeType, res_path: str) -> str:
        """Read a source resource.

        Raises:
            ResourceNotFoundError: The resource does not exist.
        """
        ...

    def write_resource(self, mime_type: MimeType, res_path: str, contents: str) -> None:
        """Write an output resource that mirrors a source path."""
        ...

    def create_resource(self, mime_type: MimeType, contents: str, source_res_path: str) -> str:
        """Write a generated resource and return its path."""
        ...


class FileSystemInterface:
    """Read sources from one directory and write output into another.

    Output directories are created as needed.

    Example:
            >>> interface = FileSystemInterface("site/", "build/")
            >>> interface.get_resource(MimeType.HTML, "index.html")
            '<!DOCTYPE html>...'
            >>> interface.create_resource(MimeType.CSS, ".a {}", "index.html")
            'resources/<md5-base64url>.css'

    Raises:
        ResourceNotFoundError: If a source file does not exist

    """

    __slots__ = ("_encoding", "destination_path", "source_path")

    def __init__(
        self,
        source_path: str | Path | None = None,
        destination_path: str | Path | None = None,
        encoding: str = "utf-8",
    ):
        self.source_path = Path(source_path) if source_path is not None else Path.cwd()
        self.destination_path = Path(destination_path) if destination_path is not None else self.source_path
        self._encoding = encoding

    def resolve_source(self, res_path: str) -> Path:
        return self.source_path / fix_path_separators(res_path)

    def resolve_destination(self, res_path: str) -> Path:
        return self.destination_path / fix_path_separators(res_path)

    def get_resource(self, mime_type: MimeType, res_path: str) -> str:
        path = self.resolve_source(res_path)
        if not path.is_file():
            raise ResourceNotFoundError(f"Resource '{res_path}' not found in: {self.source_path}", res_path)
        return path.read_text(self._encoding)

    def write_resource(self, mime_type: MimeType, res_path: str, contents: str) -> None:
        path = self.resolve_destination(res_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(contents, self._encoding)
        logger.debug("Wrote %s (%s)", path, mime_type.value)

    def create_resource(self, mime_type: MimeType, contents: str, source_res_path: str) -> str:
        res_path = create_res_path(mime_type, contents)
        self.write_resource(mime_type, res_path, contents)
        return res_path


class MemoryInterface:
    """Serve sources from a dictionary and record everything written.

    Useful for testing and for embedding the compiler without a file
    system.

    Attributes:
        sources: Resource path -> source text
        outputs: Resource path -> text written by ``write_resource``
        created: Resource path -> text written by ``create_resource``

    Example:
            >>> interface = MemoryInterface({"page.html": "<div>${ 1 + 1 }</div>"})
            >>> page = StandardPipeline(interface).compile_page("page.html")
            >>> "<div>2</div>" in interface.outputs["page.html"]
            True

    """

    __slots__ = ("created", "outputs", "sources")

    def __init__(self, sources: dict[str, str] | None = None):
        self.sources: dict[str, str] = dict(sources) if sources else {}
        self.outputs: dict[str, str] = {}
        self.created: dict[str, str] = {}

    def set_source(self, res_path: str, contents: str) -> None:
        self.sources[res_path] = contents

    def get_resource(self, mime_type: MimeType, res_path: str) -> str:
        if res_path not in self.sources:
            available = sorted(self.sources)
            msg = f"Resource '{res_path}' not found"
            matches = get_close_matches(res_path, available, n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{matches[0]}'?"
            elif available:
                msg += f". Available: {', '.join(available[:10])}"
                if len(available) > 10:
                    msg += f" ... ({len(available)} total)"
            raise ResourceNotFoundError(msg, res_path)
        return self.sources[res_path]

    def write_resource(self, mime_type: MimeType, res_path: str, contents: str) -> None:
        self.outputs[res_path] = contents

    def create_resource(self, mime_type: MimeType, contents: str, source_res_path: str) -> str:
        res_path = create_res_path(mime_type, contents)
        self.created[res_path] = contents
        return res_path
