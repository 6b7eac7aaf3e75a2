"""Environment: resource interfaces, options and errors.

This package sits below the node model in the import graph, so nothing
here may import ``mooltipage.nodes`` or ``mooltipage.pipeline`` at runtime.
"""

from mooltipage.environment.exceptions import (
    ErrorCode,
    ExpressionSyntaxError,
    MooltipageError,
    PipelineCacheError,
    ResourceNotFoundError,
    SourceSnippet,
    TemplateSyntaxError,
    UndefinedImportError,
    build_source_snippet,
)
from mooltipage.environment.interfaces import FileSystemInterface, MemoryInterface, PipelineInterface
from mooltipage.environment.options import MpOptions

__all__ = [
    "ErrorCode",
    "ExpressionSyntaxError",
    "FileSystemInterface",
    "MemoryInterface",
    "MooltipageError",
    "MpOptions",
    "PipelineCacheError",
    "PipelineInterface",
    "ResourceNotFoundError",
    "SourceSnippet",
    "TemplateSyntaxError",
    "UndefinedImportError",
    "build_source_snippet",
]
