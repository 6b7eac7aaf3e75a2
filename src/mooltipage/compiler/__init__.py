"""HTML compiler: an ordered set of modules run over the DOM in one walk."""

from mooltipage.compiler.context import HtmlCompilerContext, ImportDefinition, SharedHtmlCompilerContext
from mooltipage.compiler.core import (
    EnterNodeModule,
    ExitNodeModule,
    HtmlCompiler,
    HtmlCompilerModule,
    default_modules,
)

__all__ = [
    "EnterNodeModule",
    "ExitNodeModule",
    "HtmlCompiler",
    "HtmlCompilerContext",
    "HtmlCompilerModule",
    "ImportDefinition",
    "SharedHtmlCompilerContext",
    "default_modules",
]
