"""Compilation pipeline: caching, recursive compilation and page assembly."""

from mooltipage.pipeline.cache import PipelineCache
from mooltipage.pipeline.context import FragmentContext, PipelineContext
from mooltipage.pipeline.core import StandardPipeline
from mooltipage.pipeline.dependencies import DependencyTracker
from mooltipage.pipeline.objects import Component, ComponentScript, ComponentStyle, Fragment, Page
from mooltipage.pipeline.page_builder import build_page
from mooltipage.pipeline.resources import ResourceParser
from mooltipage.utils.hashing import create_res_path, hash_content

__all__ = [
    "Component",
    "ComponentScript",
    "ComponentStyle",
    "DependencyTracker",
    "Fragment",
    "FragmentContext",
    "Page",
    "PipelineCache",
    "PipelineContext",
    "ResourceParser",
    "StandardPipeline",
    "build_page",
    "create_res_path",
    "hash_content",
]
