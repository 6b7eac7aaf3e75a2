"""Path, name and hashing helpers."""

from mooltipage.utils.case import camel_to_snake, snake_to_camel
from mooltipage.utils.hashing import create_res_path, hash_content
from mooltipage.utils.paths import (
    compute_relative_res_path,
    dirname,
    fix_path_separators,
    resolve_res_path,
)

__all__ = [
    "camel_to_snake",
    "compute_relative_res_path",
    "create_res_path",
    "dirname",
    "fix_path_separators",
    "hash_content",
    "resolve_res_path",
    "snake_to_camel",
]
