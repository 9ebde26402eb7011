"""
Ordering of file paths by directory depth.

Wiring files closer to the discovery root run first, so generic wiring can
set shared values before more specific wiring reads them.
"""

from functools import cmp_to_key
from pathlib import PurePath
from typing import Iterable, List, TypeVar, Union

PathLike = Union[str, PurePath]
P = TypeVar('P', str, PurePath)


def path_depth(path: PathLike) -> int:
    """Return the number of segments in ``path``."""
    return len(PurePath(path).parts)


def compare_paths_by_depth(path_a: PathLike, path_b: PathLike) -> int:
    """
    Compare two paths by their number of segments.

    Returns:
        -1 if ``path_a`` is shallower, 1 if deeper, 0 on equal depth
    """
    depth_a = path_depth(path_a)
    depth_b = path_depth(path_b)

    if depth_a < depth_b:
        return -1
    if depth_a > depth_b:
        return 1
    return 0


def sort_paths_by_depth(paths: Iterable[P]) -> List[P]:
    """Sort paths by increasing depth, keeping the input order of equal depths."""
    return sorted(paths, key=cmp_to_key(compare_paths_by_depth))
