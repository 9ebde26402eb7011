"""
Glob resolution and call-site lookup for wiring discovery.
"""

import logging
from pathlib import Path
from types import FrameType
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)


def resolve_patterns(base_dir: Union[str, Path], patterns: Iterable[str]) -> List[Path]:
    """
    Resolve glob patterns relative to ``base_dir``.

    Supports ``*``, ``?``, ``[...]`` and ``**`` (any number of directories,
    including none). Only regular files are returned, each once, sorted by
    their path relative to ``base_dir``.

    Args:
        base_dir: Directory the patterns are relative to
        patterns: Glob patterns

    Returns:
        Absolute paths of the matching files
    """
    patterns = list(patterns)
    base = Path(base_dir).resolve()
    matches = {}

    for pattern in patterns:
        if not pattern:
            continue
        for path in base.glob(pattern):
            if path.is_file():
                matches.setdefault(path.relative_to(base).as_posix(), path)

    logger.debug(f"Resolved {len(matches)} file(s) for {patterns} under {base}")
    return [matches[key] for key in sorted(matches)]


def caller_file(frame: Optional[FrameType]) -> Optional[Path]:
    """
    Return the source file executing ``frame``.

    Returns:
        Resolved file path, or None for code that does not live in a file
        (interactive sessions, ``exec`` of a string)
    """
    if frame is None:
        return None

    filename = frame.f_code.co_filename
    if not filename or filename.startswith('<'):
        return None

    path = Path(filename)
    if not path.is_file():
        return None

    return path.resolve()
