import fnmatch
import ntpath
import os
import re
from typing import Sequence

import treehash.intern.helper as h


# a single exclusion pattern may list several alternatives, e.g. "*.tmp;*.bak"
PATTERN_SEPARATOR: str = ";"


def _base_name(path: str) -> str:
    """
    Returns the last component of a path. On Windows both separators are accepted.

    Args:
        path (str): A path or a plain name.

    Returns:
        str: The last path component.
    """
    if h.WINDOWS:
        return ntpath.basename(path)
    return os.path.basename(path)


def _compile(pattern: str) -> re.Pattern:
    """
    Compiles one glob pattern. Only "*" and "?" are wildcards, "[" is taken literally. Matching ignores case.

    Args:
        pattern (str): The glob pattern.

    Returns:
        re.Pattern: The compiled regular expression.
    """
    return re.compile(fnmatch.translate(pattern.replace("[", "[[]")), re.IGNORECASE)


def matches(name: str, patterns: Sequence[str]) -> bool:
    """
    Checks whether the base name of a path matches at least one of the glob patterns.

    Args:
        name (str): A file or directory path. Only its last component is matched.
        patterns (Sequence[str]): The exclusion patterns.

    Returns:
        bool: True if any pattern (or any ";"-separated alternative of it) matches.
    """
    base_name = _base_name(name)
    for pattern in patterns:
        for alternative in pattern.split(PATTERN_SEPARATOR):
            # leading blanks of an alternative are skipped, "*.tmp; *.bak" lists two patterns
            alternative = alternative.lstrip(" ")
            if alternative and _compile(alternative).match(base_name):
                return True
    return False


def is_excluded(path: str, patterns: Sequence[str]) -> bool:
    """
    Decides whether a file or directory is excluded from hashing.

    Paths longer than the platform maximum are never excluded.

    Args:
        path (str): The path of the file or directory.
        patterns (Sequence[str]): The exclusion patterns.

    Returns:
        bool: True if the entry must be skipped.
    """
    if not patterns or len(path) > h.MAX_PATH:
        return False
    return matches(path, patterns)
