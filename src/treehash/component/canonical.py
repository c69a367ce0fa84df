import os

import treehash.intern.helper as h


def canonicalize(path: str) -> str:
    """
    Normalizes a path text before it is folded into a digest: "." and ".." segments and redundant separators
    are resolved with the platform's path rules. The result depends on the text only, the filesystem is not accessed.

    The original text is returned unchanged if
    - the path is longer than the platform maximum,
    - the path is malformed (contains a NUL character), or
    - the normalized path would be longer than the platform maximum.

    Args:
        path (str): The path of a file or directory.

    Returns:
        str: The canonical path text, or the original text.
    """
    if len(path) > h.MAX_PATH or "\0" in path:
        return path
    try:
        canonical = os.path.normpath(path)
    except (TypeError, ValueError):
        return path
    if len(canonical) > h.MAX_PATH:
        return path
    return canonical


def name_bytes(path: str, encoding: str) -> bytes:
    """
    Returns the bytes that are fed into the hash when names are included.

    Args:
        path (str): The path of a file or directory.
        encoding (str): The encoding of the name, e.g. "utf-16-le".

    Returns:
        bytes: The encoded canonical path. Characters that can't be encoded (e.g. lone surrogates
        from undecodable file names) are passed through with "surrogatepass".
    """
    return canonicalize(path).encode(encoding, errors="surrogatepass")
