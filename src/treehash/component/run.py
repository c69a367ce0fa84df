import logging
import os
from typing import Optional, TextIO

import treehash.intern.dbc as dbc
import treehash.intern.helper as h
import treehash.intern.msg as msg
from treehash.component.algorithm import HashAlgorithm
from treehash.component.walker import RunConfiguration, hash_path


logger = logging.getLogger(__name__)


def check_input_path(path: str) -> None:
    """
    Checks the path given by the user before anything is hashed.

    Args:
        path (str): The file or directory to hash.

    Raises:
        PathTooLongError: If the path has more than MAX_PATH - 3 characters.
        PathNotFoundError: If the path doesn't exist.
    """
    max_length = h.MAX_PATH - h.RESERVED_PATH_SUFFIX
    dbc.assert_true(len(path) <= max_length, {"msg": "PATH_TOO_LONG", "path": path, "max_length": h.MAX_PATH})
    dbc.assert_true(os.path.exists(path), {"msg": "PATH_NOT_FOUND", "path": path})


def strip_trailing_separator(path: str) -> str:
    """
    Removes one trailing separator from a directory path, so that "dir/" and "dir" fold the same names into the hash.
    A filesystem root like "/" or "C:\\" is kept as it is.

    Args:
        path (str): A directory path.

    Returns:
        str: The path without a trailing separator.
    """
    separators = (os.sep, os.altsep) if os.altsep else (os.sep,)
    if path.endswith(separators):
        stripped = path[:-1]
        if stripped and not stripped.endswith(":") and not stripped.endswith(separators):
            return stripped
    return path


def display_name(path: str) -> str:
    """
    Returns the last component of the path given by the user, for messages and the result file.
    """
    return os.path.basename(strip_trailing_separator(path)) or path


def compute_digest(config: RunConfiguration) -> bytes:
    """
    Computes the digest of a file or directory tree. The hash state is created here, fed by the walker and
    finalized exactly once after the whole tree has been consumed.
    The root path is checked here as well, so the function can be used without the command line front end.

    Args:
        config (RunConfiguration): The configuration of the run.

    Returns:
        bytes: The digest.

    Raises:
        PathTooLongError, PathNotFoundError: If the root path is invalid.
        DirectoryListError, FileOpenError: If the traversal fails. No digest is produced in that case.
    """
    check_input_path(config.root)
    hash_state = config.algorithm.new_state()
    root = strip_trailing_separator(config.root) if os.path.isdir(config.root) else config.root
    hash_path(root, hash_state, config)
    return hash_state.finalize()


def format_result(algorithm: HashAlgorithm, digest: bytes) -> str:
    """
    Formats the result line, e.g. "SHA1 (20 bytes) = DA39A3EE5E6B4B0D3255BFEF95601890AFD80709".

    Args:
        algorithm (HashAlgorithm): The algorithm used.
        digest (bytes): The digest.

    Returns:
        str: The result line without line break.
    """
    return f"{algorithm.algorithm_id} ({algorithm.digest_size} bytes) = {digest.hex().upper()}"


def open_result_file(path: str) -> TextIO:
    """
    Opens the result file for appending. This is done before hashing starts, so a run is not wasted.

    Args:
        path (str): The result file.

    Returns:
        TextIO: The open file.

    Raises:
        OutputFileError: If the file can't be opened.
    """
    try:
        return open(path, "a", encoding="utf-8")
    except OSError as e:
        dbc.raise_error({"msg": "RESULT_FILE_FAILED", "path": path, "reason": e.strerror})


def run_hash(config: RunConfiguration, result_file: Optional[TextIO] = None) -> str:
    """
    Computes the digest for a run and appends the result line to the result file, if one is given.

    Args:
        config (RunConfiguration): The configuration of the run.
        result_file (TextIO, optional): An open result file.

    Returns:
        str: The result line for standard output.
    """
    digest = compute_digest(config)
    result = format_result(config.algorithm, digest)
    msg.log(logger.info, {"msg": "HASH_DONE", "path": config.root, "result": result})
    if result_file is not None:
        result_file.write(result + "\n")
        result_file.flush()
        msg.log(logger.info, {"msg": "RESULT_APPENDED", "path": getattr(result_file, "name", "?")})
    return result
