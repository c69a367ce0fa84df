import logging
import os
import string
from dataclasses import dataclass, field

import treehash.intern.dbc as dbc
import treehash.intern.msg as msg
from treehash.component.algorithm import HashAlgorithm, HashState, DEFAULT_ALGORITHM
from treehash.component.canonical import name_bytes
from treehash.component.matcher import is_excluded


logger = logging.getLogger(__name__)

CHUNK_SIZE: int = 4096
"""Files are read and hashed in chunks of this size."""

DEFAULT_NAME_ENCODING: str = "utf-16-le"
"""Names are folded into the digest as UTF-16-LE, which gives the same bytes as DirHash on Windows."""


@dataclass(frozen=True)
class RunConfiguration:
    """
    Everything that determines the digest besides the content of the tree. Immutable for the whole run.
    """
    root: str
    algorithm: HashAlgorithm = DEFAULT_ALGORITHM
    include_names: bool = False
    exclude: tuple[str, ...] = field(default_factory=tuple)
    name_encoding: str = DEFAULT_NAME_ENCODING


@dataclass(frozen=True)
class DirEntry:
    """An immediate child of the directory being processed."""
    path: str
    is_dir: bool


_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _utf16_units(text: str) -> bytes:
    return text.encode("utf-16-be", errors="surrogatepass")


def _sort_key(entry: DirEntry) -> tuple[bytes, bytes]:
    # only A-Z are folded, keys compare by UTF-16 code units; names differing only in case are ordered by their raw text
    return (_utf16_units(entry.path.translate(_ASCII_LOWER)), _utf16_units(entry.path))


def list_directory(dir_path: str) -> list[DirEntry]:
    """
    Lists the immediate children of a directory, without "." and "..".

    Args:
        dir_path (str): The directory to list.

    Returns:
        list[DirEntry]: The children in the order the filesystem returns them.

    Raises:
        DirectoryListError: If the directory can't be listed.
    """
    entries = []
    try:
        with os.scandir(dir_path) as it:
            for entry in it:
                if entry.name in (".", ".."):
                    continue
                entries.append(DirEntry(os.path.join(dir_path, entry.name), entry.is_dir()))
    except OSError as e:
        dbc.raise_error({"msg": "DIRECTORY_LIST_FAILED", "path": dir_path, "errno": e.errno, "reason": e.strerror})
    return entries


def hash_file(file_path: str, hash_state: HashState, config: RunConfiguration) -> None:
    """
    Feeds a file into the hash: first its canonical name (if names are included), then its content.

    Args:
        file_path (str): The file to hash.
        hash_state (HashState): The hash state of the run.
        config (RunConfiguration): The configuration of the run.

    Raises:
        FileOpenError: If the file can't be opened or read.
    """
    if is_excluded(file_path, config.exclude):
        msg.log(logger.debug, {"msg": "FILE_EXCLUDED", "path": file_path})
        return
    if config.include_names:
        hash_state.update(name_bytes(file_path, config.name_encoding))
    try:
        with open(file_path, "rb") as f:
            for chunk in iter(lambda: f.read(CHUNK_SIZE), b""):
                hash_state.update(chunk)
    except OSError as e:
        dbc.raise_error({"msg": "FILE_OPEN_FAILED", "path": file_path, "errno": e.errno, "reason": e.strerror})


def hash_directory(dir_path: str, hash_state: HashState, config: RunConfiguration) -> None:
    """
    Feeds a directory tree into the hash. The canonical directory name comes first (if names are included),
    then all children that are not excluded, sorted case-insensitively by path. Subdirectories are hashed
    recursively, depth first. The first error aborts the traversal.

    Args:
        dir_path (str): The directory to hash.
        hash_state (HashState): The hash state of the run.
        config (RunConfiguration): The configuration of the run.

    Raises:
        DirectoryListError: If a directory can't be listed.
        FileOpenError: If a file can't be opened or read.
    """
    if is_excluded(dir_path, config.exclude):
        msg.log(logger.debug, {"msg": "DIRECTORY_EXCLUDED", "path": dir_path})
        return
    if config.include_names:
        hash_state.update(name_bytes(dir_path, config.name_encoding))

    entries = [entry for entry in list_directory(dir_path) if not is_excluded(entry.path, config.exclude)]
    entries.sort(key=_sort_key)

    for entry in entries:
        if entry.is_dir:
            hash_directory(entry.path, hash_state, config)
        else:
            hash_file(entry.path, hash_state, config)


def hash_path(path: str, hash_state: HashState, config: RunConfiguration) -> None:
    """
    Feeds a file or a directory tree into the hash.

    Args:
        path (str): The file or directory to hash.
        hash_state (HashState): The hash state of the run.
        config (RunConfiguration): The configuration of the run.
    """
    if os.path.isdir(path):
        hash_directory(path, hash_state, config)
    else:
        hash_file(path, hash_state, config)
