# signature_api/paths.py
import ntpath
import os


def _normalize_separators(path: str) -> str:
    return path.replace("\\", "/")


def is_absolute(path: str) -> bool:
    # accept windows drive paths ("C:/...") as absolute as well
    return os.path.isabs(path) or bool(ntpath.splitdrive(path)[0])


def resolve_stored_path(stored_path: str, storage_root: str, marker: str = "Storage") -> str:
    """Turn a path stored in a record into a filesystem location.

    Absolute paths are used as is. A leading ``marker`` segment (compared
    case-insensitively) stands for ``storage_root``. Anything else is taken
    relative to ``storage_root``.
    """
    path = _normalize_separators(stored_path.strip())
    if is_absolute(path):
        return os.path.normpath(path)

    segments = [s for s in path.split("/") if s]
    if segments and marker and segments[0].lower() == marker.lower():
        segments = segments[1:]
    return os.path.normpath(os.path.join(storage_root, *segments))


def to_stored_path(path: str, storage_root: str) -> str:
    # paths under the storage root are kept relative so the store can move
    absolute = os.path.abspath(path)
    root = os.path.abspath(storage_root)
    if os.path.commonpath([absolute, root]) == root:
        return _normalize_separators(os.path.relpath(absolute, root))
    return absolute


def signed_output_path(source_path: str) -> str:
    folder, filename = os.path.split(source_path)
    stem = os.path.splitext(filename)[0]
    return os.path.join(folder, f"{stem}_signed.pdf")
