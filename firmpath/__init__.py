from .errors import (
    is_not_found,
    NoRelativePathError,
    PathError,
    UndecodableTextError,
    UnsupportedDataError,
    UnsupportedTypeError,
    WorkingDirectoryRestoreError,
)
from .must import Must
from .path import Path
from .pathtype import PathType
from .policy import configure, ErrorPolicy, get_policy, override, set_policy
from .traversal import DirEntry, WalkAction

__all__ = [
    "configure",
    "DirEntry",
    "ErrorPolicy",
    "get_policy",
    "is_not_found",
    "Must",
    "NoRelativePathError",
    "override",
    "Path",
    "PathError",
    "PathType",
    "set_policy",
    "UndecodableTextError",
    "UnsupportedDataError",
    "UnsupportedTypeError",
    "WalkAction",
    "WorkingDirectoryRestoreError",
]
