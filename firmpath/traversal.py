"""Directory enumeration, recursive walking and glob matching.

Everything here is built on :py:func:`scan`, which lists one directory and snapshots the stat information of each
entry. The functions take and return :py:class:`firmpath.Path` values; the equivalent ``Path`` methods add the error
policy on top.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime
from enum import auto, Enum
import errno
import fnmatch
import logging
import os
import re
import stat
from typing import TYPE_CHECKING

from .pathtype import identify_st_mode, PathType

if TYPE_CHECKING:
    from .path import Path

logger = logging.getLogger(__name__)

_SEPARATOR_PATTERN = re.compile("[" + re.escape(os.sep + (os.altsep or "")) + "]")
_MAGIC_PATTERN = re.compile(r"[*?[]")


@dataclass(frozen=True)
class DirEntry:
    """One entry of a directory listing, with stat information taken at enumeration time.

    Symbolic links are not followed: a link to a directory has type :py:attr:`PathType.SYMLINK`, and `size` and
    `modified_time` describe the link itself.
    """

    path: "Path"
    type: PathType
    size: int
    modified_time: datetime

    @property
    def name(self) -> str:
        return self.path.name


class WalkAction(Enum):
    """What a walk visitor wants to happen next."""

    CONTINUE = auto()
    #: For a directory, do not descend into it. For a file, skip the remaining entries of its directory.
    SKIP = auto()
    #: Stop the walk immediately.
    ABORT = auto()


Visitor = Callable[["Path", DirEntry | None, OSError | None], WalkAction | None]


def _entry_from_stat(path: "Path", info: os.stat_result) -> DirEntry:
    return DirEntry(path, identify_st_mode(info.st_mode), info.st_size, datetime.fromtimestamp(info.st_mtime))


def scan(directory: "Path") -> list[DirEntry]:
    """List the direct entries of a directory, sorted by name.

    :param directory: The directory to list
    :returns: A DirEntry for every entry (except "." and "..")
    :raises FileNotFoundError: If the directory does not exist
    :raises NotADirectoryError: If the path is not a directory
    :raises PermissionError: If the directory cannot be read
    """
    with os.scandir(os.fspath(directory)) as it:
        items = sorted(((item.name, item.stat(follow_symlinks=False)) for item in it), key=lambda pair: pair[0])

    return [_entry_from_stat(directory / name, info) for name, info in items]


def _resolved_type(entry: DirEntry, follow_symlinks: bool) -> PathType:
    """Return the type of the entry, looking through a symlink if `follow_symlinks` is set."""
    if entry.type is not PathType.SYMLINK or not follow_symlinks:
        return entry.type

    try:
        return identify_st_mode(os.stat(os.fspath(entry.path)).st_mode)
    except (FileNotFoundError, NotADirectoryError):
        # broken link
        return PathType.SYMLINK


def children(directory: "Path", *, follow_symlinks: bool = False) -> list["Path"]:
    """Return the regular files directly inside `directory`, sorted by name.

    Symbolic links are excluded, unless `follow_symlinks` is set and the link resolves to a regular file.
    """
    return [
        entry.path
        for entry in scan(directory)
        if _resolved_type(entry, follow_symlinks) is PathType.REGULAR_FILE
    ]


def directories(directory: "Path", *, follow_symlinks: bool = False) -> list["Path"]:
    """Return the directories directly inside `directory`, sorted by name.

    Symbolic links are excluded, unless `follow_symlinks` is set and the link resolves to a directory.
    """
    return [
        entry.path
        for entry in scan(directory)
        if _resolved_type(entry, follow_symlinks) is PathType.DIRECTORY
    ]


class _Walker:
    """Pre-order, depth-first walk reporting entries of one type to a visitor."""

    def __init__(self, visit: Visitor, want: PathType, follow_symlinks: bool) -> None:
        self._visit = visit
        self._want = want
        self._follow_symlinks = follow_symlinks
        # (device, inode) of the directories on the current descent chain
        self._active: set[tuple[int, int]] = set()

    def _call(self, path: "Path", entry: DirEntry | None, error: OSError | None) -> WalkAction:
        action = self._visit(path, entry, error)
        return WalkAction.CONTINUE if action is None else action

    def run(self, root: "Path") -> bool:
        info = os.stat(os.fspath(root))
        entry = _entry_from_stat(root, info)

        if entry.type is not PathType.DIRECTORY:
            if entry.type is self._want:
                return self._call(root, entry, None) is not WalkAction.ABORT
            return True

        if self._want is PathType.DIRECTORY:
            action = self._call(root, entry, None)
            if action is WalkAction.ABORT:
                return False
            if action is WalkAction.SKIP:
                return True

        # errors listing the root itself are structural and propagate
        return self._descend(root, info, scan(root))

    def _descend(self, directory: "Path", info: os.stat_result, entries: Iterable[DirEntry]) -> bool:
        key = (info.st_dev, info.st_ino)
        self._active.add(key)

        try:
            for entry in entries:
                kind = entry.type
                target_info = None

                if kind is PathType.SYMLINK and self._follow_symlinks:
                    try:
                        target_info = os.stat(os.fspath(entry.path))
                        kind = identify_st_mode(target_info.st_mode)
                    except (FileNotFoundError, NotADirectoryError):
                        pass
                    except OSError as e:
                        if self._call(entry.path, None, e) is WalkAction.ABORT:
                            return False
                        continue

                if kind is PathType.DIRECTORY:
                    if self._want is PathType.DIRECTORY:
                        action = self._call(entry.path, entry, None)
                        if action is WalkAction.ABORT:
                            return False
                        if action is WalkAction.SKIP:
                            continue

                    if not self._enter(entry, target_info):
                        return False

                elif kind is self._want:
                    action = self._call(entry.path, entry, None)
                    if action is WalkAction.ABORT:
                        return False
                    if action is WalkAction.SKIP:
                        break
        finally:
            self._active.discard(key)

        return True

    def _enter(self, entry: DirEntry, info: os.stat_result | None) -> bool:
        try:
            if info is None:
                info = os.stat(os.fspath(entry.path), follow_symlinks=False)

            if (info.st_dev, info.st_ino) in self._active:
                logger.debug("Not descending into %s: directory is already being walked", entry.path)
                return True

            entries = scan(entry.path)
        except OSError as e:
            logger.debug("Failed to list %s during walk: %s", entry.path, e)
            return self._call(entry.path, None, e) is not WalkAction.ABORT

        return self._descend(entry.path, info, entries)


def walk_files(root: "Path", visit: Visitor, *, follow_symlinks: bool = False) -> bool:
    """Call `visit` for every regular file below `root`, depth-first, in name order.

    :returns: True if the walk completed, False if the visitor aborted it
    """
    return _Walker(visit, PathType.REGULAR_FILE, follow_symlinks).run(root)


def walk_dirs(root: "Path", visit: Visitor, *, follow_symlinks: bool = False) -> bool:
    """Call `visit` for `root` and every directory below it, depth-first (pre-order), in name order.

    :returns: True if the walk completed, False if the visitor aborted it
    """
    return _Walker(visit, PathType.DIRECTORY, follow_symlinks).run(root)


def split_pattern(pattern: str) -> list[str]:
    """Split a relative glob pattern into its segments.

    >>> split_pattern("src/*/test_*.py")
    ['src', '*', 'test_*.py']

    :raises ValueError: If the pattern is empty or absolute
    """
    if os.path.isabs(pattern) or os.path.splitdrive(pattern)[0]:
        raise ValueError(f"glob pattern must be relative: {pattern!r}")

    segments = split_segments(pattern)
    if not segments:
        raise ValueError(f"glob pattern must name at least one path segment: {pattern!r}")

    return segments


def split_segments(text: str) -> list[str]:
    """Split path text into its non-empty segments, dropping "." segments."""
    return [s for s in _SEPARATOR_PATTERN.split(text) if s and s != os.curdir]


def has_magic(segment: str) -> bool:
    """Return whether a pattern segment contains any wildcard."""
    return _MAGIC_PATTERN.search(segment) is not None


def segment_matches(name: str, segment: str, *, include_hidden: bool = True) -> bool:
    """Match one path segment against one pattern segment.

    Wildcards never match across separators. If `include_hidden` is False, names starting with "." only match
    pattern segments that also start with ".".
    """
    if not include_hidden and name.startswith(".") and not segment.startswith("."):
        return False

    return fnmatch.fnmatchcase(name, segment)


class _Globber:
    def __init__(self, segments: list[str], follow_symlinks: bool, include_hidden: bool) -> None:
        self._segments = segments
        self._follow_symlinks = follow_symlinks
        self._include_hidden = include_hidden
        self.matches: list["Path"] = []

    def _is_traversable(self, path: "Path", kind: PathType) -> bool:
        if kind is PathType.DIRECTORY:
            return True

        if kind is PathType.SYMLINK and self._follow_symlinks:
            try:
                return stat.S_ISDIR(os.stat(os.fspath(path)).st_mode)
            except (FileNotFoundError, NotADirectoryError):
                return False

        return False

    def run(self, directory: "Path", index: int = 0) -> None:
        segment = self._segments[index]
        last = index == len(self._segments) - 1

        if not has_magic(segment):
            # a literal segment needs no listing
            candidate = directory / segment
            try:
                info = os.stat(os.fspath(candidate), follow_symlinks=False)
            except (FileNotFoundError, NotADirectoryError):
                return

            if last:
                self.matches.append(candidate)
            elif self._is_traversable(candidate, identify_st_mode(info.st_mode)):
                self.run(candidate, index + 1)
            return

        for entry in scan(directory):
            if not segment_matches(entry.name, segment, include_hidden=self._include_hidden):
                continue

            if last:
                self.matches.append(entry.path)
            elif self._is_traversable(entry.path, entry.type):
                self.run(entry.path, index + 1)


def glob(root: "Path", pattern: str, *, follow_symlinks: bool = False, include_hidden: bool = True) -> list["Path"]:
    """Return the paths below `root` whose relative form matches `pattern` segment by segment, sorted.

    Only directories matching an intermediate segment are listed; other branches are never enumerated.

    :raises ValueError: If the pattern is empty or absolute
    :raises NotADirectoryError: If `root` is not a directory
    :raises OSError: If a directory that could contain matches cannot be listed
    """
    segments = split_pattern(pattern)

    root_text = os.fspath(root)
    if not stat.S_ISDIR(os.stat(root_text).st_mode):
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), root_text)

    globber = _Globber(segments, follow_symlinks, include_hidden)
    globber.run(root)
    return sorted(globber.matches)
