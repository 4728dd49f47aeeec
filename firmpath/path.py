from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime
from functools import total_ordering
import logging
import os
import os.path
import re
import shutil
import stat
import sys
from typing import Any, BinaryIO, TypeVar

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from . import traversal
from .coerce import path_text, payload_bytes, PathInput, Segment, segment_text
from .errors import NoRelativePathError, UndecodableTextError, WorkingDirectoryRestoreError
from .must import fallible, Must
from .pathtype import identify_st_mode, PathType
from .policy import access_error_handler, get_policy
from .traversal import DirEntry, Visitor

logger = logging.getLogger(__name__)

_R = TypeVar("_R")

_SEPARATORS = os.sep + (os.altsep or "")
_SEPARATOR_PATTERN = re.compile(f"[{re.escape(_SEPARATORS)}]")
_CHUNK_SIZE = 1 << 16


def _empty_path(receiver: Any) -> "Path":
    """The zero value of operations returning a path."""
    cls = receiver if isinstance(receiver, type) else type(receiver)
    return cls._from_text("")


def _empty_list(receiver: Any) -> list[Any]:
    return []


def _lexical_relpath(target: str, base: str) -> str:
    """Compute the relative path from `base` to `target` without touching the filesystem."""
    target_volume, target_rest = os.path.splitdrive(os.path.normpath(target))
    base_volume, base_rest = os.path.splitdrive(os.path.normpath(base))

    if os.path.normcase(target_volume) != os.path.normcase(base_volume):
        raise NoRelativePathError(target, base, "the paths are on different volumes")

    if os.path.isabs(target_rest) != os.path.isabs(base_rest):
        raise NoRelativePathError(target, base, "one path is absolute and the other is relative")

    target_parts = [p for p in target_rest.split(os.sep) if p and p != os.curdir]
    base_parts = [p for p in base_rest.split(os.sep) if p and p != os.curdir]

    common = 0
    while (
        common < min(len(target_parts), len(base_parts))
        and os.path.normcase(target_parts[common]) == os.path.normcase(base_parts[common])
    ):
        common += 1

    remaining = base_parts[common:]
    if os.pardir in remaining:
        raise NoRelativePathError(target, base, f"{os.pardir!r} in the base path cannot be resolved lexically")

    parts = [os.pardir] * len(remaining) + target_parts[common:]
    return os.path.join(*parts) if parts else os.curdir


@total_ordering
class Path:
    """An immutable handle to a filesystem location, holding the path text verbatim.

    Two paths are equal exactly when their text is equal. A path never caches anything about the filesystem: every
    query re-reads it.

    Every operation that can fail raises an exception annotated by the bound error policy. The same operation is
    available through :py:attr:`must`, which hands failures to the policy's failure handler instead.
    """

    __slots__ = ("_text",)

    _text: str

    def __init__(self, path: PathInput = "") -> None:
        """Create a path from a str or os.PathLike[str].

        An empty string refers to the current working directory:

        >>> Path("") == Path.cwd()
        True

        :param path: The path
        :raises UnsupportedTypeError: If `path` is neither a str nor an os.PathLike[str]
        :raises FileNotFoundError: If `path` is empty and the working directory no longer exists
        """
        if isinstance(path, Path):
            self._text = path._text
            return

        text = path_text(path)
        self._text = text if text else os.getcwd()

    @classmethod
    def _from_text(cls, text: str) -> Self:
        """Return an instance of this class holding exactly `text`, avoiding the initialization logic.

        This should only be used internally.
        """
        inst = cls.__new__(cls)
        inst._text = text
        return inst

    def __fspath__(self) -> str:
        """Return the string representation of the path.

        This method makes `Path` objects compatible with os.PathLike.

        :returns: The path text
        """
        return self._text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._text!r})"

    def __eq__(self, other: object) -> bool:
        """Return whether this path has the same text as another path.

        >>> Path("foo/bar") == Path("foo/bar")
        True

        No normalization takes place:
        >>> Path("foo/bar") == Path("foo//bar")
        False
        """
        if isinstance(other, Path):
            return self._text == other._text

        return NotImplemented

    def __lt__(self, other: object) -> bool:
        """Return whether this path should sort before the other path. This check is lexicographic."""
        if isinstance(other, Path):
            return self._text < other._text

        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._text)

    @property
    def must(self) -> "Must[Self]":
        """Return the convenience form of this path's fallible operations.

        >>> Path("/etc/hostname").must.read_all()
        b'myhost\\n'

        On failure, the bound policy's `on_failure` handler is called. By default, it logs the error and exits.
        """
        return Must(self)

    @classmethod
    @fallible(_empty_path)
    def cwd(cls) -> Self:
        """Return a new path object for the current working directory.

        :raises FileNotFoundError: If the working directory no longer exists
        """
        return cls._from_text(os.getcwd())

    def is_empty(self) -> bool:
        """Return whether the path text is empty. Only zero values returned by `must` are empty."""
        return not self._text

    def __truediv__(self, other: Segment) -> Self:
        """Return a new path by joining the given segment to this path. See :py:meth:`join`.

        >>> Path("/foo/bar") / "baz.txt"
        Path('/foo/bar/baz.txt')
        """
        if isinstance(other, bool) or not isinstance(other, (str, os.PathLike, int)):
            return NotImplemented

        return self.join(other)

    def join(self, *segments: Segment) -> Self:
        """Return a new path by joining the given segments to this path, normalizing the result.

        >>> Path("/path/to").join("subdir", 2, "file.txt")
        Path('/path/to/subdir/2/file.txt')

        Redundant separators and "." segments are removed, and ".." segments are applied lexically:
        >>> Path("/path//to/").join("./a", "../b")
        Path('/path/to/b')

        Empty segments are ignored, and an absolute segment is appended rather than replacing the path:
        >>> Path("/path").join("", "/to")
        Path('/path/to')

        :param segments: Strings, os.PathLike[str] objects, or ints (rendered in decimal)

        :returns: The joined path

        :raises UnsupportedTypeError: If a segment has any other type. This is a programming error.
        """
        pieces = [text for text in (self._text, *(segment_text(s) for s in segments)) if text]

        if not pieces:
            return type(self)._from_text("")

        head, *rest = pieces
        # absolute segments are appended, not restarted from the root
        tail = [stripped for stripped in (piece.lstrip(_SEPARATORS) for piece in rest) if stripped]

        return type(self)._from_text(os.path.normpath(os.path.join(head, *tail)))

    @property
    def name(self) -> str:
        """Return the path's last component, ignoring trailing separators.

        >>> Path("/foo/bar/baz.txt").name
        'baz.txt'

        >>> Path("/foo/bar/").name
        'bar'

        An empty path has the name "." and the root has the name of the separator:
        >>> Path("/").name
        '/'
        """
        _, rest = os.path.splitdrive(self._text)
        stripped = rest.rstrip(_SEPARATORS)

        if not stripped:
            return os.sep if rest else os.curdir

        return os.path.basename(stripped)

    @property
    def basename(self) -> Self:
        """Return the path's last component as a path. See :py:attr:`name`."""
        return type(self)._from_text(self.name)

    @property
    def extension(self) -> str:
        """Return the extension of the path's last component, including the leading dot.

        >>> Path("/foo/bar/baz.tar.gz").extension
        '.gz'

        >>> Path("/foo/bar/baz").extension
        ''

        Leading dots do not start an extension, and a trailing dot is an extension of its own:
        >>> Path("/foo/.bashrc").extension
        ''
        >>> Path("/foo/baz.").extension
        '.'
        """
        return os.path.splitext(self.name)[1]

    @property
    def stem(self) -> str:
        """Return the path's last component without its extension.

        >>> Path("/foo/bar/baz.tar.gz").stem
        'baz.tar'

        >>> Path("/foo/bar/baz").stem
        'baz'
        """
        return os.path.splitext(self.name)[0]

    @property
    def parent(self) -> Self:
        """Return the directory part of the path, normalized. A path without a directory part has the parent ".".

        >>> Path("/foo/bar/baz.txt").parent
        Path('/foo/bar')

        >>> Path("baz.txt").parent
        Path('.')
        """
        return type(self)._from_text(os.path.normpath(os.path.dirname(self._text)))

    @property
    def volume(self) -> str:
        """Return the volume (drive or UNC share) of the path; always empty on POSIX.

        >>> Path("C:\\Users\\Emily\\foo.txt").volume   # on Windows
        'C:'
        """
        return os.path.splitdrive(self._text)[0]

    def split_volume(self) -> tuple[str, str]:
        """Split the path into its volume and the remainder.

        >>> Path("/foo/bar").split_volume()
        ('', '/foo/bar')
        """
        return os.path.splitdrive(self._text)

    @property
    def parts(self) -> tuple[str, ...]:
        """Split the path text on every platform separator, verbatim.

        >>> Path("/foo/bar/baz.txt").parts
        ('', 'foo', 'bar', 'baz.txt')

        >>> Path("foo//bar").parts
        ('foo', '', 'bar')
        """
        return tuple(_SEPARATOR_PATTERN.split(self._text))

    def is_absolute(self) -> bool:
        """Return whether the path is absolute (includes a root and, as allowed, a drive)."""
        return os.path.isabs(self._text)

    @fallible(_empty_path)
    def absolute(self) -> Self:
        """Return the normalized absolute form of this path, resolved against the working directory.

        >>> Path("a/b/../c.txt").absolute()   # in /foo/bar
        Path('/foo/bar/a/c.txt')

        :raises FileNotFoundError: If the path is relative and the working directory no longer exists
        """
        return type(self)._from_text(os.path.abspath(self._text or os.curdir))

    @fallible(_empty_path)
    def relative_to(self, base: PathInput) -> Self:
        """Compute a version of this path relative to `base`. This is purely lexical.

        >>> Path("/path/to/file").relative_to("/path")
        Path('to/file')

        >>> Path("/path/to/file").relative_to("/path/to/another/place")
        Path('../../file')

        :param base: The path to express this path in terms of ("" means the working directory)

        :returns: The relative path from `base` to `self`

        :raises UnsupportedTypeError: If `base` is not a str or os.PathLike[str]
        :raises NoRelativePathError: If no relative path exists, e.g. one path is absolute and the other is not
        """
        other = type(self)(base)
        return type(self)._from_text(_lexical_relpath(self._text or os.curdir, other._text))

    @fallible(_empty_path)
    def relative_of(self, target: PathInput) -> Self:
        """Compute `target` relative to this path: `p.relative_of(t) == Path(t).relative_to(p)`.

        >>> Path("/path").relative_of("/path/to/file")
        Path('to/file')
        """
        return type(self)(target).relative_to(self)

    def glob_match(self, pattern: str, *, include_hidden: bool = True) -> bool:
        """Match this path against a shell-style pattern, segment by segment.

        Wildcards never match across separators, and the number of segments must be equal:
        >>> Path("src/pkg/test_path.py").glob_match("src/*/test_*.py")
        True
        >>> Path("src/pkg/sub/test_path.py").glob_match("src/*/test_*.py")
        False

        :raises ValueError: If the pattern is empty or absolute
        """
        segments = traversal.split_pattern(pattern)
        names = traversal.split_segments(self._text)

        return len(names) == len(segments) and all(
            traversal.segment_matches(name, segment, include_hidden=include_hidden)
            for name, segment in zip(names, segments)
        )

    @fallible(None)
    def stat(self, *, follow_symlinks: bool = True) -> os.stat_result:
        """Return an os.stat_result object containing information about this path, like os.stat.
        The result is looked up at each call to this method.

        :param follow_symlinks:
            If True and the path is a symbolic link, then stat the target of the link;
            if False and the path is a symbolic link, then stat the symlink itself.

        :raises FileNotFoundError: If the path does not exist
        """
        return os.stat(self._text, follow_symlinks=follow_symlinks)

    @fallible(False)
    def exists(self, *, follow_symlinks: bool = True) -> bool:
        """Return True if the path points to an existing filesystem object, False otherwise.

        A missing path is not an error, but failing to find out is:

        >>> Path("/path/to/nonexisting/file").exists()
        False

        >>> Path("/root/secret/file").exists()
        PermissionError: [Errno 13] Permission denied. Failed during stat: '/root/secret/file'

        :param follow_symlinks:
            If True and the path is a symlink, then return whether the target of the symlink exists (so a broken
            symlink does not exist); if False, then return whether this path exists (symlink or otherwise).

        :raises OSError: If the path cannot be accessed for, e.g., permissions reasons.
        """
        try:
            self.stat(follow_symlinks=follow_symlinks)
        except (FileNotFoundError, NotADirectoryError):
            return False

        return True

    @fallible(False)
    def is_file(self) -> bool:
        """Return True if the path is an existing regular file (or a symlink to one), False otherwise.

        :raises OSError: If the path cannot be accessed due to, e.g., permission errors.
        """
        if not self.exists():
            return False

        return stat.S_ISREG(self.stat().st_mode)

    @fallible(False)
    def is_dir(self) -> bool:
        """Return True if the path is an existing directory (or a symlink to one), False otherwise.

        :raises OSError: If the path cannot be accessed due to, e.g., permission errors.
        """
        if not self.exists():
            return False

        return stat.S_ISDIR(self.stat().st_mode)

    @fallible(False)
    def is_symlink(self) -> bool:
        """Return True if the path itself is a symbolic link, even a broken one.

        :raises OSError: If the path cannot be accessed due to, e.g., permission errors.
        """
        if not self.exists(follow_symlinks=False):
            return False

        return stat.S_ISLNK(self.stat(follow_symlinks=False).st_mode)

    @property
    @access_error_handler
    def type(self) -> PathType:
        """Return the type of the path itself: e.g, REGULAR_FILE or SYMLINK. Symlinks are not followed.

        >>> Path("/path/to/symlink").type
        PathType.SYMLINK

        >>> Path("/path/to/nonexistent/file").type
        PathType.DOES_NOT_EXIST

        :raises OSError: If the path cannot be accessed for, e.g., permissions reasons.
        """
        if not self.exists(follow_symlinks=False):
            return PathType.DOES_NOT_EXIST

        return identify_st_mode(self.stat(follow_symlinks=False).st_mode)

    @fallible(0)
    def size(self) -> int:
        """Return the size of the file in bytes.

        :raises FileNotFoundError: If this path does not exist
        :raises OSError: If the path cannot be accessed for, e.g., permissions reasons.
        """
        return self.stat().st_size

    @fallible(datetime.fromtimestamp(0))
    def modified_time(self) -> datetime:
        """Return the last modification time of the file.

        >>> Path("/path/to/file/modified/2025-10-13/at/15h14m28s").modified_time()
        datetime.datetime(2025, 10, 13, 15, 14, 28)

        :raises FileNotFoundError: If this path does not exist
        :raises OSError: If the path cannot be accessed for, e.g., permissions reasons.
        """
        return datetime.fromtimestamp(self.stat().st_mtime)

    @fallible(_empty_path)
    def chdir(self) -> Self:
        """Make this path the process working directory.

        :raises FileNotFoundError: If the path does not exist
        :raises NotADirectoryError: If the path is not a directory
        """
        os.chdir(self._text)
        return self

    @classmethod
    @contextmanager
    def preserving_cwd(cls) -> Iterator[Self]:
        """Restore the current working directory when the `with` block exits, however it exits.

        >>> with Path.preserving_cwd() as previous:
        ...     Path("/tmp").chdir()
        >>> Path.cwd() == previous
        True

        If the block raises, its exception propagates. If restoring fails, a WorkingDirectoryRestoreError is raised
        instead, carrying the block's exception (if any) as `action_error`.

        :yields: The working directory that will be restored
        :raises WorkingDirectoryRestoreError: If the previous working directory cannot be restored
        """
        previous = cls.cwd()
        action_error: BaseException | None = None

        try:
            yield previous
        except BaseException as e:
            action_error = e
            raise
        finally:
            try:
                os.chdir(previous._text)
            except OSError as e:
                raise WorkingDirectoryRestoreError(previous._text, e, action_error) from e

    @fallible(None)
    def within(self, action: Callable[[], _R]) -> _R:
        """Run `action` with this path as the working directory, then restore the previous working directory.

        >>> Path("/tmp").within(lambda: Path.cwd())
        Path('/tmp')

        :param action: The callable to run
        :returns: The result of `action`
        :raises NotADirectoryError: If this path is not a directory (`action` is not run)
        :raises WorkingDirectoryRestoreError: If the previous working directory cannot be restored
        """
        with self.preserving_cwd():
            self.chdir()
            return action()

    @fallible(_empty_path)
    def mkdir(self) -> Self:
        """Create a directory at this path, using the policy's `dir_mode`.

        :raises FileExistsError: If the path already exists
        :raises FileNotFoundError: If the parent directory does not exist
        """
        os.mkdir(self._text, get_policy().dir_mode)
        logger.debug("Created directory %s", self)
        return self

    @fallible(_empty_path)
    def mkdir_all(self) -> Self:
        """Create a directory at this path along with any missing parents, using the policy's `dir_mode`.

        It is not an error for the directory to exist already:
        >>> Path("a/b/c").mkdir_all().mkdir_all()
        Path('a/b/c')

        :raises FileExistsError: If the path or one of its parents exists but is not a directory
        """
        os.makedirs(self._text, get_policy().dir_mode, exist_ok=True)
        return self

    @fallible(_empty_path)
    def chmod(self, mode: int) -> Self:
        """Change the permission bits of the path.

        >>> Path("/path/to/file").chmod(0o644)

        :param mode: The new permissions, e.g. 0o644
        :raises FileNotFoundError: If this path does not exist
        :raises OSError: If the path cannot be accessed for, e.g., permissions reasons.
        """
        os.chmod(self._text, mode)
        return self

    def _resolve_destination(self, destination: PathInput) -> Self:
        """Return `destination`, or the path inside it named like this path if it is an existing directory."""
        target = type(self)(destination)

        if target.is_dir():
            return target / self.name

        return target

    @fallible(_empty_path)
    def symlink(self, destination: PathInput) -> Self:
        """Create a symbolic link to this path.

        If `destination` is an existing directory, the link is created inside it using this path's name; otherwise,
        `destination` is the path of the link itself. The link stores this path's text verbatim, so a relative path
        is interpreted relative to the directory containing the link.

        >>> Path("/data/file.txt").symlink("/tmp")
        Path('/tmp/file.txt')

        :param destination: The directory to create the link in, or the path of the link
        :returns: The path of the new link
        :raises FileExistsError: If the link path is occupied
        """
        link = self._resolve_destination(destination)
        os.symlink(self._text, link._text, target_is_directory=self.is_dir())

        logger.debug("Created symlink %s -> %s", link, self)
        return link

    @fallible(_empty_path)
    def copy(self, destination: PathInput) -> Self:
        """Copy the contents of this file.

        If `destination` is an existing directory, the copy is placed inside it using this path's name. Files are
        created with the policy's `file_mode`; an existing file is truncated. If streaming fails part of the way,
        the partially written destination is left in place.

        >>> Path("a/b/c/f.txt").copy("a")
        Path('a/f.txt')

        :param destination: The directory to copy into, or the path of the copy
        :returns: The path of the copy
        :raises FileNotFoundError: If this path does not exist
        :raises IsADirectoryError: If this path is a directory
        :raises shutil.SameFileError: If the destination is this file (copying would truncate it)
        """
        target = self._resolve_destination(destination)

        if target.exists() and os.path.samefile(self._text, target._text):
            raise shutil.SameFileError(f"{self} and {target} are the same file")

        with self.open() as source, target.create() as sink:
            shutil.copyfileobj(source, sink, _CHUNK_SIZE)

        logger.debug("Copied %s to %s", self, target)
        return target

    @fallible(None)
    def open(self) -> BinaryIO:
        """Open the file for reading in binary mode. The caller owns the returned handle."""
        return open(self._text, "rb")

    @fallible(None)
    def create(self) -> BinaryIO:
        """Create (or truncate) the file with the policy's `file_mode` and open it for writing in binary mode."""
        fd = os.open(self._text, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, get_policy().file_mode)

        try:
            return os.fdopen(fd, "wb")
        except BaseException:
            os.close(fd)
            raise

    @fallible(0)
    def write(self, data: str | bytes | bytearray | memoryview | BinaryIO) -> int:
        """Write `data` to this file, replacing any previous content.

        >>> Path("greeting.txt").write("hello")
        5

        :param data: Text (encoded as UTF-8), a bytes-like object, or a binary stream to copy from
        :returns: The number of bytes written
        :raises UnsupportedDataError: If `data` is of any other type
        """
        payload = payload_bytes(data)

        with self.create() as sink:
            if isinstance(payload, bytes):
                return sink.write(payload)

            written = 0
            while chunk := payload.read(_CHUNK_SIZE):
                written += sink.write(chunk)

            return written

    @fallible(b"")
    def read_all(self) -> bytes:
        """Return the entire contents of the file as bytes."""
        with self.open() as f:
            return f.read()

    @fallible("")
    def read_text(self, *, encoding: str = "utf-8", errors: str | None = None) -> str:
        """Return the entire contents of the file as text.

        :raises UndecodableTextError: If the contents are not valid in `encoding`
        """
        data = self.read_all()

        try:
            return data.decode(encoding, errors or "strict")
        except UnicodeDecodeError as e:
            raise UndecodableTextError(self._text, encoding, e) from e

    @fallible(_empty_path)
    def regexp_replace(self, pattern: str | re.Pattern[str], replacement: str, *, count: int = 0) -> Self:
        """Replace every match of a regular expression in the file's text.

        >>> Path("version.txt").regexp_replace(r"(\\d+)\\.(\\d+)", r"\\1.\\2.0")

        The whole file is read, substituted, and written back. This is not atomic: a crash while writing can leave
        the file truncated.

        :param pattern: The regular expression
        :param replacement: The replacement, as accepted by :py:func:`re.sub` (e.g. `\\1` for group references)
        :param count: The maximum number of replacements (0 for all)
        :raises re.error: If the pattern is not a valid regular expression
        """
        self.write(re.sub(pattern, replacement, self.read_text(), count=count))
        return self

    @fallible(_empty_list)
    def scan(self) -> list[DirEntry]:
        """Return the entries of this directory with their type, size and modification time, sorted by name.

        :raises FileNotFoundError: If this path does not exist
        :raises NotADirectoryError: If this path is not a directory
        """
        return traversal.scan(self)

    @fallible(_empty_list)
    def children(self, *, follow_symlinks: bool = False) -> list[Self]:
        """Return the regular files directly inside this directory, sorted by name.

        For the file structure:
        /path/to/
        ├── subdir/
        │   └── subfile
        ├── link -> subdir/subfile
        └── file

        >>> Path("/path/to").children()
        [Path('/path/to/file')]

        >>> Path("/path/to").children(follow_symlinks=True)
        [Path('/path/to/file'), Path('/path/to/link')]

        An empty list always means there are no files; failing to list the directory raises.

        :param follow_symlinks: If True, include symlinks that resolve to regular files
        :raises FileNotFoundError: If this path does not exist
        :raises NotADirectoryError: If this path is not a directory
        :raises PermissionError: If this directory cannot be read
        """
        return traversal.children(self, follow_symlinks=follow_symlinks)

    @fallible(_empty_list)
    def directories(self, *, follow_symlinks: bool = False) -> list[Self]:
        """Return the directories directly inside this directory, sorted by name. See :py:meth:`children`."""
        return traversal.directories(self, follow_symlinks=follow_symlinks)

    @fallible(False)
    def walk_files(self, visit: Visitor, *, follow_symlinks: bool = False) -> bool:
        """Call `visit(path, entry, error)` for every regular file below this directory.

        The walk is depth-first, and the entries of each directory are handled in name order. `visit` returns
        None (or WalkAction.CONTINUE) to go on, WalkAction.SKIP to skip the rest of the current directory, or
        WalkAction.ABORT to stop.

        A subdirectory that cannot be listed is reported as `visit(path, None, error)`, and the walk goes on with
        its siblings unless `visit` aborts. Failing to list this directory itself raises.

        >>> found = []
        >>> Path("/path/to").walk_files(lambda path, entry, error: found.append(path))
        True

        :param visit: The visitor callback
        :param follow_symlinks: If True, symlinks to files are visited and symlinks to directories are descended into
            (each directory at most once per descent chain); if False, symlinks are ignored.
        :returns: True if the walk completed, False if `visit` aborted it
        :raises FileNotFoundError: If this path does not exist
        """
        return traversal.walk_files(self, visit, follow_symlinks=follow_symlinks)

    @fallible(False)
    def walk_dirs(self, visit: Visitor, *, follow_symlinks: bool = False) -> bool:
        """Call `visit(path, entry, error)` for this directory and every directory below it, in pre-order.

        Returning WalkAction.SKIP for a directory prevents descending into it. See :py:meth:`walk_files`.

        :returns: True if the walk completed, False if `visit` aborted it
        :raises FileNotFoundError: If this path does not exist
        """
        return traversal.walk_dirs(self, visit, follow_symlinks=follow_symlinks)

    @fallible(_empty_list)
    def glob(self, pattern: str, *, follow_symlinks: bool = False, include_hidden: bool = True) -> list[Self]:
        """Return the paths below this directory that match a shell-style pattern, sorted.

        The pattern is matched one segment per directory level: `*`, `?` and `[...]` never match a separator, and
        `**` has no special meaning. Only directories that match an intermediate segment are listed.

        >>> Path("/path/to").glob("*.txt")           # direct children only
        [Path('/path/to/notes.txt')]

        >>> Path("/path/to").glob("*/*.log")
        [Path('/path/to/logs/log001.log'), Path('/path/to/logs/log002.log')]

        :param pattern: The relative pattern
        :param follow_symlinks: If True, descend into symlinks to directories matching intermediate segments
        :param include_hidden: If False, wildcards do not match names starting with "."
        :raises ValueError: If the pattern is empty or absolute
        :raises NotADirectoryError: If this path is not a directory
        :raises OSError: If a directory that could contain matches cannot be listed
        """
        return traversal.glob(self, pattern, follow_symlinks=follow_symlinks, include_hidden=include_hidden)
