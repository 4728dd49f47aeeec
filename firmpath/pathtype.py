from enum import auto, Enum
import stat


class PathType(Enum):
    """The kind of filesystem object a path points to."""
    REGULAR_FILE = auto()
    DIRECTORY = auto()
    SYMLINK = auto()
    OTHER = auto()
    DOES_NOT_EXIST = auto()


def identify_st_mode(mode: int) -> PathType:
    """Identify the path type from the given stat mode.

    Pipes, sockets and devices are all reported as :py:attr:`PathType.OTHER`.

    :param mode: The mode of the path, as returned by :py:func:`os.stat`, via `os.stat(path).st_mode`.
    :returns: The path type
    """
    if stat.S_ISREG(mode):
        return PathType.REGULAR_FILE

    if stat.S_ISDIR(mode):
        return PathType.DIRECTORY

    if stat.S_ISLNK(mode):
        return PathType.SYMLINK

    return PathType.OTHER
