import errno


class PathError(Exception):
    """Base class for the errors raised by firmpath itself (as opposed to those raised by the OS)."""


class UnsupportedTypeError(PathError, TypeError):
    """A value could not be interpreted as a path or path segment."""

    def __init__(self, value: object, *, expected: str) -> None:
        super().__init__(f"expected {expected}, not {type(value).__name__}")
        self.value = value


class UnsupportedDataError(PathError, TypeError):
    """A payload passed to `Path.write` has no defined byte encoding."""

    def __init__(self, data: object) -> None:
        super().__init__(f"cannot write data of type {type(data).__name__}: expected str, bytes or a binary stream")
        self.data = data


class NoRelativePathError(PathError, ValueError):
    """No relative path exists between two paths (e.g., one is absolute and the other relative)."""

    def __init__(self, path: str, base: str, reason: str) -> None:
        super().__init__(f"cannot make {path!r} relative to {base!r}: {reason}")
        self.path = path
        self.base = base


class UndecodableTextError(PathError, ValueError):
    """The contents of a file are not valid text in the requested encoding."""

    def __init__(self, path: str, encoding: str, reason: UnicodeDecodeError) -> None:
        super().__init__(f"cannot decode {path} as {encoding}: {reason}")
        self.path = path
        self.encoding = encoding
        self.reason = reason


class WorkingDirectoryRestoreError(PathError):
    """The previous working directory could not be restored after running an action.

    If the action itself also failed, its exception is available as `action_error`.
    """

    def __init__(self, directory: str, reason: BaseException, action_error: BaseException | None = None) -> None:
        message = f"Failed to restore working directory {directory}. Reason: {reason}"
        if action_error is not None:
            message += f" (the action had already failed with: {action_error!r})"

        super().__init__(message)
        self.directory = directory
        self.reason = reason
        self.action_error = action_error


def is_not_found(error: BaseException | None) -> bool:
    """Return whether the given error reports a missing filesystem object.

    This holds for errors annotated by the error policy as well as for raw OS errors.

    >>> is_not_found(FileNotFoundError(errno.ENOENT, "No such file or directory", "foo"))
    True

    >>> is_not_found(PermissionError(errno.EACCES, "Permission denied", "foo"))
    False

    :param error: The error to check (None is never a not-found error)
    :returns: True if the error is a not-found condition, False otherwise
    """
    if error is None:
        return False

    if isinstance(error, FileNotFoundError):
        return True

    return isinstance(error, OSError) and error.errno == errno.ENOENT
