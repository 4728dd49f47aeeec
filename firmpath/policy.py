"""The error policy shared by every fallible operation.

An :py:class:`ErrorPolicy` bundles the two hooks that decide how failures are reported

* ``context(error, path, operation)`` annotates every error before it leaves a fallible operation
* ``on_failure(error)`` is called by the convenience (``Path.must``) form when the operation failed

together with the default permissions used when creating files and directories.

One policy is bound process-wide. Configure it once at startup, before any concurrent use:

>>> configure(file_mode=0o644)

Tests (and other single-threaded scopes) can swap it temporarily; the previous policy is restored on exit:

>>> with override(on_failure=failures.append):
...     Path("does-not-exist").must.size()
0
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager, suppress
from dataclasses import dataclass, replace
from functools import wraps
import logging
import os
import sys
from typing import Any, ParamSpec, TypeVar

from .errors import PathError

logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=BaseException)
_R = TypeVar("_R")
_S = ParamSpec("_S")

DEFAULT_FILE_MODE = 0o600
DEFAULT_DIR_MODE = 0o700


def annotate_error(error: _E | None, path: str, operation: str) -> _E | None:
    """Attach the path and failed operation to an error, keeping its class and errno.

    >>> annotate_error(FileNotFoundError(2, "No such file or directory", "foo"), "foo", "size")
    FileNotFoundError(2, 'No such file or directory. Failed during size')

    Errors raised by firmpath itself already describe the failure and are returned unchanged.

    :param error: The error to annotate (None is passed through)
    :param path: The path the operation was performed on
    :param operation: The name of the failed operation
    :returns: The annotated error
    """
    if error is None:
        return None

    if not isinstance(error, OSError):
        return error

    try:
        if error.errno is not None:
            reason = error.strerror or str(error)
            return type(error)(error.errno, f"{reason}. Failed during {operation}", error.filename, None, error.filename2)

        return type(error)(f"Failed to access {path} during {operation}. Reason: {error}")
    except TypeError:
        # OSError subclasses with an incompatible constructor
        return error


def exit_on_failure(error: BaseException) -> None:
    """Log the error with its traceback, then terminate the process with exit status 1."""
    logger.error("Unrecoverable filesystem error: %s", error, exc_info=error)
    sys.exit(1)


@dataclass(frozen=True)
class ErrorPolicy:
    """The process-wide failure reporting configuration.

    :param context: Annotates an error before it is raised from a fallible operation. It must return None for None
        and must keep the error's class, so that e.g. ``isinstance(error, FileNotFoundError)`` still holds.
    :param on_failure: Invoked by the convenience form with the error of the failed operation. The default logs and
        exits; if a replacement returns, the convenience form returns the operation's zero value.
    :param file_mode: The permission bits used when creating files.
    :param dir_mode: The permission bits used when creating directories.
    """

    context: Callable[[Any, str, str], Any] = annotate_error
    on_failure: Callable[[BaseException], None] = exit_on_failure
    file_mode: int = DEFAULT_FILE_MODE
    dir_mode: int = DEFAULT_DIR_MODE


_policy = ErrorPolicy()


def get_policy() -> ErrorPolicy:
    """Return the currently bound error policy."""
    return _policy


def set_policy(policy: ErrorPolicy) -> ErrorPolicy:
    """Bind a new error policy process-wide.

    :param policy: The policy to bind
    :returns: The previously bound policy
    """
    global _policy

    previous, _policy = _policy, policy
    logger.debug("Error policy replaced: %r", policy)
    return previous


def configure(**changes: Any) -> ErrorPolicy:
    """Replace individual fields of the bound policy, e.g. `configure(dir_mode=0o755)`.

    :param changes: The ErrorPolicy fields to replace
    :returns: The newly bound policy
    :raises TypeError: If a change names a field that ErrorPolicy does not have
    """
    policy = replace(_policy, **changes)
    set_policy(policy)
    return policy


@contextmanager
def override(policy: ErrorPolicy | None = None, **changes: Any) -> Iterator[ErrorPolicy]:
    """Bind a policy for the duration of a `with` block, restoring the previous one afterwards.

    >>> with override(on_failure=lambda e: None):
    ...     assert Path("does-not-exist").must.exists() is False

    :param policy: A complete policy to bind; if omitted, the bound policy is used as the base
    :param changes: ErrorPolicy fields to replace on top of the base policy
    :yields: The policy in effect inside the block
    """
    base = policy if policy is not None else _policy
    previous = set_policy(replace(base, **changes))

    try:
        yield _policy
    finally:
        set_policy(previous)


def _receiver_text(receiver: Any) -> str:
    """Return the path an operation was performed on; class-level operations act on the working directory."""
    return os.fspath(receiver) if isinstance(receiver, os.PathLike) else os.curdir


def access_error_handler(func: Callable[_S, _R]) -> Callable[_S, _R]:
    """Wrap methods that access paths so that errors pass through the policy's context function exactly once."""

    @wraps(func)
    def wrapper(*args: _S.args, **kwargs: _S.kwargs) -> _R:
        try:
            return func(*args, **kwargs)
        except (OSError, PathError) as e:
            if getattr(e, "failed_operation", None) is not None:
                # already annotated by a nested fallible operation
                raise

            annotated = _policy.context(e, _receiver_text(args[0]), func.__name__)
            if annotated is None or annotated is e:
                with suppress(AttributeError):
                    e.failed_operation = func.__name__  # type: ignore[union-attr]
                raise

            with suppress(AttributeError):
                annotated.failed_operation = func.__name__
            raise annotated from e

    return wrapper
