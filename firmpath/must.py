"""The convenience form of every fallible operation.

``path.must.<operation>(...)`` calls ``path.<operation>(...)``. If the operation raises, the error is handed to the
bound policy's ``on_failure`` hook instead of propagating. The default hook terminates the process; a hook that
returns makes the convenience form return the operation's zero value.

>>> Path("config.toml").must.read_all()      # exits the process if the file cannot be read
b'...'
"""

from collections.abc import Callable
from functools import wraps
from typing import Any, Generic, TypeVar

from .errors import PathError
from .policy import access_error_handler, get_policy

_F = TypeVar("_F", bound=Callable[..., Any])
_P = TypeVar("_P")

# operation name -> zero value, or a factory taking the receiving path
_ZERO_VALUES: dict[str, Any] = {}


def fallible(zero: Any) -> Callable[[_F], _F]:
    """Mark a method as a fallible operation with a convenience form that returns `zero` on handled failure.

    The method is also wrapped with :py:func:`access_error_handler`, so its errors are annotated by the policy.

    :param zero: The value returned by the convenience form; if callable, it is called with the receiving path
    :returns: A decorator registering the method
    """

    def decorator(func: _F) -> _F:
        _ZERO_VALUES[func.__name__] = zero
        return access_error_handler(func)  # type: ignore[return-value]

    return decorator


def zero_value(operation: str, receiver: Any) -> Any:
    """Return the zero value of the named operation."""
    zero = _ZERO_VALUES[operation]
    return zero(receiver) if callable(zero) else zero


class Must(Generic[_P]):
    """Adapter exposing the convenience form of each fallible operation of a path."""

    __slots__ = ("_path",)

    def __init__(self, path: _P) -> None:
        self._path = path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._path!r})"

    def __dir__(self) -> list[str]:
        return sorted(_ZERO_VALUES)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name not in _ZERO_VALUES:
            raise AttributeError(f"{type(self._path).__name__}.{name} is not a fallible operation")

        operation = getattr(self._path, name)
        receiver = self._path

        @wraps(operation)
        def convenience(*args: Any, **kwargs: Any) -> Any:
            try:
                return operation(*args, **kwargs)
            except (OSError, PathError) as e:
                get_policy().on_failure(e)

            return zero_value(name, receiver)

        return convenience
