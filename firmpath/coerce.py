"""Conversion of the value shapes accepted at the edges of the API.

Three closed sets of inputs are accepted:

* path inputs: ``str`` or ``os.PathLike[str]`` (which includes :py:class:`firmpath.Path`)
* join segments: a path input, or an ``int`` rendered as decimal text
* write payloads: ``str`` (UTF-8 encoded), a bytes-like object, or a readable binary stream

Everything else is rejected with a typed error rather than being stringified.
"""

import io
import os
from typing import BinaryIO, Protocol, runtime_checkable

from .errors import UnsupportedDataError, UnsupportedTypeError

PathInput = str | os.PathLike[str]
Segment = str | os.PathLike[str] | int


@runtime_checkable
class Readable(Protocol):
    """A protocol class for binary streams that can be copied into a file."""

    def read(self, size: int = -1, /) -> bytes: ...


def path_text(value: object) -> str:
    """Return the text of a path input, verbatim.

    :param value: A str or os.PathLike[str]
    :returns: The path as a string
    :raises UnsupportedTypeError: If the value is not a supported path input
    """
    if isinstance(value, str):
        return value

    if isinstance(value, os.PathLike):
        text = os.fspath(value)
        if isinstance(text, str):
            return text

    raise UnsupportedTypeError(value, expected="str or os.PathLike[str]")


def segment_text(value: object) -> str:
    """Return the text of a join segment.

    >>> segment_text(12)
    '12'

    :param value: A str, os.PathLike[str] or int
    :returns: The segment as a string
    :raises UnsupportedTypeError: If the value is not a supported segment (bools are rejected, too)
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)

    try:
        return path_text(value)
    except UnsupportedTypeError:
        raise UnsupportedTypeError(value, expected="str, os.PathLike[str] or int") from None


def payload_bytes(data: object) -> bytes | BinaryIO:
    """Normalize a write payload.

    :param data: The payload to write
    :returns: The encoded bytes, or the stream itself for stream payloads
    :raises UnsupportedDataError: If the payload has no defined encoding
    """
    if isinstance(data, str):
        return data.encode("utf-8")

    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)

    if isinstance(data, io.TextIOBase):
        # text streams would need an encoding decision; callers should pass .read() instead
        raise UnsupportedDataError(data)

    if isinstance(data, Readable):
        return data  # type: ignore[return-value]

    raise UnsupportedDataError(data)
