#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tex2md/utils/io_utils.py
"""I/O utilities for handling input and output destinations.

The conversion core never touches files; these helpers serve the renderer's
``render`` method and the command-line interface.

"""

from __future__ import annotations

import io
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from tex2md.exceptions import FileError

TextOutput = Union[str, Path, IO[bytes], IO[str]]


def write_text(content: str, output: TextOutput) -> None:
    """Write text to a path or file-like object as UTF-8.

    Parameters
    ----------
    content : str
        Text to write
    output : str, Path, IO[bytes] or IO[str]
        Output destination. Paths are written with UTF-8 encoding; binary
        streams receive UTF-8 bytes; text streams receive the string.

    Raises
    ------
    FileError
        If a path cannot be written
    TypeError
        If ``output`` is not a path or writable stream

    Examples
    --------
        >>> buffer = StringIO()
        >>> write_text("**bold**", buffer)
        >>> buffer.getvalue()
        '**bold**'

    """
    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileError(
                f"Could not write output file: {output_path}", file_path=str(output_path), original_error=e
            ) from e
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    if isinstance(output, BytesIO):
        is_binary_mode = True
    elif isinstance(output, StringIO):
        is_binary_mode = False
    elif isinstance(output, io.TextIOBase):
        is_binary_mode = False
    elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        is_binary_mode = True
    else:
        mode = getattr(output, "mode", "")
        is_binary_mode = isinstance(mode, str) and "b" in mode

    if is_binary_mode:
        cast(IO[bytes], output).write(content.encode("utf-8"))
    else:
        cast(IO[str], output).write(content)


def read_text(path: Union[str, Path]) -> str:
    """Read a UTF-8 text file.

    Parameters
    ----------
    path : str or Path
        File to read

    Returns
    -------
    str
        File contents

    Raises
    ------
    FileError
        If the file does not exist, cannot be read, or is not valid UTF-8

    """
    input_path = Path(path)
    try:
        return input_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FileError(
            f"Input file not found: {input_path}", file_path=str(input_path), original_error=e
        ) from e
    except UnicodeDecodeError as e:
        raise FileError(
            f"Input file is not valid UTF-8: {input_path}", file_path=str(input_path), original_error=e
        ) from e
    except OSError as e:
        raise FileError(
            f"Could not read input file: {input_path}", file_path=str(input_path), original_error=e
        ) from e


__all__ = ["read_text", "write_text"]
