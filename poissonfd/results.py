"""Binary dumps of doubles and the tabular results file."""

from __future__ import annotations

import os
import re
from array import array
from pathlib import Path

_DOUBLE_SIZE = array("d").itemsize
_MAX_NAME = 63
_NAME_PATTERN = re.compile(r"[^ ]{1,%d}" % _MAX_NAME)


def read_doubles(path) -> list[float]:
    """Read native-endian doubles from a binary file, ignoring a trailing partial value."""
    data = Path(path).read_bytes()
    usable = len(data) - len(data) % _DOUBLE_SIZE
    values = array("d")
    values.frombytes(data[:usable])
    return values.tolist()


def append_doubles(path, values) -> None:
    """Append ``values`` as native-endian doubles to a binary file."""
    payload = array("d", [float(value) for value in values])
    with open(path, "ab") as handle:
        handle.write(payload.tobytes())


def convert_data_to_text(data_path, text_path) -> None:
    """Write each double of a binary file on its own line with six decimals."""
    values = read_doubles(data_path)
    with open(text_path, "w", encoding="utf-8") as handle:
        handle.writelines(f"{value:f}\n" for value in values)


def _column_names(header: str, count: int) -> list[str]:
    names = _NAME_PATTERN.findall(header)
    if header.startswith(" "):
        names.insert(0, "")
    return names[:count]


def append_results(results, header, path) -> None:
    """Append one line of results to a text table.

    When the file is empty, a header line is written first, made of the
    space-separated names of ``header`` (at most one per result). Each field
    is right-aligned on 20 characters; values have eight decimals.
    """
    values = [float(value) for value in results]
    with open(path, "a", encoding="utf-8") as handle:
        handle.seek(0, os.SEEK_END)
        if handle.tell() == 0:
            names = _column_names(header, len(values))
            handle.write("".join(f"{name:>20}" for name in names) + "\n")
        handle.write("".join(f"{value:20.8f}" for value in values) + "\n")