"""
Binary file detection.

A file is treated as binary when a zero byte appears in its first 512 bytes.
This is a heuristic: binary formats without an early zero byte are classified
as text and will go through content substitution.
"""

from pathlib import Path
from typing import Union

SNIFF_SIZE = 512


def is_binary_content(data: bytes) -> bool:
    """Return True if the leading bytes of ``data`` contain a zero byte."""
    return b'\x00' in data[:SNIFF_SIZE]


def is_binary_file(path: Union[str, Path]) -> bool:
    """
    Classify a file as binary by sniffing its first bytes.

    Unreadable files (missing, permission denied, a directory) are reported
    as not binary; classification never raises.
    """
    try:
        with open(path, 'rb') as f:
            head = f.read(SNIFF_SIZE)
    except OSError:
        return False
    return is_binary_content(head)
