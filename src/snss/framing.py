"""
SNSS file header and command framing.

File layout:
- 4 bytes: magic "SNSS" (0x53534E53 read little-endian)
- 4 bytes: version (int32)
- repeated: size (uint16) followed by ``size`` payload bytes, to end of data

The first payload byte is the command id; framing does not interpret it.
"""

from __future__ import annotations

from typing import Iterator, Optional, Tuple

from core.logging import get_logger

from .byte_view import ByteView
from .exceptions import TruncatedStreamError

LOGGER = get_logger("snss.framing")

SNSS_MAGIC = b"SNSS"
SNSS_SIGNATURE = 0x53534E53
HEADER_SIZE = 8
SIZE_PREFIX = 2


def has_magic(data: bytes) -> bool:
    """Return True if ``data`` starts with the SNSS magic."""
    return data[:4] == SNSS_MAGIC


def read_header(view: ByteView) -> Optional[int]:
    """
    Read the file header.

    Returns:
        The file version, or None when the magic does not match.

    Raises:
        TruncatedStreamError: magic present but the version word is incomplete.
    """
    if not has_magic(view.data):
        return None
    if not view.has(4, 4):
        raise TruncatedStreamError(4, 4, len(view) - 4)
    return view.read_i32(4)


def iter_command_payloads(view: ByteView, start: int = HEADER_SIZE) -> Iterator[Tuple[int, bytes]]:
    """
    Walk length-framed command records.

    Yields ``(offset, payload)`` where ``offset`` is the position of the size
    prefix. Stops cleanly at the exact end of data. A record declaring size 0
    has no command id; it is skipped and the walk continues after its prefix.

    Raises:
        TruncatedStreamError: a size prefix or payload runs past the end.
    """
    pos = start
    end = len(view)

    while pos < end:
        if not view.has(pos, SIZE_PREFIX):
            raise TruncatedStreamError(pos, SIZE_PREFIX, end - pos)
        command_size = view.read_u16(pos)

        if command_size == 0:
            LOGGER.warning("Skipping empty command record at offset %d", pos)
            pos += SIZE_PREFIX
            continue

        payload_start = pos + SIZE_PREFIX
        if not view.has(payload_start, command_size):
            raise TruncatedStreamError(pos, command_size, end - payload_start)

        yield pos, view.read_bytes(payload_start, command_size)
        pos = payload_start + command_size
