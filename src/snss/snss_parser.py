"""
SNSS Session File Decoder

Decodes the SNSS format Chromium-based browsers use for the "Current Session",
"Current Tabs", "Last Session" and "Last Tabs" files.

Decoding is best effort:
- a file without the "SNSS" magic yields ``DecodeStatus.NOT_SNSS`` (version 0,
  no commands);
- a file whose magic is followed by an incomplete version word yields
  ``DecodeStatus.HEADER_TRUNCATED``;
- a record whose size prefix runs past the end stops decoding and yields
  ``DecodeStatus.TRUNCATED`` with every command decoded so far;
- a Tab command (id 1 or 6) whose record cannot be decoded keeps its raw
  payload, flagged ``degraded``.

None of these raise. Only an unreadable path (``OSError``) propagates.

References:
- https://digitalinvestigation.wordpress.com/2012/09/03/chrome-session-and-tabs-files-and-the-puzzle-of-the-pickle/
"""

from __future__ import annotations

import io
import os
from pathlib import Path
from typing import BinaryIO, List, Union

from core.enums import DecodeStatus
from core.logging import get_logger

from .byte_view import ByteView
from .exceptions import MalformedRecordError, OutOfBoundsError, TruncatedStreamError
from .framing import HEADER_SIZE, iter_command_payloads, read_header
from .models import TAB_COMMAND_IDS, Command, RawContent, SessionFile
from .tab_parser import parse_tab

LOGGER = get_logger("snss.snss_parser")

Source = Union[bytes, bytearray, memoryview, str, os.PathLike, BinaryIO]


def classify_command(payload: bytes) -> Command:
    """
    Build a Command from one non-empty framed payload.

    The first byte is the command id. Ids 1 and 6 are decoded as a Tab; any
    decode failure keeps the remaining bytes as degraded raw content.
    """
    if not payload:
        raise ValueError("Command payload must contain at least the id byte")

    command_id = payload[0]
    content = bytes(payload[1:])

    if command_id in TAB_COMMAND_IDS:
        try:
            return Command(id=command_id, content=parse_tab(content))
        except (OutOfBoundsError, MalformedRecordError) as exc:
            LOGGER.warning("Command %d: Tab record kept as raw bytes: %s", command_id, exc)
            return Command(id=command_id, content=RawContent(content, degraded=True))

    return Command(id=command_id, content=RawContent(content))


def decode_data(data: bytes, source_name: str = "") -> SessionFile:
    """
    Decode SNSS data from bytes.

    Args:
        data: Raw file content
        source_name: Name shown when rendering (usually the file path)

    Returns:
        SessionFile; see the module docstring for the status values.
    """
    view = ByteView(data)

    try:
        version = read_header(view)
    except TruncatedStreamError as exc:
        LOGGER.warning("%s: incomplete SNSS header: %s", source_name or "<bytes>", exc)
        return SessionFile(source_name=source_name, status=DecodeStatus.HEADER_TRUNCATED)

    if version is None:
        LOGGER.debug("%s: not an SNSS file", source_name or "<bytes>")
        return SessionFile(source_name=source_name, status=DecodeStatus.NOT_SNSS)

    commands: List[Command] = []
    status = DecodeStatus.COMPLETE
    try:
        for _offset, payload in iter_command_payloads(view, HEADER_SIZE):
            commands.append(classify_command(payload))
    except TruncatedStreamError as exc:
        LOGGER.warning(
            "%s: stream truncated after %d commands: %s",
            source_name or "<bytes>", len(commands), exc,
        )
        status = DecodeStatus.TRUNCATED

    LOGGER.info(
        "%s: SNSS version %d, %d commands (%s)",
        source_name or "<bytes>", version, len(commands), status,
    )
    return SessionFile(
        source_name=source_name,
        version=version,
        commands=tuple(commands),
        status=status,
    )


def decode_file(file_path: Union[str, os.PathLike], source_name: str = "") -> SessionFile:
    """
    Decode an SNSS file from disk.

    The file handle is closed before returning, on every path. ``source_name``
    defaults to the path.

    Raises:
        OSError: the file cannot be opened or read.
    """
    path = Path(file_path)
    with path.open("rb") as handle:
        data = handle.read()
    return decode_data(data, source_name=source_name or str(path))


def decode(source: Source, source_name: str = "") -> SessionFile:
    """
    Decode an SNSS byte source.

    ``source`` may be bytes-like, a filesystem path, or a readable binary
    stream. Streams are read to the end and closed, whatever the outcome.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return decode_data(bytes(source), source_name)
    if isinstance(source, (str, os.PathLike)):
        return decode_file(source, source_name)
    if isinstance(source, io.IOBase) or hasattr(source, "read"):
        name = source_name or str(getattr(source, "name", ""))
        try:
            data = source.read()
        finally:
            source.close()
        return decode_data(data, name)
    raise TypeError(f"Unsupported SNSS source type: {type(source).__name__}")
