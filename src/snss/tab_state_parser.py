"""
TabState decoder.

Header (offsets relative to the state block):
- 0: pickle payload size (ignored)
- 4: version (int32)
- 12, 20, 28, 36: four int64 shape markers

Versions 27 and 28 with markers ``(0x18, 0x10, 0x10, 0x08)`` carry a list of
navigation entries starting at offset 44. Anything else is kept as opaque
bytes from offset 8.

Entry layout (offsets relative to the entry start ``e``). Optional fields are
32-bit relative pointers; 0 means absent. A present pointer is adjusted by
the offset of its own slot to locate the field header:

====  ======  ==========================================================
slot  field   resolution
====  ======  ==========================================================
8     A       UTF-16: count at header+20, text at header+24
16    B       as A
24    C       as A
32    D       bytes: count at header, data copied from header
40    E       list: count at header+4, sub-pointer i at header+8*(i+1)
              (adjusted by 8*(i+1)), each resolved like A
48    F       int64, direct
56    G       bytes from header up to J's header
64    H       int64, direct
72    I       int64, direct
80    J       bytes: count at header, data copied from header
88    K       as J
96    L       version 28: ASCII count at header+4, text at header+8
====  ======  ==========================================================

The next entry starts at ``L header + align_up_8(count + 8)`` when L is
present, else at ``K header + K count``.
"""

from __future__ import annotations

from typing import List

from core.enums import StateLayout
from core.logging import get_logger

from .byte_view import ByteView, align_up_8
from .exceptions import MalformedRecordError, OutOfBoundsError
from .models import SUPPORTED_STATE_VERSIONS, StateEntry, TabState

LOGGER = get_logger("snss.tab_state_parser")

STATE_VERSION_OFFSET = 4
OPAQUE_OFFSET = 8
MARKER_OFFSETS = (12, 20, 28, 36)
EXPECTED_MARKERS = (0x18, 0x10, 0x10, 0x08)
ENTRIES_OFFSET = 44

SLOT_A = 8
SLOT_B = 16
SLOT_C = 24
SLOT_D = 32
SLOT_E = 40
SLOT_F = 48
SLOT_G = 56
SLOT_H = 64
SLOT_I = 72
SLOT_J = 80
SLOT_K = 88
SLOT_L = 96

STRING16_COUNT_SKIP = 20
STRING16_TEXT_SKIP = 24
LIST_COUNT_SKIP = 4
LIST_STRIDE = 8
ASCII_COUNT_SKIP = 4
ASCII_TEXT_SKIP = 8


def read_markers(view: ByteView) -> tuple[int, ...]:
    return tuple(view.read_i64(offset) for offset in MARKER_OFFSETS)


def has_known_signature(view: ByteView, version: int) -> bool:
    """Return True when ``version`` and the shape markers match the 27/28 layout."""
    if version not in SUPPORTED_STATE_VERSIONS:
        return False
    if not view.has(0, ENTRIES_OFFSET):
        return False
    return read_markers(view) == EXPECTED_MARKERS


def _string16_at(view: ByteView, header: int) -> str:
    count = view.read_i32(header + STRING16_COUNT_SKIP)
    return view.read_utf16(header + STRING16_TEXT_SKIP, count)


def _optional_string16(view: ByteView, e: int, slot: int) -> str:
    pointer = view.read_i32(e + slot)
    if pointer == 0:
        return ""
    return _string16_at(view, e + pointer + slot)


def _counted_blob(view: ByteView, header: int) -> bytes:
    # The count word itself is part of the copied range
    count = view.read_i32(header)
    return view.read_bytes(header, count)


def _string16_list(view: ByteView, header: int) -> tuple[str, ...]:
    count = view.read_i32(header + LIST_COUNT_SKIP)
    values: List[str] = []
    for i in range(count):
        slot = LIST_STRIDE * (i + 1)
        item_header = header + view.read_i32(header + slot) + slot
        values.append(_string16_at(view, item_header))
    return tuple(values)


def _parse_entry(view: ByteView, e: int, version: int) -> tuple[StateEntry, int]:
    """Decode one entry at ``e``; return it with the distance to the next entry."""
    header_e = view.read_i32(e + SLOT_E) + SLOT_E
    value_f = view.read_i64(e + SLOT_F)
    pointer_g = view.read_i32(e + SLOT_G)
    value_h = view.read_i64(e + SLOT_H)
    value_i = view.read_i64(e + SLOT_I)
    header_j = view.read_i32(e + SLOT_J) + SLOT_J
    header_k = view.read_i32(e + SLOT_K) + SLOT_K
    pointer_l = view.read_i32(e + SLOT_L) if version == 28 else 0

    value_d = b""
    pointer_d = view.read_i32(e + SLOT_D)
    if pointer_d != 0:
        value_d = _counted_blob(view, e + pointer_d + SLOT_D)

    value_g = b""
    if pointer_g != 0:
        header_g = pointer_g + SLOT_G
        value_g = view.read_bytes(e + header_g, header_j - header_g)

    length_k = view.read_i32(e + header_k)
    value_k = view.read_bytes(e + header_k, length_k)

    if pointer_l != 0:
        header_l = pointer_l + SLOT_L
        length_l = view.read_i32(e + header_l + ASCII_COUNT_SKIP)
        value_l = view.read_ascii(e + header_l + ASCII_TEXT_SKIP, length_l)
        advance = header_l + align_up_8(length_l + ASCII_TEXT_SKIP)
    else:
        value_l = ""
        advance = header_k + length_k

    entry = StateEntry(
        value_a=_optional_string16(view, e, SLOT_A),
        value_b=_optional_string16(view, e, SLOT_B),
        value_c=_optional_string16(view, e, SLOT_C),
        value_d=value_d,
        value_e=_string16_list(view, e + header_e),
        value_f=value_f,
        value_g=value_g,
        value_h=value_h,
        value_i=value_i,
        value_j=_counted_blob(view, e + header_j),
        value_k=value_k,
        value_l=value_l,
    )
    return entry, advance


def parse_entries(view: ByteView, version: int) -> tuple[StateEntry, ...]:
    """
    Walk the entry list from offset 44 until the end of the state block.

    Raises:
        OutOfBoundsError: a pointer or count leads outside the block.
        MalformedRecordError: an entry would not advance the walk.
    """
    entries: List[StateEntry] = []
    offset = ENTRIES_OFFSET
    while offset < len(view):
        entry, advance = _parse_entry(view, offset, version)
        if advance <= 0:
            raise MalformedRecordError(
                f"State entry {len(entries)} at offset {offset} advances by {advance}"
            )
        entries.append(entry)
        offset += advance
    return tuple(entries)


def parse_tab_state(data: bytes) -> TabState:
    """
    Decode a TabState block. Never raises.

    Unrecognised versions or markers give the opaque layout. A recognised
    layout whose entry walk goes out of bounds is degraded to opaque too.
    """
    view = ByteView(data)
    if not view.has(STATE_VERSION_OFFSET, 4):
        LOGGER.debug("TabState block of %d bytes has no version header", len(view))
        return TabState(version=0, layout=StateLayout.OPAQUE, opaque=view.data, degraded=True)

    version = view.read_i32(STATE_VERSION_OFFSET)
    opaque = view.tail(OPAQUE_OFFSET)

    if not has_known_signature(view, version):
        return TabState(version=version, layout=StateLayout.OPAQUE, opaque=opaque)

    try:
        entries = parse_entries(view, version)
    except (OutOfBoundsError, MalformedRecordError) as exc:
        LOGGER.warning("TabState version %d kept as raw bytes: %s", version, exc)
        return TabState(version=version, layout=StateLayout.OPAQUE, opaque=opaque, degraded=True)

    return TabState(version=version, layout=StateLayout.ENTRIES, entries=entries)
