"""Byte builders for SNSS files, Tab records and TabState blocks."""
from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Optional, Sequence

import pytest

SNSS_MAGIC = b"SNSS"
STATE_MARKERS = (0x18, 0x10, 0x10, 0x08)
ENTRY_FIXED_SIZE = 104


def i32(value: int) -> bytes:
    return struct.pack("<i", value)


def u32(value: int) -> bytes:
    return struct.pack("<I", value)


def i64(value: int) -> bytes:
    return struct.pack("<q", value)


def pad4(data: bytes) -> bytes:
    return data + b"\x00" * ((4 - len(data) % 4) % 4)


def pickle_ascii(value: str) -> bytes:
    """4-byte byte count + ASCII, padded to 4 bytes."""
    encoded = value.encode("ascii")
    return i32(len(encoded)) + pad4(encoded)


def pickle_utf16(value: str) -> bytes:
    """4-byte char count + UTF-16LE, padded to 4 bytes."""
    encoded = value.encode("utf-16-le")
    return i32(len(encoded) // 2) + pad4(encoded)


def pickle_blob(data: bytes) -> bytes:
    return i32(len(data)) + pad4(data)


def frame(command_id: int, content: bytes) -> bytes:
    """Size prefix + id byte + content."""
    return struct.pack("<HB", len(content) + 1, command_id) + content


def snss_file(version: int = 1, commands: Sequence[bytes] = ()) -> bytes:
    return SNSS_MAGIC + i32(version) + b"".join(commands)


def tab_payload(
    tab_id: int = 7,
    index: int = 0,
    url: str = "http://a",
    title: str = "Title",
    state: bytes = b"",
    transition_type: int = 0,
    has_post_data: int = 0,
    referrer_url: str = "",
    referrer_policy: int = 0,
    original_request_url: str = "",
    user_agent_overridden: int = 0,
) -> bytes:
    """Tab record as stored after the command id byte."""
    body = i32(tab_id) + i32(index) + pickle_ascii(url) + pickle_utf16(title) + pickle_blob(state)
    if state:
        body += (
            u32(transition_type)
            + i32(has_post_data)
            + pickle_ascii(referrer_url)
            + i32(referrer_policy)
            + pickle_ascii(original_request_url)
            + i32(user_agent_overridden)
        )
    return i32(len(body)) + body


@dataclass
class EntrySpec:
    """Field values for one version 27/28 state entry."""
    value_a: str = ""
    value_b: str = ""
    value_c: str = ""
    value_d_body: Optional[bytes] = None
    value_e: Sequence[str] = ()
    value_f: int = 0
    value_g: bytes = b""
    value_h: int = 0
    value_i: int = 0
    value_j_body: Optional[bytes] = None
    value_k_body: bytes = b""
    value_l: Optional[str] = None

    @property
    def value_d(self) -> bytes:
        return b"" if self.value_d_body is None else i32(len(self.value_d_body) + 4) + self.value_d_body

    @property
    def value_j(self) -> bytes:
        return b"" if self.value_j_body is None else i32(len(self.value_j_body) + 4) + self.value_j_body

    @property
    def value_k(self) -> bytes:
        return i32(len(self.value_k_body) + 4) + self.value_k_body


def _align8(buf: bytearray) -> None:
    buf.extend(b"\x00" * ((8 - len(buf) % 8) % 8))


def _string16_header(text: str) -> bytes:
    encoded = text.encode("utf-16-le")
    return b"\xEE" * 20 + i32(len(encoded) // 2) + encoded


def state_entry(spec: EntrySpec, version: int = 27) -> bytes:
    """Serialize one entry; its length equals the distance the decoder advances."""
    buf = bytearray(ENTRY_FIXED_SIZE)

    def set_i32(slot: int, value: int) -> None:
        struct.pack_into("<i", buf, slot, value)

    for slot, text in ((8, spec.value_a), (16, spec.value_b), (24, spec.value_c)):
        if text:
            _align8(buf)
            set_i32(slot, len(buf) - slot)
            buf.extend(_string16_header(text))

    if spec.value_d_body is not None:
        _align8(buf)
        set_i32(32, len(buf) - 32)
        buf.extend(spec.value_d)

    if spec.value_e:
        _align8(buf)
        header = len(buf)
        set_i32(40, header - 40)
        count = len(spec.value_e)
        buf.extend(i32(0) + i32(count) + b"\x00" * (8 * count))
        for i, text in enumerate(spec.value_e):
            _align8(buf)
            slot = 8 * (i + 1)
            struct.pack_into("<i", buf, header + slot, len(buf) - header - slot)
            buf.extend(_string16_header(text))

    struct.pack_into("<q", buf, 48, spec.value_f)
    struct.pack_into("<q", buf, 64, spec.value_h)
    struct.pack_into("<q", buf, 72, spec.value_i)

    if spec.value_g:
        _align8(buf)
        set_i32(56, len(buf) - 56)
        buf.extend(spec.value_g)

    # J directly follows G: G spans up to J's header
    if spec.value_j_body is not None:
        set_i32(80, len(buf) - 80)
        buf.extend(spec.value_j)
    elif spec.value_g:
        set_i32(80, len(buf) - 80)
        buf.extend(i32(0))

    set_i32(88, len(buf) - 88)
    buf.extend(spec.value_k)

    if version == 28 and spec.value_l is not None:
        header_l = len(buf)
        set_i32(96, header_l - 96)
        encoded = spec.value_l.encode("ascii")
        buf.extend(i32(0) + i32(len(encoded)) + encoded)
        used = len(encoded) + 8
        buf.extend(b"\x00" * ((8 - used % 8) % 8))

    return bytes(buf)


def tab_state(
    version: int = 27,
    entries: Sequence[bytes] = (),
    markers: Sequence[int] = STATE_MARKERS,
    flags: int = 0,
) -> bytes:
    """TabState block: size, version, flags, four markers, entries."""
    body = i32(version) + i32(flags) + b"".join(i64(m) for m in markers) + b"".join(entries)
    return i32(len(body)) + body


@dataclass
class SampleSession:
    data: bytes
    entries: list = field(default_factory=list)


@pytest.fixture
def sample_entry_spec() -> EntrySpec:
    return EntrySpec(
        value_a="https://example.com/",
        value_b="target",
        value_c="",
        value_d_body=b"\x01\x02\x03\x04",
        value_e=("first", "second"),
        value_f=0x1122334455667788,
        value_g=b"\x0A\x0B\x0C\x0D\x0E\x0F\x10\x11",
        value_h=-1,
        value_i=42,
        value_j_body=b"\xCA\xFE",
        value_k_body=b"\xBE\xEF\x00\x01",
        value_l="text/html",
    )


@pytest.fixture
def sample_session(sample_entry_spec) -> SampleSession:
    """Valid file: one Tab command with a v28 state, one raw command."""
    state = tab_state(28, [state_entry(sample_entry_spec, 28), state_entry(EntrySpec(), 28)])
    payload = tab_payload(
        tab_id=3,
        index=1,
        url="https://example.com/",
        title="Example",
        state=state,
        transition_type=0x21000009,
        has_post_data=1,
        referrer_url="https://ref.example/",
        referrer_policy=2,
        original_request_url="https://example.com/start",
        user_agent_overridden=0,
    )
    data = snss_file(3, [frame(6, payload), frame(2, b"\xAA\xBB\xCC\xDD")])
    return SampleSession(data=data, entries=[sample_entry_spec, EntrySpec()])
