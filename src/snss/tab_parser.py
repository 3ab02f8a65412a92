"""
Tab record decoder (payload of commands 1 and 6, after the id byte).

Pickle layout, offsets relative to the payload start:
- 0: pickle payload size (ignored)
- 4: tab id (int32)
- 8: index in the tab's back-forward list (int32)
- 12: url length, 16: url (ASCII)
- title: char count, then UTF-16LE
- state: byte count, then the TabState block
- transition type (uint32), has-POST-data flag (int32)
- referrer url (ASCII), referrer policy (int32)
- original request url (ASCII), user-agent-overridden flag (int32)

Each variable-length field is a 4-byte count followed by its payload; the
next field starts at ``payload_start + align_up_4(payload_bytes)``.
"""

from __future__ import annotations

from .byte_view import ByteView, align_up_4
from .models import Tab
from .tab_state_parser import parse_tab_state

TAB_ID_OFFSET = 4
TAB_INDEX_OFFSET = 8
URL_LENGTH_OFFSET = 12


class _FieldReader:
    """Running cursor over a Tab payload."""

    def __init__(self, view: ByteView, pos: int):
        self.view = view
        self.pos = pos

    def scalar_i32(self) -> int:
        value = self.view.read_i32(self.pos)
        self.pos += 4
        return value

    def scalar_u32(self) -> int:
        value = self.view.read_u32(self.pos)
        self.pos += 4
        return value

    def _counted(self, unit: int) -> tuple[int, int]:
        count = self.view.read_i32(self.pos)
        start = self.pos + 4
        size = count * unit
        self.view.check(start, size)
        self.pos = start + align_up_4(size)
        return start, count

    def ascii(self) -> str:
        start, count = self._counted(1)
        return self.view.read_ascii(start, count)

    def utf16(self) -> str:
        start, count = self._counted(2)
        return self.view.read_utf16(start, count)

    def blob(self) -> bytes:
        count = self.view.read_i32(self.pos)
        start = self.pos + 4
        if count <= 0:
            self.pos = start
            return b""
        data = self.view.read_bytes(start, count)
        self.pos = start + align_up_4(count)
        return data


def parse_tab(payload: bytes) -> Tab:
    """
    Decode a Tab record.

    When the state block is empty (length <= 0) every field after it is
    left at its default instead of being read.

    Raises:
        OutOfBoundsError: a length or offset points outside the payload.
    """
    view = ByteView(payload)
    tab_id = view.read_i32(TAB_ID_OFFSET)
    index = view.read_i32(TAB_INDEX_OFFSET)

    reader = _FieldReader(view, URL_LENGTH_OFFSET)
    url = reader.ascii()
    title = reader.utf16()
    state_bytes = reader.blob()

    if not state_bytes:
        return Tab(id=tab_id, index=index, url=url, title=title)

    state = parse_tab_state(state_bytes)
    transition_type = reader.scalar_u32()
    has_post_data = reader.scalar_i32()
    referrer_url = reader.ascii()
    referrer_policy = reader.scalar_i32()
    original_request_url = reader.ascii()
    user_agent_overridden = reader.scalar_i32()

    return Tab(
        id=tab_id,
        index=index,
        url=url,
        title=title,
        state=state,
        transition_type=transition_type,
        has_post_data=has_post_data,
        referrer_url=referrer_url,
        referrer_policy=referrer_policy,
        original_request_url=original_request_url,
        user_agent_overridden=user_agent_overridden,
    )
