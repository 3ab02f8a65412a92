"""
Decoded SNSS entities.

All entities are frozen dataclasses built by one decode pass. Ownership is
strictly top-down (file -> commands -> tab -> state -> entries) with no back
references.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from core.enums import ContentKind, DecodeStatus, StateLayout

# Commands whose payload carries a Tab record (tab restore and session files)
TAB_COMMAND_IDS = frozenset({1, 6})

SUPPORTED_STATE_VERSIONS = frozenset({27, 28})


@dataclass(frozen=True)
class StateEntry:
    """One navigation record from a version 27/28 TabState entry list."""
    value_a: str = ""
    value_b: str = ""
    value_c: str = ""
    value_d: bytes = b""
    value_e: Tuple[str, ...] = ()
    value_f: int = 0
    value_g: bytes = b""
    value_h: int = 0
    value_i: int = 0
    value_j: bytes = b""
    value_k: bytes = b""
    value_l: str = ""  # layout version 28 only


@dataclass(frozen=True)
class TabState:
    """
    Back-forward navigation state embedded in a Tab.

    ``layout`` is the discriminant: ``ENTRIES`` populates ``entries``,
    ``OPAQUE`` keeps the payload from offset 8 onward in ``opaque``.
    ``degraded`` is set when a recognised layout could not be walked.
    """
    version: int = 0
    layout: StateLayout = StateLayout.OPAQUE
    entries: Tuple[StateEntry, ...] = ()
    opaque: bytes = b""
    degraded: bool = False

    @property
    def has_entries(self) -> bool:
        return self.layout == StateLayout.ENTRIES


@dataclass(frozen=True)
class Tab:
    """One browsing-history slot decoded from command 1 or 6."""
    id: int = 0
    index: int = 0
    url: str = ""
    title: str = ""
    state: TabState = TabState()
    transition_type: int = 0
    has_post_data: int = 0
    referrer_url: str = ""
    referrer_policy: int = 0
    original_request_url: str = ""
    user_agent_overridden: int = 0


@dataclass(frozen=True)
class RawContent:
    """Command payload kept verbatim (after the id byte)."""
    data: bytes = b""
    degraded: bool = False  # Tab command whose record could not be decoded


CommandContent = Union[Tab, RawContent]


@dataclass(frozen=True)
class Command:
    """One length-framed SNSS record."""
    id: int
    content: CommandContent

    @property
    def kind(self) -> ContentKind:
        return ContentKind.TAB if isinstance(self.content, Tab) else ContentKind.RAW

    @property
    def tab(self) -> Tab | None:
        return self.content if isinstance(self.content, Tab) else None


@dataclass(frozen=True)
class SessionFile:
    """Result of decoding one SNSS byte source."""
    source_name: str = ""
    version: int = 0
    commands: Tuple[Command, ...] = ()
    status: DecodeStatus = DecodeStatus.NOT_SNSS

    @property
    def is_snss(self) -> bool:
        return self.status != DecodeStatus.NOT_SNSS

    @property
    def truncated(self) -> bool:
        return self.status in (DecodeStatus.TRUNCATED, DecodeStatus.HEADER_TRUNCATED)

    @property
    def tabs(self) -> Tuple[Tab, ...]:
        return tuple(command.content for command in self.commands if isinstance(command.content, Tab))
