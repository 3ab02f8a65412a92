"""
Plain-text rendering of decoded SNSS entities.

``render`` dispatches on the entity type. Output is display text for the
viewer and is deterministic: the same entity always renders to the same
string. Nothing here performs I/O or logs.
"""

from __future__ import annotations

from functools import singledispatch
from typing import List

from core.enums import DecodeStatus

from . import transitions
from .models import Command, SessionFile, StateEntry, Tab, TabState

INDENT = "  "
UINT64_MASK = 0xFFFFFFFFFFFFFFFF


def hex_dump(data: bytes) -> str:
    """Space-separated uppercase two-digit hex, e.g. ``AA BB CC``."""
    return bytes(data).hex(" ").upper()


def _join(lines: List[str]) -> str:
    return "\n".join(lines) + "\n"


def _hex64(value: int) -> str:
    return f"0x{value & UINT64_MASK:016X}"


def _flag_line(value: int, off_text: str, on_text: str, label: str) -> str:
    if value == 0:
        return off_text
    if value == 1:
        return on_text
    return f"{label}: {value}"


@singledispatch
def render(entity) -> str:
    """Render a SessionFile, Command, Tab or TabState as text."""
    raise TypeError(f"Cannot render {type(entity).__name__}")


@render.register
def _render_session(session: SessionFile) -> str:
    lines = [f"File: {session.source_name}"]
    if not session.is_snss:
        lines.append("It is not a file with SNSS format.")
        return _join(lines)
    if session.status == DecodeStatus.HEADER_TRUNCATED:
        lines.append("Warning: the SNSS header is incomplete; no version or commands could be read.")
        return _join(lines)
    lines.append(f"Version: {session.version}")
    lines.append(f"Session commands: {len(session.commands)}")
    if session.truncated:
        lines.append("Warning: the file is truncated; only the commands before the damage were decoded.")
    return _join(lines)


@render.register
def _render_command(command: Command) -> str:
    lines = [f"Command id: {command.id}"]
    content = command.content
    if isinstance(content, Tab):
        return _join(lines) + render(content)
    if content.degraded:
        lines.append("Tab record could not be decoded; raw bytes follow.")
    lines.append(f"Content: {hex_dump(content.data)}")
    return _join(lines)


@render.register
def _render_tab(tab: Tab) -> str:
    lines = [
        f"Id: {tab.id}",
        f"Index: {tab.index}",
        f"URL: {tab.url}",
        f"Title: {tab.title}",
        f"Transition type: 0x{tab.transition_type & 0xFFFFFFFF:08X}",
    ]
    lines.extend(INDENT + line for line in transitions.describe(tab.transition_type))
    lines.append(_flag_line(
        tab.has_post_data,
        "The page has no POST data.",
        "The page has POST data.",
        "POST",
    ))
    lines.append(f"Referrer URL: {tab.referrer_url}")
    lines.append(f"Referrer's Policy: {tab.referrer_policy}")
    lines.append(f"Original Request URL: {tab.original_request_url}")
    lines.append(_flag_line(
        tab.user_agent_overridden,
        "The user-agent was not overridden.",
        "The user-agent was overridden.",
        "User-agent",
    ))
    lines.append("States:")
    return _join(lines) + render(tab.state)


def _render_entry(number: int, entry: StateEntry) -> List[str]:
    pad = INDENT * 2
    lines = [
        f"{INDENT}State {number}:",
        f"{pad}Value A: {entry.value_a}",
        f"{pad}Value B: {entry.value_b}",
        f"{pad}Value C: {entry.value_c}",
        f"{pad}Value D: {hex_dump(entry.value_d)}",
        f"{pad}Value E:",
    ]
    lines.extend(f"{pad}{INDENT}Index {i}: {text}" for i, text in enumerate(entry.value_e))
    lines.extend([
        f"{pad}Value F: {_hex64(entry.value_f)}",
        f"{pad}Value G: {hex_dump(entry.value_g)}",
        f"{pad}Value H: {_hex64(entry.value_h)}",
        f"{pad}Value I: {_hex64(entry.value_i)}",
        f"{pad}Value J: {hex_dump(entry.value_j)}",
        f"{pad}Value K: {hex_dump(entry.value_k)}",
        f"{pad}Value L: {entry.value_l}",
    ])
    return lines


@render.register
def _render_tab_state(state: TabState) -> str:
    lines = [f"{INDENT}Version: {state.version}"]
    if state.has_entries:
        for number, entry in enumerate(state.entries):
            lines.extend(_render_entry(number, entry))
        return _join(lines)
    if state.degraded:
        lines.append(f"{INDENT}Entry list could not be decoded; raw bytes follow.")
    lines.append(f"{INDENT}Value: {hex_dump(state.opaque)}")
    return _join(lines)


def render_url_list(session: SessionFile) -> str:
    """List every Tab URL in command order under a ``URLs:`` header."""
    if not session.is_snss:
        return ""
    return _join(["URLs:"] + [tab.url for tab in session.tabs])
