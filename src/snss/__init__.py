"""
SNSS session file decoder.

Public surface::

    from snss import decode, render

    session = decode("Current Session")
    for command in session.commands:
        print(render(command))
"""

from .models import (  # noqa: F401
    Command,
    RawContent,
    SessionFile,
    StateEntry,
    Tab,
    TabState,
)
from .render import hex_dump, render, render_url_list  # noqa: F401
from .snss_parser import classify_command, decode, decode_data, decode_file  # noqa: F401

__all__ = [
    "Command",
    "RawContent",
    "SessionFile",
    "StateEntry",
    "Tab",
    "TabState",
    "classify_command",
    "decode",
    "decode_data",
    "decode_file",
    "hex_dump",
    "render",
    "render_url_list",
]
