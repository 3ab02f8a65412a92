"""
Page transition bitfield stored in each Tab.

The low byte is a mutually exclusive core transition; bits 24-31 are
qualifier flags that combine freely with the core value and each other.
"""

from __future__ import annotations

from enum import IntEnum, IntFlag
from typing import List, Optional, Tuple

CORE_MASK = 0xFF
QUALIFIER_MASK = 0xFF000000


class CoreTransition(IntEnum):
    LINK = 0
    TYPED = 1
    BOOKMARK = 2
    SUBFRAME = 3
    MANUAL = 4
    SUGGESTION = 5
    START_PAGE = 6
    SUBMIT = 7
    RELOAD = 8
    KEYWORD_SEARCH = 9
    KEYWORD = 10


class TransitionQualifier(IntFlag):
    BACK_FWD = 0x01000000
    ADDRESS_BAR = 0x02000000
    HOME_PAGE = 0x04000000
    START_NAV = 0x10000000
    LAST_REDIRECT = 0x20000000
    CLIENT_REDIRECT = 0x40000000
    SERVER_REDIRECT = 0x80000000


# (display name, description) per core value
CORE_TRANSITIONS = {
    CoreTransition.LINK: ("Link", "User arrived at this page by clicking a link on another page."),
    CoreTransition.TYPED: ("Typed", "User typed URL into the Omnibar, or clicked a suggested URL in the Omnibar."),
    CoreTransition.BOOKMARK: ("BookMark", 'User arrived at page through a bookmark or similar (eg. "most visited" suggestions on a new tab).'),
    CoreTransition.SUBFRAME: ("SubFrame", "Automatic navigation within a sub frame (eg an embedded ad)."),
    CoreTransition.MANUAL: ("Manual", "Manual navigation in a sub frame."),
    CoreTransition.SUGGESTION: ("Suggestion", "User selected suggestion from Omnibar (ie. typed part of an address or search term then selected a suggestion which was not a URL)."),
    CoreTransition.START_PAGE: ("StartPage", "Start page (or specified as a command line argument)."),
    CoreTransition.SUBMIT: ("Submit", "User arrived at this page as a result of submitting a form."),
    CoreTransition.RELOAD: ("ReLoad", "Page was reloaded; either by clicking the refresh button, hitting F5, hitting enter in the address bar or as result of restoring a previous session."),
    CoreTransition.KEYWORD_SEARCH: ("KeyWordSearch", "Generated as a result of a keyword search, not using the default search provider (for example using tab-to-search on Wikipedia)."),
    CoreTransition.KEYWORD: ("KeyWord", "Visit to http:// + keyword generated alongside a keyword search."),
}

# Bit-index order
QUALIFIERS = (
    (TransitionQualifier.BACK_FWD, "BackFwd", "User used the back or forward buttons to arrive at this page."),
    (TransitionQualifier.ADDRESS_BAR, "AddressBar", "User used the address bar to trigger this navigation."),
    (TransitionQualifier.HOME_PAGE, "HomePage", "User is navigating to the homepage."),
    (TransitionQualifier.START_NAV, "StartNav", "The beginning of a navigation chain."),
    (TransitionQualifier.LAST_REDIRECT, "LastRedirect", "Last transition in a redirect chain."),
    (TransitionQualifier.CLIENT_REDIRECT, "ClientRedirect", "Transition was a client-side redirect (eg. caused by JavaScript or a meta-tag redirect)."),
    (TransitionQualifier.SERVER_REDIRECT, "ServerRedirect", "Transition was a server-side redirect (ie a redirect specified in the HTTP response header)."),
)


def core_transition(value: int) -> int:
    """Return the core transition number (low byte)."""
    return value & CORE_MASK


def core_transition_name(value: int) -> Optional[str]:
    known = CORE_TRANSITIONS.get(core_transition(value))
    return known[0] if known else None


def _set_qualifiers(value: int) -> List[Tuple[str, str]]:
    value &= QUALIFIER_MASK
    return [(name, text) for flag, name, text in QUALIFIERS if value & flag == flag]


def qualifiers(value: int) -> List[str]:
    """Return names of the qualifier flags set in ``value``, in bit-index order."""
    return [name for name, _ in _set_qualifiers(value)]


def describe(value: int) -> List[str]:
    """
    Human-readable decomposition of a transition value.

    One line for the core transition, then one line per set qualifier.
    Unknown core values are shown numerically.
    """
    core = core_transition(value)
    name = core_transition_name(value)
    if name is None:
        lines = [f"{core}."]
    else:
        lines = [f"{name}: {CORE_TRANSITIONS[CoreTransition(core)][1]}"]
    lines.extend(f"{name}: {text}" for name, text in _set_qualifiers(value))
    return lines
