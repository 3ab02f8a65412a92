"""
Core Enumerations

Discriminants for the decoded SNSS tree. StrEnum values serialize naturally
and compare equal to their plain string form.
"""

from enum import StrEnum


class DecodeStatus(StrEnum):
    """Outcome of decoding one SNSS byte source."""

    COMPLETE = "complete"
    TRUNCATED = "truncated"  # partial result, commands decoded so far are kept
    HEADER_TRUNCATED = "header_truncated"  # magic present, version word cut short
    NOT_SNSS = "not_snss"    # magic mismatch, valid negative result


class ContentKind(StrEnum):
    """Which shape a command's content has."""

    TAB = "tab"
    RAW = "raw"


class StateLayout(StrEnum):
    """Which shape a TabState body has."""

    ENTRIES = "entries"
    OPAQUE = "opaque"
