"""
Exceptions raised inside the SNSS decoder.

None of these escape the public ``decode*`` functions: each is caught by the
decoder that owns the failing record and turned into a degraded value.
"""


class SnssError(Exception):
    """Base exception for SNSS decoding errors."""
    pass


class OutOfBoundsError(SnssError):
    """Raised when a read would fall outside its buffer."""

    def __init__(self, offset: int, size: int, available: int):
        self.offset = offset
        self.size = size
        self.available = available
        super().__init__(
            f"Read of {size} bytes at offset {offset} exceeds buffer of {available} bytes"
        )


class MalformedRecordError(SnssError):
    """Raised when a Tab or TabState offset/length computation is inconsistent."""
    pass


class TruncatedStreamError(SnssError):
    """Raised when a command length prefix declares more bytes than remain."""

    def __init__(self, offset: int, declared: int, available: int):
        self.offset = offset
        self.declared = declared
        self.available = available
        super().__init__(
            f"Command at offset {offset} declares {declared} bytes, {available} available"
        )
