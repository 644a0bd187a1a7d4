from __future__ import annotations

import os
import time
import uuid


def epoch_millis() -> int:
    """Milliseconds since the Unix epoch, used to build unique public names."""
    return int(time.time() * 1000)


def receipt_number() -> str:
    """Receipt numbers are `REC-<epoch millis>`, e.g. `REC-1732310400000`."""
    return f"REC-{epoch_millis()}"


def generate_uuid7() -> str:
    """
    Time-ordered UUIDv7 string for log tables.

    48-bit millisecond timestamp, 4-bit version, 74 random bits.
    """
    raw = bytearray(epoch_millis().to_bytes(6, "big", signed=False) + os.urandom(10))
    raw[6] = (raw[6] & 0x0F) | 0x70
    raw[8] = (raw[8] & 0x3F) | 0x80
    return str(uuid.UUID(bytes=bytes(raw)))
