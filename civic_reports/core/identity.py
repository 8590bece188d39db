# civic_reports/core/identity.py
"""Device identity.

There are no accounts: the identifier the client reads from its device is the
user key. The server takes the claimed value as-is and does not verify that it
belongs to the caller.
"""
from typing import Optional

from fastapi import Header

DEVICE_HEADER = "X-Device-Id"


def resolve_device_id(*candidates: Optional[str]) -> Optional[str]:
    """First non-blank candidate, stripped, or None."""
    for value in candidates:
        if value is None:
            continue
        value = str(value).strip()
        if value:
            return value
    return None


def device_header(x_device_id: Optional[str] = Header(default=None, alias=DEVICE_HEADER)) -> Optional[str]:
    return resolve_device_id(x_device_id)
