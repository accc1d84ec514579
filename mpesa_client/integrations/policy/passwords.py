"""
Lipa na M-Pesa Online password helpers.

M-Pesa expects:
- Timestamp: YYYYMMDDHHMMSS, 14 digits, no separators
- Password: base64(BusinessShortCode + PassKey + Timestamp), concatenated as one string
"""
from __future__ import annotations

import base64
from datetime import datetime
from typing import Optional, Tuple, Union

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def format_timestamp(moment: Optional[datetime] = None) -> str:
    return (moment or datetime.now()).strftime(TIMESTAMP_FORMAT)


def generate_password(short_code: Union[str, int], pass_key: str, timestamp: str) -> str:
    raw = f"{short_code}{pass_key}{timestamp}"
    return base64.b64encode(raw.encode("utf-8")).decode("utf-8")


def password_and_timestamp(
    short_code: Union[str, int],
    pass_key: str,
    moment: Optional[datetime] = None,
) -> Tuple[str, str]:
    """Return ``(password, timestamp)`` derived from the same instant."""
    timestamp = format_timestamp(moment)
    return generate_password(short_code, pass_key, timestamp), timestamp
