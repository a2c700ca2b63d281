"""
Digest primitive: MD5 rendered as uppercase hex

MD5 is what the counterparty verifies against, not a security choice.
"""

import hashlib


def md5_upper_hex(canonical: str) -> str:
    """Compute MD5 of the UTF-8 bytes of canonical, return 32 uppercase hex chars."""
    return hashlib.md5(canonical.encode("utf-8"), usedforsecurity=False).hexdigest().upper()
