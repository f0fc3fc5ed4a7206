from __future__ import annotations

import hashlib
import hmac
from typing import Optional


def md5_hex(value: str) -> str:
    """Lowercase hex MD5 of a UTF-8 string; the at-rest password digest."""
    return hashlib.md5(value.encode("utf-8")).hexdigest()


def equal_ignore_case(left: Optional[str], right: Optional[str]) -> bool:
    if left is None or right is None:
        return False
    return hmac.compare_digest(left.lower().encode("utf-8"), right.lower().encode("utf-8"))
