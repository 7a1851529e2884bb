from __future__ import annotations

import secrets
import time


def new_id(prefix: str) -> str:
    """Build a record id like ``demand-1718031234567-a1b2c3``.

    The millisecond part keeps ids sortable by creation time; the random
    suffix avoids collisions between requests in the same millisecond.
    """
    return f"{prefix}-{int(time.time() * 1000)}-{secrets.token_hex(3)}"
