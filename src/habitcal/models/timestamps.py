"""Epoch-millisecond timestamps used for created_at/updated_at columns."""

from __future__ import annotations

import time


def now_millis() -> int:
    return int(time.time() * 1000)
