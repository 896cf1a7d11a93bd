"""Utilities for hashing, ids and audit timestamps."""

import hashlib
import math
import uuid
from datetime import datetime, timezone


def hash_text(text: str) -> str:
    """Compute SHA256 hash of text. Deterministic."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def iso_now() -> str:
    """Current UTC timestamp as ISO string."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def new_id() -> str:
    return str(uuid.uuid4())


def round_half_up(value: float) -> int:
    """Round .5 towards +inf (builtin round() rounds half to even)."""
    return int(math.floor(value + 0.5))
