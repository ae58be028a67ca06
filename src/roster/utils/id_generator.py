import time
from typing import Iterable


def new_record_id(existing_ids: Iterable[int] = ()) -> int:
    """Millisecond timestamp id, bumped past the largest existing id on collision."""
    candidate = time.time_ns() // 1_000_000
    highest = max(existing_ids, default=None)
    if highest is not None and candidate <= highest:
        return highest + 1
    return candidate
