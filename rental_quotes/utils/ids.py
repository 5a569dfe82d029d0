import time
import uuid


def new_quote_id() -> str:
    # Millisecond timestamp first so ids sort by creation time.
    return f"{time.time_ns() // 1_000_000:013d}-{uuid.uuid4().hex[:8]}"


def new_vehicle_id() -> str:
    return str(uuid.uuid4())
