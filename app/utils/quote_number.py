import random
import time


def generate_quote_number(now_ms: int | None = None) -> str:
    """Q-<epoch milliseconds>-<three random digits>, e.g. Q-1718000000000-042."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"Q-{now_ms}-{random.randint(0, 999):03d}"
