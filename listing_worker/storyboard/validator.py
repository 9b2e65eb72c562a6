"""
Order Validator — coarse circuit breaker over the AI-proposed ordering.

An imperfect but plausible order is kept; only when more than
RESEQUENCE_THRESHOLD of the transitions are badly out of order is the whole
storyboard resequenced.
"""

import os

# ── Config ───────────────────────────────────────────────────────────────────

RESEQUENCE_THRESHOLD = float(os.getenv("STORYBOARD_RESEQUENCE_THRESHOLD", "0.3"))


def needs_resequencing(ratio: float, threshold: float = RESEQUENCE_THRESHOLD) -> bool:
    return ratio > threshold
