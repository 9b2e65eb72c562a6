"""
Scene Ranker — measures how far a scene order strays from the walkthrough.

Only adjacent transitions are compared, with a tolerance band: two bedrooms
swapped or a dining room shown just after the kitchen does not count, a
backyard before the entry does.
"""

import os
from typing import Iterable, Sequence, Tuple

from .taxonomy import canonical_priority

# ── Config ───────────────────────────────────────────────────────────────────

INVERSION_SLACK = int(os.getenv("STORYBOARD_INVERSION_SLACK", "5"))


def count_inversions(room_types: Iterable[str], slack: int = INVERSION_SLACK) -> int:
    """
    Count adjacent pairs (i, i+1) where priority(i) > priority(i+1) + slack.

    Args:
        room_types: Room label of each scene, in storyboard order.
        slack:      Rank tolerance before a backwards step counts.
    """
    priorities = [canonical_priority(rt) for rt in room_types]
    return sum(
        1
        for current, following in zip(priorities, priorities[1:])
        if current > following + slack
    )


def inversion_ratio(inversions: int, scene_count: int) -> float:
    """Normalize an inversion count by the number of adjacent pairs."""
    return inversions / max(scene_count - 1, 1)


def rank_scenes(
    room_types: Sequence[str], slack: int = INVERSION_SLACK
) -> Tuple[int, float]:
    """Returns (inversions, inversion_ratio) for one storyboard order."""
    inversions = count_inversions(room_types, slack=slack)
    return inversions, inversion_ratio(inversions, len(room_types))
