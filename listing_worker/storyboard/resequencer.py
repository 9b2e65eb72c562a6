"""
Deterministic Resequencer — the fallback walkthrough order.

Stable-sorts scenes by canonical room priority and renumbers scene_order
1..N. Returns new scene objects; the caller's list is left untouched.
"""

import logging
from typing import Mapping, Sequence

from .models import StoryboardScene
from .taxonomy import UNKNOWN_ROOM, canonical_priority

logger = logging.getLogger(__name__)


def renumber(scenes: Sequence[StoryboardScene]) -> list[StoryboardScene]:
    """Copy scenes with scene_order set to 1..N in list order."""
    return [
        scene.model_copy(update={"scene_order": position})
        for position, scene in enumerate(scenes, start=1)
    ]


def resequence(
    scenes: Sequence[StoryboardScene],
    room_types_by_asset: Mapping[str, str],
) -> list[StoryboardScene]:
    """
    Reorder scenes by walkthrough priority of their resolved room type.

    Python's sort is stable, so scenes in the same room tier keep their
    relative input order and repeated runs give identical output.

    Args:
        scenes:              Scenes in their current order.
        room_types_by_asset: asset_id → room type; missing assets are unknown.

    Returns:
        A new list with scene_order renumbered 1..N.
    """
    ordered = sorted(
        scenes,
        key=lambda s: canonical_priority(room_types_by_asset.get(s.asset_id, UNKNOWN_ROOM)),
    )
    logger.info(f"Resequenced {len(ordered)} scene(s) by canonical walkthrough order")
    return renumber(ordered)
